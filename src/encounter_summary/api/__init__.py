"""HTTP API for encounter summaries."""

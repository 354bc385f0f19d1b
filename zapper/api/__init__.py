"""HTTP API for zap previews."""

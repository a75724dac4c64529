"""HTTP API — FastAPI routes, dependencies and error handlers."""

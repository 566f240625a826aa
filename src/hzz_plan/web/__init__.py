"""FastAPI handlers for draft generation and validation."""

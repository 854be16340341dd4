"""FastAPI HTTP interface."""

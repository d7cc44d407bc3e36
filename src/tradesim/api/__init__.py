"""API layer - FastAPI routers and schemas."""

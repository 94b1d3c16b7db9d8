"""HTTP service: FastAPI app, pydantic models, in-memory document store."""

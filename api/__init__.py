"""AI Pipe HTTP layer: FastAPI app, routers, schemas and services."""

"""Server module - FastAPI application and routers."""

"""OrderFlow Dashboard API - Main Entry Point."""

import os

from orderflow.config.settings import settings
from orderflow.server.app import create_app

# Create FastAPI application
app = create_app()


def run() -> None:
    """Run the API with uvicorn."""
    import uvicorn

    reload = os.getenv("RELOAD", "false").lower() == "true"

    uvicorn.run(
        "orderflow.main:app",
        host=settings.host,
        port=settings.port,
        reload=reload,
        log_level=settings.log_level.lower(),
        timeout_graceful_shutdown=30,
        timeout_keep_alive=5,
        access_log=False,  # Structured logging instead of uvicorn access log
    )


if __name__ == "__main__":
    run()

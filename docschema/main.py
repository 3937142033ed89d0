"""
main.py

This is the main entry point of the FastAPI application.
Here we create the FastAPI app and register all API routes.

This file does NOT contain business logic.
It only wires everything together.
"""

import logging

from fastapi import FastAPI

# Import API routers
from docschema.api.health import router as health_router
from docschema.api.templates import router as templates_router
from docschema.api.schema import router as schema_router
from docschema.api.process import router as process_router
from docschema.config import LOG_LEVEL


def create_app() -> FastAPI:
    """
    Creates and returns the FastAPI application instance.
    This function helps keep the app creation clean and testable.
    """
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    app = FastAPI(
        title="Document Schema Builder",
        description="Build extraction field schemas, compile them to JSON schema and process documents",
        version="1.0.0"
    )

    # Register API routes
    app.include_router(health_router, prefix="/health", tags=["Health"])
    app.include_router(templates_router, prefix="/templates", tags=["Templates"])
    app.include_router(schema_router, prefix="/schema", tags=["Schema"])
    app.include_router(process_router, prefix="/process", tags=["Process"])

    logging.getLogger(__name__).info("Document Schema Builder app created")
    return app


# Create the FastAPI app instance
app = create_app()

"""
FastAPI Application

Main application setup and configuration.

Usage:
    uvicorn api.app:app --reload

    # Or run directly
    python -m api.app
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routes import health, import_export, employees, files
from api.errors import APIError, api_error_handler, generic_error_handler

from core.config.runtime import RuntimeConfig, load_runtime_config
from core.store.database import EmployeeStore


def _configure_logging(level_name: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level_name.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def create_app(config: RuntimeConfig | None = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        config: Runtime configuration; loaded from config files and
            NOTES_* environment variables when omitted
    """
    if config is None:
        config = load_runtime_config()
    _configure_logging(config.log_level)

    app = FastAPI(
        title="Employee Notes API",
        description="""
HTTP API for employee notes, praise, feedback and performance reviews.

## Endpoints

- **GET /api/import-export/export** - Download the dataset
- **POST /api/import-export/import** - Replace the dataset from an upload
- **/api/employees** - Employee records and their entries
- **/api/files** - Upload and download supporting documents
- **GET /health** - Health check

## Export Formats

- `json` - The dataset document alone (legacy)
- `zip` - Archive bundling the dataset, attachment files and a manifest
        """,
        version="2.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.state.config = config
    app.state.store = EmployeeStore(config.storage.database_path)

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register exception handlers
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    # Include routers
    app.include_router(health.router)
    app.include_router(import_export.router)
    app.include_router(employees.router)
    app.include_router(files.router)

    return app


# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)

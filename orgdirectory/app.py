from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from orgdirectory.application import get_directory_service
from orgdirectory.core.config import cors_origins
from orgdirectory.core.errors import (
    DirectoryError,
    InvalidReferenceError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from orgdirectory.core.logsetup import configure_logging
from orgdirectory.routes import companies, departments, employees, scope

_STATUS_BY_ERROR: list[tuple[type[DirectoryError], int]] = [
    (NotFoundError, 404),
    (InvalidReferenceError, 409),
    (ValidationError, 422),
    (PersistenceError, 503),
]


def _status_for(exc: DirectoryError) -> int:
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return 400


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(title="Org Directory API", version="0.1.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(DirectoryError)
    async def directory_error_handler(request: Request, exc: DirectoryError) -> JSONResponse:
        return JSONResponse(status_code=_status_for(exc), content={"detail": str(exc)})

    app.include_router(companies.router, prefix="/api")
    app.include_router(employees.router, prefix="/api")
    app.include_router(departments.router, prefix="/api")
    app.include_router(scope.router, prefix="/api")

    @app.get("/", include_in_schema=False)
    async def root() -> JSONResponse:
        """Provide a lightweight landing page for container checks."""
        service = get_directory_service()
        return JSONResponse(
            {
                "message": "Org Directory API",
                "docs": "/docs",
                "health": "/api/departments",
                "storage": type(service.backend).__name__,
            }
        )

    return app


app = create_app()

from fastapi import FastAPI

from .exports import router as exports_router
from .imports import router as imports_router
from .vacation_plans import router as vacation_plans_router


def register_routes(app: FastAPI) -> None:
    """Register every API router on the FastAPI application."""

    app.include_router(imports_router)
    app.include_router(exports_router)
    app.include_router(vacation_plans_router)

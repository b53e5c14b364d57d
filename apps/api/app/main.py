"""FastAPI application entrypoint."""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.errors import ApiError
from app.repositories.memory import InMemoryStore
from app.routes import admin_router, blog_router, hotels_router, posts_router
from app.schemas.error import ErrorResponse


def _validation_error_fields(exc: RequestValidationError) -> list[str]:
    fields: list[str] = []
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part != "body"]
        fields.append(".".join(location) or "body")
    return fields


def create_app(store: InMemoryStore | None = None) -> FastAPI:
    app = FastAPI(title="Hotel Blog API", version="1.0.0")
    app.state.store = store if store is not None else InMemoryStore()

    @app.exception_handler(ApiError)
    async def handle_api_error(_, exc: ApiError) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.payload.model_dump(mode="json", exclude_none=True),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(_: Request, exc: RequestValidationError) -> JSONResponse:
        payload = ErrorResponse(
            code="VALIDATION_ERROR",
            message="Invalid request payload",
            details={"fields": _validation_error_fields(exc)},
        )
        return JSONResponse(status_code=400, content=payload.model_dump())

    api_prefix = "/api/v1"
    app.include_router(blog_router, prefix=api_prefix)
    app.include_router(posts_router, prefix=api_prefix)
    app.include_router(hotels_router, prefix=api_prefix)
    app.include_router(admin_router, prefix=api_prefix)

    return app


app = create_app()

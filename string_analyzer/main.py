import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from string_analyzer.config import settings
from string_analyzer.errors import StringAnalyzerError
from string_analyzer.logging import RequestLoggingMiddleware, init_logging
from string_analyzer.routes import router
from string_analyzer.store import StringStore

logger = logging.getLogger("string_analyzer")


def _validation_status(request: Request, exc: RequestValidationError) -> tuple[int, str]:
    path = request.url.path
    errors = exc.errors()

    if request.method == "POST" and path.endswith("/strings"):
        # Missing required field or invalid JSON -> 400, wrong type -> 422
        missing = any(err.get("type") in {"missing", "field_required"} for err in errors)
        # A JSON array or scalar body has no "value" field at all
        not_an_object = any(
            err.get("type") in {"model_attributes_type", "dict_type"} and tuple(err.get("loc", ())) == ("body",)
            for err in errors
        )
        missing = missing or not_an_object
        json_invalid = any(err.get("type") in {"json_invalid", "value_error.jsondecode"} for err in errors)
        if json_invalid:
            return 400, "Invalid JSON body"
        if missing:
            return 400, 'Missing "value" field'
        return 422, '"value" must be a string'

    if request.method == "GET" and path.endswith("/strings/filter-by-natural-language"):
        return 400, 'Missing or invalid "query" parameter'

    return 400, "Invalid request parameters"


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(StringAnalyzerError)
    async def string_analyzer_error_handler(request: Request, exc: StringAnalyzerError):
        logger.warning(
            "%s: %s %s -> %s | %s",
            type(exc).__name__,
            request.method,
            request.url.path,
            exc.status_code,
            exc.message,
        )
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        status, message = _validation_status(request, exc)
        logger.warning(
            "ValidationError: %s %s -> %s | errors=%s",
            request.method,
            request.url.path,
            status,
            exc.errors(),
        )
        return JSONResponse(status_code=status, content={"error": message})

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        body = {"error": exc.detail if isinstance(exc.detail, str) else "Error"}
        return JSONResponse(status_code=exc.status_code, content=body)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception: %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})


def create_app(store: Optional[StringStore] = None) -> FastAPI:
    """Build the application around ``store`` (a fresh one when omitted)."""
    init_logging()

    app = FastAPI(
        title=settings.APP_NAME,
        description="Analyze and store string properties",
        version=settings.APP_VERSION,
    )
    app.state.store = store if store is not None else StringStore()

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _register_exception_handlers(app)
    app.include_router(router)
    logger.info("%s %s ready", settings.APP_NAME, settings.APP_VERSION)
    return app


app = create_app()

"""FastAPI application factory and configuration."""

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from prometheus_fastapi_instrumentator import Instrumentator
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..protobufs import EnumResolver, load_enum_resolver

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Not Found"
BAD_REQUEST_MESSAGE = "Bad Request"
SERVER_ERROR_MESSAGE = "Something went wrong, try again later."


def create_app(
    title: str = "Meshtastic Map API",
    version: str = "1.0.0",
    enable_metrics: bool = True,
    enable_compression: bool = True,
    static_dir: Optional[str] = None,
    enum_resolver: Optional[EnumResolver] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        title: API title for OpenAPI documentation
        version: API version
        enable_metrics: Whether to enable Prometheus metrics
        enable_compression: Whether to gzip responses
        static_dir: Optional directory of front-end files served at /
        enum_resolver: Enum tables; loaded from the protobufs when omitted

    Returns:
        Configured FastAPI application

    Raises:
        RuntimeError: If the protobuf enum tables cannot be loaded
    """
    app = FastAPI(
        title=title,
        version=version,
        description="""
# Meshtastic Map API

Read-only access to Meshtastic nodes, telemetry, waypoints, messages and
traceroutes collected from MQTT.

- Node ids are the numeric Meshtastic node number (e.g. `2882400004` for `!abcdef04`)
- Node id fields in responses are serialized as strings
- `count` limits list endpoints to the newest N rows
        """,
        license_info={
            "name": "MIT",
        },
        openapi_tags=[
            {"name": "nodes", "description": "Nodes and their neighbours"},
            {"name": "metrics", "description": "Device, environment, power and MQTT metrics per node"},
            {"name": "traceroutes", "description": "Traceroute replies"},
            {"name": "messages", "description": "Text messages"},
            {"name": "statistics", "description": "Network-wide statistics"},
            {"name": "waypoints", "description": "Active waypoints"},
        ],
    )

    # Fails here, before serving anything, if the protobufs are unusable
    app.state.enum_resolver = enum_resolver or load_enum_resolver()

    # =========================================================================
    # Middleware
    # =========================================================================
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    if enable_compression:
        app.add_middleware(GZipMiddleware, minimum_size=1000)

    # =========================================================================
    # Exception Handlers
    # =========================================================================

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        """Render HTTP errors (mostly 404) as {"message": ...}."""
        message = NOT_FOUND_MESSAGE if exc.status_code == status.HTTP_404_NOT_FOUND else str(exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": message},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Reject malformed path and query parameters."""
        errors = []
        for error in exc.errors():
            error_dict = {
                "loc": list(error.get("loc", [])),
                "msg": str(error.get("msg", "")),
                "type": str(error.get("type", "")),
            }
            if "input" in error:
                error_dict["input"] = str(error["input"])
            errors.append(error_dict)

        logger.warning(f"Validation error on {request.url}: {len(errors)} error(s)")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": BAD_REQUEST_MESSAGE, "detail": errors},
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Log unexpected exceptions and hide them from the caller."""
        logger.error(f"Unexpected error on {request.url}: {exc}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": SERVER_ERROR_MESSAGE},
        )

    # =========================================================================
    # Routers
    # =========================================================================

    from .routes import index, messages, metrics, nodes, statistics, traceroutes, waypoints

    app.include_router(index.router)
    app.include_router(nodes.router, prefix="/api/v1", tags=["nodes"])
    app.include_router(metrics.router, prefix="/api/v1", tags=["metrics"])
    app.include_router(traceroutes.router, prefix="/api/v1", tags=["traceroutes"])
    app.include_router(messages.router, prefix="/api/v1", tags=["messages"])
    app.include_router(statistics.router, prefix="/api/v1", tags=["statistics"])
    app.include_router(waypoints.router, prefix="/api/v1", tags=["waypoints"])

    # =========================================================================
    # Prometheus Metrics
    # =========================================================================

    if enable_metrics:
        instrumentator = Instrumentator(
            should_group_status_codes=True,
            should_ignore_untemplated=True,
            should_respect_env_var=False,
            should_instrument_requests_inprogress=True,
            excluded_handlers=["/metrics"],
            inprogress_name="meshtastic_map_inprogress",
            inprogress_labels=True,
        )
        instrumentator.instrument(app).expose(app, endpoint="/metrics")
        logger.info("Prometheus metrics enabled at /metrics")

    # =========================================================================
    # Static Front End
    # =========================================================================

    # Mounted last so it only sees paths no route claimed
    if static_dir:
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")
        logger.info(f"Serving static files from {static_dir}")

    logger.info(f"FastAPI application created: {title} v{version}")

    return app

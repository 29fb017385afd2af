# marketplace/main.py

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from marketplace.api.v1.api import api_router
from marketplace.core.config import settings
from marketplace.core.errors import register_exception_handlers
from marketplace.core.logging import configure_logging
from marketplace.db.init_db import check_connection, init_db

logger = logging.getLogger(__name__)

ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"]


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.log_level)
    try:
        check_connection()
        init_db()
    except SQLAlchemyError as exc:
        logger.critical("Database unreachable at startup: %s", exc)
        raise RuntimeError("database unreachable") from exc
    logger.info("%s %s ready", settings.PROJECT_NAME, settings.VERSION)
    yield
    logger.info("Shutting down")


def create_application() -> FastAPI:
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        debug=settings.debug,
        lifespan=lifespan,
    )

    # ---------- CORS ----------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.backend_cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ---------- ERRORS ----------
    register_exception_handlers(app)

    # ---------- ROUTERS ----------
    app.include_router(api_router, prefix=settings.api_prefix)

    @app.get("/health", include_in_schema=False)
    def health():
        return {"status": "ok"}

    # Must stay last: answers every path and method nothing else matched.
    @app.api_route("/{path:path}", methods=ALL_METHODS, include_in_schema=False)
    def route_not_found(path: str):
        return JSONResponse(
            status_code=settings.unmatched_route_status,
            content={"message": "Page/Route not found"},
        )

    return app


app = create_application()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "marketplace.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )

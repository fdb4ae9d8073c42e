import asyncio
import logging
import time
import uuid
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.engine import Engine
from sqlmodel import Session

from . import database
from .api import inventory_router, products_router, stores_router
from .core import RateLimitMiddleware, Settings, build_limiter, settings
from .core.errors import error_response, register_exception_handlers
from .core.logging_config import setup_logging
from .seed import seed_database

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"

SECURE_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Resource-Policy": "same-origin",
}


def create_app(app_settings: Settings = settings, engine: Optional[Engine] = None) -> FastAPI:
    setup_logging(app_settings.LOG_LEVEL, app_settings.LOG_FILE)

    if engine is None:
        if app_settings is settings:
            engine = database.engine
        else:
            engine = database.build_engine(app_settings.DATABASE_URL, echo=app_settings.DATABASE_ECHO)

    app = FastAPI(title=app_settings.PROJECT_NAME, version=app_settings.API_VERSION)
    app.state.settings = app_settings
    app.state.engine = engine

    # Setup rate limiting
    app.state.limiter = build_limiter(app_settings)
    register_exception_handlers(app)

    @app.on_event("startup")
    def on_startup():
        database.create_db_and_tables(engine)
        logger.info("Database tables ready")
        if app_settings.SEED_ON_STARTUP:
            with Session(engine) as session:
                seed_database(session)

    # Registered before request_context so that request_context runs outside it
    app.add_middleware(RateLimitMiddleware)

    @app.middleware("http")
    async def request_context(request: Request, call_next):
        request_id = request.headers.get("x-request-id") or uuid.uuid4().hex
        request.state.request_id = request_id
        started = time.perf_counter()

        try:
            response = await asyncio.wait_for(call_next(request), timeout=app_settings.REQUEST_TIMEOUT_SECONDS)
        except asyncio.TimeoutError:
            logger.warning("Request %s %s timed out [%s]", request.method, request.url.path, request_id)
            response = error_response("Request timed out", status.HTTP_504_GATEWAY_TIMEOUT)

        response.headers["X-Request-ID"] = request_id
        for header, value in SECURE_HEADERS.items():
            response.headers.setdefault(header, value)

        logger.info(
            "%s %s %s %.1fms [%s]",
            request.method,
            request.url.path,
            response.status_code,
            (time.perf_counter() - started) * 1000,
            request_id,
        )
        return response

    # Setup CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.get(f"{API_PREFIX}/alive")
    def alive():
        return {"status": "success", "message": "Server is running"}

    # Include routers
    app.include_router(stores_router, prefix=f"{API_PREFIX}/stores", tags=["Stores"])
    app.include_router(products_router, prefix=f"{API_PREFIX}/products", tags=["Products"])
    app.include_router(inventory_router, prefix=f"{API_PREFIX}/inventory", tags=["Inventory"])

    return app


app = create_app()


def run() -> None:
    uvicorn.run("store_inventory.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()

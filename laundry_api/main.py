# laundry_api/main.py
import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from laundry_api.auth import TokenService
from laundry_api.config import Settings, get_settings
from laundry_api.database import build_engine, build_session_factory, init_db
from laundry_api.errors import register_exception_handlers
from laundry_api.routes import bookings, users

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
        stream=sys.stdout,
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    engine = build_engine(settings.DATABASE_URL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # A database we cannot reach is fatal: no degraded serving
        try:
            init_db(engine)
        except Exception:
            logger.critical("Database connection failed, refusing to start", exc_info=True)
            raise
        yield
        engine.dispose()

    app = FastAPI(
        title="Laundry Booking System",
        description="Book time slots on shared laundry machines",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.token_service = TokenService.from_settings(settings)

    register_exception_handlers(app)

    # Only the configured front-ends may send credentialed requests; added
    # last so it wraps the error middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    # Registering Routers
    app.include_router(users.router)
    app.include_router(bookings.router)

    @app.get("/", tags=["Root"], response_class=PlainTextResponse)
    def read_root():
        return "Laundry backend is running!"

    return app


def run() -> None:
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)
    logger.info("Starting server on %s:%s", settings.HOST, settings.PORT)
    uvicorn.run(create_app(settings), host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()

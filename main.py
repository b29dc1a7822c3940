import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from app.config import get_settings
from app.infrastructure.database import engine, initialize_database
from app.infrastructure.payment_gateway import RazorpayGateway
from app.infrastructure.realtime import RealtimeHub, RealtimePublisher
from app.infrastructure.storage import LOCAL_URL_PREFIX, local_root
from app.interfaces.api.errors import register_exception_handlers
from app.interfaces.api.routes import register_routes


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create missing tables on startup and release the pool on shutdown."""

    initialize_database()
    yield
    engine.dispose()


def create_app() -> FastAPI:
    """Build and configure the FastAPI application."""

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(title="Campus API", lifespan=lifespan)
    app.state.realtime = RealtimePublisher(RealtimeHub())
    app.state.payment_gateway = RazorpayGateway(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.mount(LOCAL_URL_PREFIX, StaticFiles(directory=local_root()), name="uploads")
    register_routes(app)
    return app


app = create_app()

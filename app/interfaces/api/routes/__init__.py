from fastapi import FastAPI

from .admin import router as admin_router
from .auth import router as auth_router
from .chat import router as chat_router
from .common import router as common_router
from .email import router as email_router
from .events import router as events_router
from .health import router as health_router
from .notifications import router as notifications_router
from .payment_gateway import router as payment_gateway_router
from .payments import router as payments_router
from .realtime import router as realtime_router
from .student import router as student_router
from .teacher import router as teacher_router
from .uploads import router as uploads_router

API_PREFIX = "/api"


def register_routes(app: FastAPI) -> None:
    """Register every API router on the FastAPI application."""

    app.include_router(health_router)
    for router in (
        auth_router,
        admin_router,
        teacher_router,
        student_router,
        common_router,
        uploads_router,
        events_router,
        notifications_router,
        chat_router,
        payments_router,
        payment_gateway_router,
        email_router,
        realtime_router,
    ):
        app.include_router(router, prefix=API_PREFIX)

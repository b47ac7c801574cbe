from app.api.http.health import router as health_router
from app.api.http.documents import router as documents_router
from app.api.http.notifications import router as notifications_router

__all__ = [
    "health_router",
    "documents_router",
    "notifications_router"
]

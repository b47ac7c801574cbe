from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import settings
from app.core.db import init_models
from app.api.http.health import router as health_router
from app.api.http.documents import router as documents_router
from app.api.http.notifications import router as notifications_router

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_models()
    logger.info("DocAccess started")
    yield


app = FastAPI(
    title="DocAccess",
    description="Управление доступом к документам совместного редактирования",
    version="1.0.0",
    lifespan=lifespan
)

# Настройка CORS для работы с frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # В продакшене указать конкретные домены
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Подключаем роутеры
app.include_router(health_router)
app.include_router(documents_router)
app.include_router(notifications_router)


@app.get("/")
async def root():
    """Корневой эндпоинт"""
    return {
        "message": "DocAccess API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health"
    }

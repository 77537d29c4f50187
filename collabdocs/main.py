from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from collabdocs.api.http.health import router as health_router
from collabdocs.api.http.documents import router as documents_router
from collabdocs.api.http.versions import router as versions_router
from collabdocs.api.http.templates import router as templates_router
from collabdocs.api.ws.sync import router as websocket_router
from collabdocs.core.config import settings
from collabdocs.core.exceptions import AppException
from collabdocs.core.logging import setup_logging

setup_logging()

app = FastAPI(
    title="CollabDocs",
    description="Совместное редактирование документов: права доступа и история версий",
    version="1.0.0"
)

# Настройка CORS для работы с frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AppException)
async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Единый формат ответа для ошибок приложения"""
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": {
                "code": exc.code,
                "message": exc.message,
                "details": exc.details,
                "timestamp": exc.timestamp,
            }
        },
        headers=headers,
    )


# Подключаем роутеры
app.include_router(health_router)
app.include_router(documents_router)
app.include_router(versions_router)
app.include_router(templates_router)
app.include_router(websocket_router)


@app.get("/")
async def root():
    """Корневой эндпоинт"""
    return {
        "message": "CollabDocs API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health"
    }

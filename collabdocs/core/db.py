from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from collabdocs.core.config import settings

# Базовый класс для моделей
Base = declarative_base()

# Асинхронный движок
engine = create_async_engine(settings.database_url, future=True, echo=settings.sql_echo)

# Сессии
SessionLocal = sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


# Функция для dependency injection в FastAPI
async def get_db():
    async with SessionLocal() as session:
        yield session


async def init_models(bind=engine) -> None:
    """Создание всех таблиц (локальный запуск и тесты, в продакшене - миграции)"""
    # модели должны быть зарегистрированы в Base.metadata до create_all
    import collabdocs.db.models  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


def get_session_factory():
    """Фабрика сессий для долгоживущих соединений (websocket): сессия на каждую проверку"""
    return SessionLocal

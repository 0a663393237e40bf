from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from login_attempts.config import settings

engine_kwargs: dict[str, object] = {
    "echo": settings.app_env == "development" and settings.log_level.upper() == "DEBUG",
    "pool_pre_ping": True,
}

if not settings.database_url.lower().startswith("sqlite"):
    # Pool tuning only applies to networked databases
    engine_kwargs.update({"pool_size": 10, "max_overflow": 10})

engine = create_async_engine(settings.database_url, **engine_kwargs)

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

# teamboard/database.py

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, scoped_session
from teamboard.core.settings import settings

_connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}

# Создаем движок подключения к БД
engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    connect_args=_connect_args,
)

# Фабрика сессий (scoped_session для потокобезопасности)
SessionLocal = scoped_session(
    sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
        expire_on_commit=False,
    )
)

def init_db() -> None:
    """
    Создаёт таблицы, если их ещё нет (миграции вне рамок проекта).
    """
    import teamboard.models  # noqa: F401 регистрирует все модели в Base.metadata
    from teamboard.models.base import Base
    Base.metadata.create_all(bind=engine)

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
import os
from typing import Callable, Generator, Any

# Переменные окружения должны быть выставлены до импорта настроек и приложения
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["SECRET_KEY"] = "testsecretkey"
os.environ["ADMIN_PASSWORD"] = "testadminpassword"

# Регистрирует все модели в Base.metadata
import teamboard.models

from teamboard.models.base import Base
from teamboard.core.settings import settings as app_settings
from teamboard.main import app

engine = create_engine(
    app_settings.DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)

from teamboard.dependencies import get_db
from teamboard.crud.user import create_user
from teamboard.core import security


@pytest.fixture(scope="session", autouse=True)
def create_test_tables_session_scope():
    """
    Создаёт таблицы один раз на сессию тестов и удаляет их в конце.
    """
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """
    Сессия БД на один тест. Все изменения откатываются после теста.
    """
    connection = engine.connect()
    transaction = connection.begin()
    session = TestingSessionLocal(bind=connection)

    yield session

    session.close()
    transaction.rollback()
    connection.close()


@pytest.fixture(scope="function")
def client(db: Session) -> Generator[TestClient, None, None]:
    """
    TestClient, у которого get_db подменён на тестовую сессию.
    """
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    del app.dependency_overrides[get_db]


@pytest.fixture(scope="function")
def make_user(db: Session) -> Callable[..., Any]:
    """
    Фабрика участников: make_user("Alice") создаёт alice@example.com.
    """
    def _make_user(name: str, email: str = None, role: str = "member") -> Any:
        return create_user(db, {
            "name": name,
            "email": email or f"{name.lower()}@example.com",
            "role": role,
        })
    return _make_user


@pytest.fixture(scope="function")
def test_user(make_user) -> Any:
    return make_user("Alice")


@pytest.fixture(scope="function")
def admin_token_headers() -> dict[str, str]:
    """
    Заголовки с admin-токеном.
    """
    token, _ = security.create_admin_token()
    return {"Authorization": f"Bearer {token}"}

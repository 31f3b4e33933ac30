import os

# must be set before storefront.utils.settings is imported
os.environ["REDIS_URL"] = ""
os.environ["CELERY_TASK_ALWAYS_EAGER"] = "true"
os.environ["SEED_DATA"] = "false"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

import storefront.data.models  # noqa: F401
from storefront.celery_worker import celery_app
from storefront.data.database import Base, build_engine, get_db
from storefront.data.seed import seed
from storefront.domain.schemas import AddressCreate, UserCreate
from storefront.main import app
from storefront.services.address_service import AddressService
from storefront.services.user_service import UserService

celery_app.conf.task_always_eager = True


@pytest.fixture
def engine():
    engine = build_engine("sqlite+pysqlite:///:memory:")
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)()
    seed(session)
    yield session
    session.close()


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def user(db):
    return UserService(db).register(
        UserCreate(name="Ana", email="ana@tiendamistica.mx", password="Lavanda123")
    )


@pytest.fixture
def other_user(db):
    return UserService(db).register(
        UserCreate(name="Luis", email="luis@tiendamistica.mx", password="Incienso123")
    )


def _make_address(db, user_id: int):
    return AddressService(db).create_address(
        AddressCreate(
            user_id=user_id,
            street="Av. Reforma 10",
            colony="Centro",
            city="CDMX",
            state="CDMX",
            country="México",
            zip_code="06000",
        )
    )


@pytest.fixture
def address(db, user):
    return _make_address(db, user.id)


@pytest.fixture
def address_factory(db):
    return lambda user_id: _make_address(db, user_id)

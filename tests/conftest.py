import pytest
from fastapi.testclient import TestClient

from storefront.config import AuthSettings, CatalogSettings
from storefront.database import create_db_engine, create_session_factory, init_db
from storefront.main import create_auth_app, create_catalog_app
from storefront.models.product import Product
from storefront.models.user import User
from storefront.repositories.product_repository import SQLProductRepository
from storefront.repositories.user_repository import SQLUserRepository
from storefront.schemas.user import UserCreate
from storefront.utils.security import build_password_context

TEST_SECRET_KEY = "test-secret-key"
TEST_PASSWORD = "s3cret-password"


@pytest.fixture(scope="function")
def catalog_settings(tmp_path):
    """Catalog settings pointing at a fresh SQLite file for each test."""
    return CatalogSettings(
        DATABASE_URL=f"sqlite:///{tmp_path / 'catalog.db'}",
        VERSION="v1.0.0",
        BUILD_DATE="02/29/2024",
    )


@pytest.fixture(scope="function")
def auth_settings(tmp_path):
    """Auth settings with a cheap bcrypt cost to keep tests fast."""
    return AuthSettings(
        DATABASE_URL=f"sqlite:///{tmp_path / 'auth.db'}",
        VERSION="v1.0.0",
        BUILD_DATE="02/29/2024",
        SECRET_KEY=TEST_SECRET_KEY,
        PASSWORD_HASH_ROUNDS=4,
    )


@pytest.fixture(scope="function")
def catalog_app(catalog_settings):
    app = create_catalog_app(catalog_settings)
    yield app
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def client(catalog_app):
    """Catalog test client; entering it runs the lifespan that creates tables."""
    with TestClient(catalog_app) as test_client:
        yield test_client


@pytest.fixture(scope="function")
def auth_app(auth_settings):
    app = create_auth_app(auth_settings)
    yield app
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def auth_client(auth_app):
    with TestClient(auth_app) as test_client:
        yield test_client


@pytest.fixture(scope="function")
def product_repository(catalog_settings):
    """Repository on the catalog test database, tables created."""
    engine = create_db_engine(catalog_settings.DATABASE_URL)
    init_db(engine, [Product.__table__])

    yield SQLProductRepository(create_session_factory(engine))

    engine.dispose()


@pytest.fixture(scope="function")
def user_repository(auth_settings):
    """Repository on the auth test database, tables created."""
    engine = create_db_engine(auth_settings.DATABASE_URL)
    init_db(engine, [User.__table__])

    yield SQLUserRepository(
        create_session_factory(engine),
        build_password_context(auth_settings.PASSWORD_HASH_ROUNDS),
    )

    engine.dispose()


@pytest.fixture(scope="function")
def registered_user(user_repository):
    """A stored user whose plain password is TEST_PASSWORD."""
    return user_repository.create(UserCreate(
        username="jdoe",
        email="jdoe@example.com",
        password=TEST_PASSWORD,
        nickname="JD",
    ))


@pytest.fixture
def user_password():
    """Plain password of ``registered_user``."""
    return TEST_PASSWORD

import pytest
from fastapi.testclient import TestClient

from taskist.core.config import Settings
from taskist.database import create_db_engine, create_session_factory, init_database
from taskist.main import create_app


@pytest.fixture
def settings() -> Settings:
    return Settings(
        database_url='sqlite:///:memory:',
        jwt_secret_key='test-secret',
        bcrypt_rounds=4,
        log_level='WARNING',
    )


@pytest.fixture
def task_db():
    engine = create_db_engine('sqlite:///:memory:')
    init_database(engine)
    testing_session_local = create_session_factory(engine)

    db = testing_session_local()
    try:
        yield db
    finally:
        db.close()
        engine.dispose()


@pytest.fixture
def client(settings: Settings):
    with TestClient(create_app(settings)) as test_client:
        yield test_client


@pytest.fixture
def register_user(client: TestClient):
    def _register(email: str = 'a@b.com', password: str = 'pass') -> dict:
        response = client.post('/api/auth/register', json={'email': email, 'password': password})
        assert response.status_code == 201
        return {'Authorization': f"Bearer {response.json()['token']}"}

    return _register


@pytest.fixture
def auth_headers(register_user) -> dict:
    return register_user()

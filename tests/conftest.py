import typing

import pytest
from flask import Flask
from flask.testing import FlaskClient
from sqlalchemy.orm import Session, sessionmaker

from raffle_admin import create_app
from raffle_admin.db import close_db
from raffle_admin.models.enums import UserRole
from raffle_admin.services.auth_service import AuthService
from raffle_admin.services.raffle_service import RaffleService

ADMIN_USERNAME = 'admin'
ADMIN_PASSWORD = 'admin-pass'
SELLER_USERNAME = 'seller'
SELLER_PASSWORD = 'seller-pass'
TICKET_VALUE = 50000


@pytest.fixture
def app(tmp_path) -> typing.Generator[Flask, None, None]:
    app = create_app(
        {
            'TESTING': True,
            'DATABASE_URL': f'sqlite:///{tmp_path / "test.db"}',
            'JWT_SECRET': 'test-secret',
            'SEED_ON_STARTUP': False,
            'LOG_LEVEL': 'WARNING',
        }
    )

    yield app

    close_db(app)


@pytest.fixture
def client(app: Flask) -> FlaskClient:
    return app.test_client()


@pytest.fixture
def session_factory(app: Flask) -> sessionmaker[Session]:
    return app.extensions['session_factory']


@pytest.fixture
def db_session(session_factory) -> typing.Generator[Session, None, None]:
    """A session for service-level tests. Do not mix with HTTP calls."""
    with session_factory() as session:
        yield session
        session.rollback()


@pytest.fixture
def auth_service() -> AuthService:
    return AuthService('test-secret')


@pytest.fixture
def users(session_factory, auth_service: AuthService) -> None:
    with session_factory.begin() as session:
        auth_service.create_user(
            session, username=ADMIN_USERNAME, password=ADMIN_PASSWORD, role=UserRole.ADMIN
        )
        auth_service.create_user(
            session, username=SELLER_USERNAME, password=SELLER_PASSWORD, role=UserRole.SELLER
        )


def _login(client: FlaskClient, username: str, password: str) -> str:
    response = client.post(
        '/api/auth/login', json={'username': username, 'password': password}
    )
    assert response.status_code == 200, response.get_json()
    return response.get_json()['data']['token']


@pytest.fixture
def admin_token(client: FlaskClient, users) -> str:
    return _login(client, ADMIN_USERNAME, ADMIN_PASSWORD)


@pytest.fixture
def seller_token(client: FlaskClient, users) -> str:
    return _login(client, SELLER_USERNAME, SELLER_PASSWORD)


@pytest.fixture
def admin_headers(admin_token: str) -> dict[str, str]:
    return {'Authorization': f'Bearer {admin_token}'}


@pytest.fixture
def seller_headers(seller_token: str) -> dict[str, str]:
    return {'Authorization': f'Bearer {seller_token}'}


@pytest.fixture
def raffle_id(session_factory) -> int:
    with session_factory.begin() as session:
        return RaffleService().create_raffle(
            session,
            name='Rifa de prueba',
            description='Moto',
            prize_cost=1000000,
            ticket_value=TICKET_VALUE,
            draw_date='2026-12-24',
        )

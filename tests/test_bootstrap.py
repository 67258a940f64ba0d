from sqlalchemy import func, select

from raffle_admin import create_app
from raffle_admin.db import close_db
from raffle_admin.models import Raffle, Ticket, User
from raffle_admin.models.enums import UserRole
from raffle_admin.services.bootstrap_service import seed_defaults


def _seed(session_factory):
    with session_factory.begin() as session:
        return seed_defaults(
            session,
            admin_username='Juan',
            admin_password='1234',
            lottery_reference='Lotería de Medellín',
        )


def test_seed_creates_admin_and_sample_raffle_once(session_factory):
    first = _seed(session_factory)
    second = _seed(session_factory)

    assert first.admin_created
    assert first.sample_raffle_id is not None
    assert not second.admin_created
    assert second.sample_raffle_id is None

    with session_factory() as session:
        admin = session.scalar(select(User).where(User.username == 'Juan'))
        assert admin.role == UserRole.ADMIN
        assert session.scalar(select(func.count()).select_from(Raffle)) == 1
        assert session.scalar(select(func.count()).select_from(Ticket)) == 100


def test_app_seeds_on_startup_and_admin_can_log_in(tmp_path):
    app = create_app(
        {
            'TESTING': True,
            'DATABASE_URL': f'sqlite:///{tmp_path / "seeded.db"}',
            'JWT_SECRET': 'test-secret',
            'SEED_ON_STARTUP': True,
            'DEFAULT_ADMIN_USERNAME': 'Juan',
            'DEFAULT_ADMIN_PASSWORD': '1234',
        }
    )
    client = app.test_client()

    login = client.post('/api/auth/login', json={'username': 'Juan', 'password': '1234'})
    token = login.get_json()['data']['token']
    raffles = client.get('/api/raffles', headers={'Authorization': f'Bearer {token}'})

    assert login.status_code == 200
    assert [r['name'] for r in raffles.get_json()['data']] == ['Gran Rifa de Inauguración']

    close_db(app)

from datetime import date, time

import fakeredis
import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import select

from cinema_admin.app import create_app
from cinema_admin.core.config import Settings
from cinema_admin.core.security import hash_password
from cinema_admin.models import Language, Movie, Role, Screen, Screening, Theater, User
from cinema_admin.tests.helpers import ADMIN_EMAIL, ADMIN_PASSWORD, USER_PASSWORD, login, simple_layout


@pytest.fixture
def settings(tmp_path):
    return Settings(
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        REDIS_URL="redis://unused",
        BCRYPT_ROUNDS=4,
        AUTO_CREATE_TABLES=True,
        SEED_DATA=True,
        SEED_ADMIN_EMAIL=ADMIN_EMAIL,
        SEED_ADMIN_PASSWORD=ADMIN_PASSWORD,
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
async def redis_client():
    redis = fakeredis.FakeAsyncRedis(decode_responses=True)
    yield redis
    await redis.flushall()
    await redis.aclose()


@pytest.fixture
async def app(settings, redis_client):
    """App running inside its lifespan: tables created and reference data seeded."""
    application = create_app(settings=settings, redis=redis_client)
    async with application.router.lifespan_context(application):
        yield application


@pytest.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def db_session(app):
    async with app.state.session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def roles(db_session):
    result = await db_session.execute(select(Role))
    return {role.name: role for role in result.scalars().all()}


@pytest.fixture
async def regular_user(db_session, roles):
    user = User(
        name="Regular User",
        email="user@test.com",
        password=hash_password(USER_PASSWORD, rounds=4),
        role_id=roles["user"].id,
    )
    db_session.add(user)
    await db_session.commit()
    return user


@pytest.fixture
async def admin_token(client):
    return await login(client, ADMIN_EMAIL, ADMIN_PASSWORD)


@pytest.fixture
async def admin_headers(admin_token):
    return {"Authorization": f"Bearer {admin_token}"}


@pytest.fixture
async def user_headers(client, regular_user):
    token = await login(client, regular_user.email, USER_PASSWORD, admin=False)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def catalog(db_session):
    """A theater with one 10 seat screen, a movie and its language."""
    theater = Theater(name="Test Theater", city="Chennai", address="Anna Salai")
    db_session.add(theater)
    await db_session.flush()

    screen = Screen(name="Screen 1", theater_id=theater.id, capacity=10, seat_layout=simple_layout())
    movie = Movie(original_title="Test Movie", duration_minutes=120, release_date=date(2025, 1, 1))
    db_session.add_all([screen, movie])
    await db_session.flush()

    language = (await db_session.execute(select(Language).where(Language.code == "en"))).scalar_one()
    await db_session.commit()
    return {
        "theater_id": theater.id,
        "screen_id": screen.id,
        "movie_id": movie.id,
        "language_id": language.id,
    }


@pytest.fixture
async def make_screening(db_session, catalog):
    async def factory(start: time, end: time, show_date: date = date(2025, 6, 1), **overrides):
        values = dict(
            movie_id=catalog["movie_id"],
            screen_id=catalog["screen_id"],
            language_id=catalog["language_id"],
            show_date=show_date,
            show_time=start,
            end_time=end,
            base_price=200,
            available_seats=10,
        )
        values.update(overrides)
        screening = Screening(**values)
        db_session.add(screening)
        await db_session.commit()
        return screening
    return factory

import asyncio
import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from cinema_admin.core.config import ADMIN_ROLE, Settings, get_settings
from cinema_admin.core.security import hash_password
from cinema_admin.db.session import build_engine, build_session_factory, init_db
from cinema_admin.models import Genre, Language, Person, Role, User


logger = logging.getLogger(__name__)

ROLES = [ADMIN_ROLE, "user", "moderator"]

GENRES = [
    "Action", "Adventure", "Animation", "Biography", "Comedy", "Crime", "Documentary",
    "Drama", "Family", "Fantasy", "History", "Horror", "Music", "Mystery", "Romance",
    "Sci-Fi", "Sport", "Thriller", "War", "Western",
]

LANGUAGES = [
    ("en", "English", "English"),
    ("hi", "Hindi", "हिन्दी"),
    ("ta", "Tamil", "தமிழ்"),
    ("te", "Telugu", "తెలుగు"),
    ("kn", "Kannada", "ಕನ್ನಡ"),
    ("ml", "Malayalam", "മലയാളം"),
    ("mr", "Marathi", "मराठी"),
    ("bn", "Bengali", "বাংলা"),
    ("gu", "Gujarati", "ગુજરાતી"),
    ("pa", "Punjabi", "ਪੰਜਾਬੀ"),
    ("es", "Spanish", "Español"),
    ("fr", "French", "Français"),
    ("de", "German", "Deutsch"),
    ("ja", "Japanese", "日本語"),
    ("ko", "Korean", "한국어"),
    ("zh", "Chinese", "中文"),
]

PERSONS = [
    ("Christopher Nolan", "British-American filmmaker known for his complex narratives"),
    ("Leonardo DiCaprio", "American actor and film producer"),
    ("Morgan Freeman", "American actor and film narrator"),
    ("Scarlett Johansson", "American actress and singer"),
    ("Tom Hanks", "American actor and filmmaker"),
    ("Shah Rukh Khan", "Indian actor and film producer"),
    ("Amitabh Bachchan", "Indian actor, film producer and television host"),
    ("Deepika Padukone", "Indian actress who works in Hindi films"),
    ("Rajinikanth", "Indian actor who works mainly in Tamil cinema"),
    ("S. S. Rajamouli", "Indian film director and screenwriter"),
]


async def seed_roles(session: AsyncSession) -> dict[str, Role]:
    existing = {role.name: role for role in (await session.execute(select(Role))).scalars().all()}
    for name in ROLES:
        if name not in existing:
            role = Role(name=name)
            session.add(role)
            existing[name] = role
            logger.info(f"created role {name}")
    await session.flush()
    return existing


async def seed_genres(session: AsyncSession) -> None:
    count = (await session.execute(select(func.count()).select_from(Genre))).scalar_one()
    if count:
        logger.info(f"genres already exist ({count} records)")
        return
    session.add_all([Genre(name=name) for name in GENRES])


async def seed_languages(session: AsyncSession) -> None:
    codes = set((await session.execute(select(Language.code))).scalars().all())
    session.add_all([
        Language(code=code, name=name, native_name=native)
        for code, name, native in LANGUAGES
        if code not in codes
    ])


async def seed_persons(session: AsyncSession) -> None:
    count = (await session.execute(select(func.count()).select_from(Person))).scalar_one()
    if count:
        return
    session.add_all([Person(name=name, bio=bio) for name, bio in PERSONS])


async def seed_admin(session: AsyncSession, settings: Settings, admin_role: Role) -> None:
    result = await session.execute(
        select(User).where(User.email == settings.SEED_ADMIN_EMAIL, User.deleted_at.is_(None)))
    if result.scalar_one_or_none() is not None:
        return
    session.add(User(
        name="Admin",
        email=settings.SEED_ADMIN_EMAIL,
        password=hash_password(settings.SEED_ADMIN_PASSWORD, rounds=settings.BCRYPT_ROUNDS),
        role_id=admin_role.id,
    ))
    logger.info(f"created admin user {settings.SEED_ADMIN_EMAIL}")


async def seed(session_factory: async_sessionmaker[AsyncSession], settings: Settings) -> None:
    """Insert the reference data that is missing. Safe to run on every startup."""
    async with session_factory() as session:
        try:
            roles = await seed_roles(session)
            await seed_genres(session)
            await seed_languages(session)
            await seed_persons(session)
            await seed_admin(session, settings, roles[ADMIN_ROLE])
            await session.commit()
        except Exception as e:
            logger.error(f"Failed to seed database: {e}", exc_info=True)
            await session.rollback()
            raise
    logger.info("database seeding completed")


async def main():
    settings = get_settings()
    engine = build_engine(settings)
    try:
        await init_db(engine)
        await seed(build_session_factory(engine), settings)
    finally:
        await engine.dispose()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(main())

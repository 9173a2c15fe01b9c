"""Schema creation and seeding."""

from loguru import logger
from sqlmodel import SQLModel

from src.bookstore.core.services.database.db_session import DbSessionService
from src.bookstore.core.services.identity import IdentityService
from src.bookstore.runtime.context import get_config


class DbManageService:
    def __init__(self, db_service: DbSessionService):
        self._db_service = db_service

    def create_all(self) -> None:
        """Create all database tables."""
        import src.bookstore.entities  # noqa: F401

        SQLModel.metadata.create_all(self._db_service.engine)
        logger.info("Database initialized with tables.")

    def seed_roles(self) -> list[str]:
        """Create the configured roles; return the names that were new."""
        created = []
        with self._db_service.session_scope() as session:
            identity = IdentityService(session)
            for role in get_config().security.roles:
                if identity.ensure_role(role):
                    created.append(role)
        if created:
            logger.info("Seeded roles: {}", ", ".join(created))
        return created

    def seed_users(self) -> list[str]:
        """Create the configured seed accounts that do not exist yet."""
        created = []
        with self._db_service.session_scope() as session:
            identity = IdentityService(session)
            for seed in get_config().security.seed_users:
                if identity.find_by_email(seed.email) is not None:
                    continue
                result = identity.create_user(seed.email, seed.password, roles=seed.roles)
                if not result.succeeded:
                    logger.error(
                        "Seed user {} rejected: {}",
                        seed.email,
                        "; ".join(e.description for e in result.errors),
                    )
                    continue
                created.append(seed.email)
        if created:
            logger.info("Seeded users: {}", ", ".join(created))
        return created

"""Database initialization script."""

from src.bookstore.core.services.database import DbManageService, DbSessionService


def init_db(seed_users: bool = True) -> dict[str, list[str]]:
    """Create all database tables and seed roles (and seed accounts).

    Returns the role names and user emails that were newly created.
    """
    db_service = DbSessionService()
    manage = DbManageService(db_service)
    try:
        manage.create_all()
        created = {"roles": manage.seed_roles(), "users": []}
        if seed_users:
            created["users"] = manage.seed_users()
        return created
    finally:
        db_service.dispose()


if __name__ == "__main__":
    init_db()

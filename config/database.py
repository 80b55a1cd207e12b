"""Build the registry's connection URL from DB_* components"""
from sqlalchemy.engine import URL, make_url


def get_database_url(
    driver: str,
    host: str | None,
    port: int,
    user: str | None,
    password: str | None,
    name: str | None,
) -> str:
    """
    Assemble a SQLAlchemy URL; special characters in the credentials are
    escaped.

    Example:
        >>> get_database_url("postgresql+asyncpg", "db", 5432, "registry", "p@ss", "assets")
        'postgresql+asyncpg://registry:p%40ss@db:5432/assets'
    """
    url = URL.create(
        drivername=driver,
        username=user,
        password=password,
        host=host,
        port=port,
        database=name,
    )
    return url.render_as_string(hide_password=False)


# Async drivers used by the app and the sync driver scripts/migrations use instead
SYNC_DRIVERS = {
    "postgresql+asyncpg": "postgresql+psycopg2",
    "sqlite+aiosqlite": "sqlite",
}


def get_sync_url(async_url: str) -> str:
    """
    Swap the async driver in `async_url` for its sync counterpart.

    Example:
        >>> get_sync_url("sqlite+aiosqlite:///./registry.db")
        'sqlite:///./registry.db'
    """
    url = make_url(async_url)
    drivername = SYNC_DRIVERS.get(url.drivername, url.drivername)
    return url.set(drivername=drivername).render_as_string(hide_password=False)

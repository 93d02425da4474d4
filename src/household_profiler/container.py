"""Dependency injection container for Household Profiler.

Holds the single database handle and the repository built on it, so request
handlers receive an explicitly constructed repository instead of reaching for
a module-level connection. Services are built per request by the FastAPI
dependencies in ``api.routes``.

Usage:
    from household_profiler.container import Container, get_container

    container = get_container()
    members = container.member_repository.list_members()
"""

from functools import cached_property, lru_cache
from typing import TYPE_CHECKING

from household_profiler.config import Settings, get_settings
from household_profiler.logging_config import get_logger

if TYPE_CHECKING:
    from household_profiler.repositories.interfaces import MemberRepository
    from household_profiler.repositories.sqlite import SQLiteDatabase

logger = get_logger(__name__)


class Container:
    """Dependency injection container.

    Resources are created on first access and cached for reuse. Tests can
    build one with custom settings:

        container = Container(settings=Settings(sqlite_path=":memory:"))
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()
        logger.debug(
            "container_created",
            sqlite_path=str(self._settings.sqlite_path),
            environment=self._settings.environment.value,
        )

    @property
    def settings(self) -> Settings:
        """Get application settings."""
        return self._settings

    @cached_property
    def database(self) -> "SQLiteDatabase":
        """SQLite database, initialised on first access."""
        from household_profiler.repositories.sqlite import SQLiteDatabase

        db_path = self._settings.sqlite_path
        logger.info("initializing_sqlite_database", path=str(db_path))

        if str(db_path) != ":memory:":
            db_path.parent.mkdir(parents=True, exist_ok=True)
        # FastAPI runs sync handlers in a threadpool.
        db = SQLiteDatabase(db_path, check_same_thread=False)
        db.initialize()
        return db

    @cached_property
    def member_repository(self) -> "MemberRepository":
        from household_profiler.repositories.sqlite import SQLiteMemberRepository

        return SQLiteMemberRepository(self.database)

    def close(self) -> None:
        """Close the database connection if it was opened."""
        if "database" in self.__dict__:
            logger.info("closing_database_connection")
            self.database.close()

    def __enter__(self) -> "Container":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


_container: Container | None = None


@lru_cache
def get_container() -> Container:
    """Get the global container singleton.

    For testing, create a Container directly with custom settings, or
    override the FastAPI dependencies below.
    """
    global _container
    if _container is None:
        _container = Container()
    return _container


def reset_container() -> None:
    """Close and discard the global container."""
    global _container
    if _container is not None:
        _container.close()
        _container = None
    get_container.cache_clear()


# FastAPI dependency functions
def get_member_repository() -> "MemberRepository":
    """FastAPI dependency for the member repository.

    Override in tests via ``app.dependency_overrides[get_member_repository]``.
    """
    return get_container().member_repository

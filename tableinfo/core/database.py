from typing import Any, AsyncIterator, Dict, List, Protocol

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from tableinfo.core.config import settings

engine = create_async_engine(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)


class QueryExecutor(Protocol):
    """Anything that runs a SQL string and hands back rows as dicts."""

    async def execute(self, sql: str) -> List[Dict[str, Any]]: ...


class EngineExecutor:
    """Read-only executor over an async SQLAlchemy engine.

    Every call checks a connection out of the engine pool and gives it back,
    nothing is held between calls.
    """

    def __init__(self, engine: AsyncEngine):
        self.engine = engine

    @property
    def dialect(self) -> str:
        # "postgresql", "sqlite", "mysql", "mariadb", ...
        return self.engine.dialect.name

    async def execute(self, sql: str) -> List[Dict[str, Any]]:
        # exec_driver_sql keeps ":" in identifiers away from bind parsing
        async with self.engine.connect() as conn:
            result = await conn.exec_driver_sql(sql)
            return [dict(row._mapping) for row in result.fetchall()]


# The "Bridge" that gives routes access to the configured database
async def get_executor() -> AsyncIterator[EngineExecutor]:
    yield EngineExecutor(engine)

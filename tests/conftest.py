from typing import Any, Dict, List, Optional

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine

from tableinfo.main import app
from tableinfo.core.database import EngineExecutor, get_executor
from tableinfo.core.introspection import normalize


class FakeExecutor:
    """In-memory executor: canned rows per SQL string, optional failures."""

    def __init__(
        self,
        responses: Optional[Dict[str, List[Dict[str, Any]]]] = None,
        failing: Optional[Dict[str, Exception]] = None,
        dialect: Optional[str] = "postgres",
    ):
        self.responses = responses or {}
        self.failing = failing or {}
        self.dialect = dialect
        self.queries: List[str] = []

    async def execute(self, sql: str) -> List[Dict[str, Any]]:
        self.queries.append(sql)
        for needle, error in self.failing.items():
            if needle in sql:
                raise error
        for needle, rows in self.responses.items():
            if needle in sql:
                return rows
        return []


@pytest.fixture
def fake_executor():
    return FakeExecutor


# Three tables, the way a postgres catalog query would list them
@pytest.fixture
def catalog_rows() -> List[Dict[str, Any]]:
    return [
        {"table_name": "T1", "column_name": "a", "data_type": "int", "is_nullable": "NO"},
        {"table_name": "T1", "column_name": "b", "data_type": "text", "is_nullable": "YES"},
        {"table_name": "T2", "column_name": "c", "data_type": "int", "is_nullable": "NO"},
        {"table_name": "T3", "column_name": "d", "data_type": None, "is_nullable": "YES"},
    ]


@pytest.fixture
def snapshot(catalog_rows):
    return normalize.normalize(catalog_rows)


# Create a throwaway sqlite database per test
@pytest_asyncio.fixture(scope="function")
async def sqlite_engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.exec_driver_sql(
            "CREATE TABLE Users (id INTEGER NOT NULL, name TEXT)"
        )
        await conn.exec_driver_sql(
            'CREATE TABLE "order items" (id INTEGER NOT NULL, note TEXT, qty REAL NOT NULL)'
        )
        await conn.exec_driver_sql("INSERT INTO Users (id, name) VALUES (1, 'a')")
        await conn.exec_driver_sql("INSERT INTO Users (id, name) VALUES (2, 'b')")
        await conn.exec_driver_sql("INSERT INTO Users (id, name) VALUES (3, 'c')")
        await conn.exec_driver_sql(
            "INSERT INTO \"order items\" (id, note, qty) VALUES (10, 'first', 1.5)"
        )
    yield engine
    await engine.dispose()


@pytest.fixture
def sqlite_executor(sqlite_engine):
    return EngineExecutor(sqlite_engine)


# Client
@pytest_asyncio.fixture(scope="function")
async def client(sqlite_executor: EngineExecutor):
    async def override_get_executor():
        yield sqlite_executor

    app.dependency_overrides[get_executor] = override_get_executor

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()

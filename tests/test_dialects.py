import pytest

from tableinfo.core.errors import UnsupportedDialect
from tableinfo.core.introspection import dialects
from tableinfo.core.schemas import Dialect


@pytest.mark.parametrize("dialect", list(Dialect))
def test_every_dialect_has_ordered_catalog_query(dialect):
    """Each supported dialect lists tables ordered by name then position"""
    sql = dialects.select_catalog_query(dialect)

    assert sql.strip()
    assert "ORDER BY" in sql
    for column in ("table_name", "column_name", "data_type", "is_nullable"):
        assert f"AS {column}" in sql


def test_postgres_query_anchored_to_public_schema():
    sql = dialects.select_catalog_query(Dialect.POSTGRES)
    assert "table_schema = 'public'" in sql
    assert "pg_catalog" not in sql


def test_sqlite_query_skips_internal_tables():
    sql = dialects.select_catalog_query("sqlite")
    assert "NOT LIKE 'sqlite_%'" in sql
    assert "m.type = 'table'" in sql


def test_mysql_query_uses_current_database():
    """No database name is pasted into the SQL text"""
    sql = dialects.select_catalog_query("mysql")
    assert "TABLE_SCHEMA = DATABASE()" in sql
    assert dialects.select_catalog_query("mariadb") == sql


@pytest.mark.parametrize(
    "name, expected",
    [
        ("postgres", Dialect.POSTGRES),
        ("postgresql", Dialect.POSTGRES),
        ("SQLite", Dialect.SQLITE),
        (" mysql ", Dialect.MYSQL),
        ("mariadb", Dialect.MARIADB),
        (Dialect.SQLITE, Dialect.SQLITE),
    ],
)
def test_resolve_dialect(name, expected):
    assert dialects.resolve_dialect(name) is expected


@pytest.mark.parametrize("name", ["mssql", "oracle", "", "unknown"])
def test_unknown_dialect_fails(name):
    with pytest.raises(UnsupportedDialect) as exc_info:
        dialects.select_catalog_query(name)
    assert exc_info.value.dialect == name


def test_quote_table_name():
    assert dialects.quote_table_name("order items", "mysql") == "`order items`"
    assert dialects.quote_table_name("order items", Dialect.MARIADB) == "`order items`"
    assert dialects.quote_table_name("Users", "postgres") == '"Users"'
    assert dialects.quote_table_name('say "hi"', "sqlite") == '"say ""hi"""'
    assert dialects.quote_table_name("a`b", "mysql") == "`a``b`"


def test_missing_catalog_query_raises_without_chained_key_error(monkeypatch):
    monkeypatch.setattr(
        dialects, "CATALOG_QUERIES", {Dialect.POSTGRES: dialects.POSTGRES_CATALOG_QUERY}
    )

    with pytest.raises(UnsupportedDialect) as exc_info:
        dialects.select_catalog_query("sqlite")

    assert exc_info.value.dialect == "sqlite"
    assert exc_info.value.__cause__ is None
    assert exc_info.value.__suppress_context__ is True

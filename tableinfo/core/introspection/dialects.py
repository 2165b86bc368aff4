# tableinfo/core/introspection/dialects.py
"""
DIALECTS MODULE - Pick the catalog query for a database kind

Purpose:
    1. Map a dialect tag (ours or SQLAlchemy's) to the closed Dialect enum
    2. Return the catalog query listing (table, column, type, nullability)
    3. Quote table names the way each dialect family expects

Every catalog query returns rows shaped as:
    table_name | column_name | data_type | is_nullable ('YES' / 'NO')
ordered by table name, then column ordinal position.
"""

from typing import Dict, Union

from tableinfo.core.errors import UnsupportedDialect
from tableinfo.core.schemas import Dialect


# ============================================================================
# CATALOG QUERIES
# ============================================================================

POSTGRES_CATALOG_QUERY = """
SELECT
    c.table_name AS table_name,
    c.column_name AS column_name,
    c.data_type AS data_type,
    c.is_nullable AS is_nullable
FROM
    information_schema.tables t
        JOIN information_schema.columns c
             ON t.table_schema = c.table_schema
            AND t.table_name = c.table_name
WHERE
    t.table_schema = 'public'
ORDER BY
    c.table_name,
    c.ordinal_position;
"""

SQLITE_CATALOG_QUERY = """
SELECT
    m.name AS table_name,
    p.name AS column_name,
    p.type AS data_type,
    CASE
        WHEN p."notnull" = 0 THEN 'YES'
        ELSE 'NO'
    END AS is_nullable
FROM
    sqlite_master m
        JOIN pragma_table_info(m.name) p
WHERE
    m.type = 'table'
    AND m.name NOT LIKE 'sqlite_%'
ORDER BY
    m.name,
    p.cid;
"""

# DATABASE() is the connection's current schema, so nothing is interpolated
MYSQL_CATALOG_QUERY = """
SELECT
    TABLE_NAME AS table_name,
    COLUMN_NAME AS column_name,
    DATA_TYPE AS data_type,
    IS_NULLABLE AS is_nullable
FROM
    INFORMATION_SCHEMA.COLUMNS
WHERE
    TABLE_SCHEMA = DATABASE()
ORDER BY
    TABLE_NAME,
    ORDINAL_POSITION;
"""

CATALOG_QUERIES: Dict[Dialect, str] = {
    Dialect.POSTGRES: POSTGRES_CATALOG_QUERY,
    Dialect.SQLITE: SQLITE_CATALOG_QUERY,
    Dialect.MYSQL: MYSQL_CATALOG_QUERY,
    Dialect.MARIADB: MYSQL_CATALOG_QUERY,
}

# SQLAlchemy dialect names and common spellings
DIALECT_ALIASES: Dict[str, Dialect] = {
    "postgres": Dialect.POSTGRES,
    "postgresql": Dialect.POSTGRES,
    "sqlite": Dialect.SQLITE,
    "mysql": Dialect.MYSQL,
    "mariadb": Dialect.MARIADB,
}


# ============================================================================
# DIALECT RESOLUTION
# ============================================================================


def resolve_dialect(dialect: Union[Dialect, str]) -> Dialect:
    """
    Turn a dialect tag into a Dialect.

    Args:
        dialect: Dialect member, our tag ("postgres") or a SQLAlchemy
            dialect name ("postgresql")

    Returns:
        The matching Dialect

    Raises:
        UnsupportedDialect: the tag is not one we have a catalog query for

    Examples:
        "postgresql" → Dialect.POSTGRES
        "MySQL"      → Dialect.MYSQL
        "mssql"      → UnsupportedDialect
    """
    if isinstance(dialect, Dialect):
        return dialect

    resolved = DIALECT_ALIASES.get(str(dialect).strip().lower())
    if resolved is None:
        raise UnsupportedDialect(str(dialect))
    return resolved


def select_catalog_query(dialect: Union[Dialect, str]) -> str:
    """Return the catalog query for a dialect (raises UnsupportedDialect)."""
    resolved = resolve_dialect(dialect)
    try:
        return CATALOG_QUERIES[resolved]
    except KeyError:
        raise UnsupportedDialect(resolved.value) from None


def quote_table_name(table_name: str, dialect: Union[Dialect, str]) -> str:
    """
    Quote a table name so spaces and reserved words survive.

    Examples:
        ("order items", mysql)    → `order items`
        ("Users", postgres)       → "Users"
        ("a`b", mysql)            → `a``b`

    A quote character inside the name is doubled.
    """
    if resolve_dialect(dialect).is_mysql_family:
        return "`" + table_name.replace("`", "``") + "`"
    return '"' + table_name.replace('"', '""') + '"'

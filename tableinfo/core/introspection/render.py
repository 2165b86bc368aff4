# tableinfo/core/introspection/render.py
"""
RENDER MODULE - Turn a schema snapshot into prompt-ready text

Per table, four segments, each ending with a newline:
    1. CREATE TABLE Users (id int NOT NULL, name text )
    2. SELECT * FROM "Users" LIMIT 2;
    3.  id name
    4.  1 a
        2 b

Tables are rendered one after the other in snapshot order. Sample queries go
through the executor one at a time; a failing sample query leaves segment 4
empty for that table and rendering moves on.
"""

import logging
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from tableinfo.core.database import QueryExecutor
from tableinfo.core.errors import SampleQueryFailure
from tableinfo.core.introspection.dialects import quote_table_name
from tableinfo.core.schemas import Column, Dialect, SampleWarning, Table, TableInfoReport

logger = logging.getLogger(__name__)


# ============================================================================
# STEP 1-3: STATIC SEGMENTS
# ============================================================================


def format_column(column: Column) -> str:
    data_type = column.data_type if column.data_type is not None else ""
    not_null = "" if column.is_nullable else "NOT NULL"
    return f"{column.name} {data_type} {not_null}"


def format_create_table(table: Table) -> str:
    """
    Synthetic CREATE TABLE declaration for one table.

    Example:
        Users(id int not null, name text nullable)
        → "CREATE TABLE Users (id int NOT NULL, name text ) \\n"
    """
    columns = ", ".join(format_column(column) for column in table.columns)
    return f"CREATE TABLE {table.name} ({columns}) \n"


def format_select_sample(
    table: Table, sample_rows: int, dialect: Union[Dialect, str]
) -> str:
    return f"SELECT * FROM {quote_table_name(table.name, dialect)} LIMIT {sample_rows};\n"


def format_column_legend(table: Table) -> str:
    return "".join(f" {name}" for name in table.column_names) + "\n"


# ============================================================================
# STEP 4: SAMPLE ROWS
# ============================================================================


def format_sample_rows(rows: Optional[Sequence[Mapping[str, Any]]]) -> str:
    """
    One line per row, every value prefixed with a space.

    Values are rendered with str(), no type-aware formatting.

    Example:
        [{"id": 1, "name": "a"}, {"id": 2, "name": "b"}] → " 1 a\\n 2 b\\n"
    """
    if not rows:
        return ""

    return "".join(
        "".join(f" {value}" for value in row.values()) + "\n" for row in rows
    )


async def fetch_sample(
    table: Table, query: str, executor: QueryExecutor
) -> Tuple[str, Optional[SampleWarning]]:
    """
    Run the sample query for one table.

    Returns:
        (rendered rows, None) on success
        ("", SampleWarning) when the executor raised
    """
    try:
        rows = await executor.execute(query)
    except Exception as error:
        failure = SampleQueryFailure(table.name, query, error)
        logger.warning(f"{failure}")
        return "", SampleWarning(
            table=table.name, query=query.strip(), error=str(error)
        )

    return format_sample_rows(rows), None


# ============================================================================
# ALL TABLES
# ============================================================================


async def render_table(
    table: Table,
    sample_rows: int,
    executor: QueryExecutor,
    dialect: Union[Dialect, str],
) -> Tuple[str, Optional[SampleWarning]]:
    """Render the four segments for one table."""
    create_table = format_create_table(table)
    select_sample = format_select_sample(table, sample_rows, dialect)
    legend = format_column_legend(table)
    sample, warning = await fetch_sample(table, select_sample, executor)

    return create_table + select_sample + legend + sample, warning


async def generate_table_info(
    tables: Iterable[Table],
    executor: QueryExecutor,
    sample_rows: int,
    dialect: Union[Dialect, str],
) -> TableInfoReport:
    """
    Render every table, in order, into one report.

    Args:
        tables: Tables to render (already filtered)
        executor: Runs the sample queries
        sample_rows: LIMIT used for each sample query
        dialect: Decides how table names are quoted

    Returns:
        TableInfoReport with the joined text and one warning per failed sample

    Raises:
        ValueError: sample_rows is negative
    """
    if sample_rows < 0:
        raise ValueError(f"sample_rows must be >= 0, got {sample_rows}")

    segments: List[str] = []
    warnings: List[SampleWarning] = []

    # One table at a time, in snapshot order
    for table in tables:
        segment, warning = await render_table(table, sample_rows, executor, dialect)
        segments.append(segment)
        if warning is not None:
            warnings.append(warning)

    return TableInfoReport(text="".join(segments), warnings=warnings)

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence, Union

from tableinfo.core.database import QueryExecutor
from tableinfo.core.errors import TableNotFound
from tableinfo.core.introspection import dialects, normalize, render
from tableinfo.core.schemas import Dialect, Table, TableInfoReport


# -----------------------------------------------------------------------------
# PIPELINE MODULE - Orchestration
# Purpose: list the catalog, validate include/ignore lists, filter, render
# Flow: dialect -> catalog query -> normalize -> validate -> filter -> render
# -----------------------------------------------------------------------------


INCLUDE_TABLES_PREFIX = "Include tables not found in database:"
IGNORE_TABLES_PREFIX = "Ignore tables not found in database:"

logger = logging.getLogger(__name__)


class IntrospectionLogger:
    """Collects the steps of one introspection call."""

    def __init__(self, dialect: Union[Dialect, str]):
        """
        Initialize a logger scoped to one introspection call.

        Args:
            dialect: Dialect of the database being introspected.
        """
        self.dialect = dialect.value if isinstance(dialect, Dialect) else str(dialect)
        self.start_time = datetime.now()
        self.logs: List[Dict[str, Any]] = []

    def log(self, step: str, message: str, level: str = "info"):
        log_entry = {
            "timestamp": datetime.now().isoformat(),
            "step": step,
            "message": message,
            "level": level,
            "elapsed_seconds": (datetime.now() - self.start_time).total_seconds(),
        }
        self.logs.append(log_entry)

        # Also log to console
        if level == "error":
            logger.error(f"[{self.dialect}] {step}: {message}")
        elif level == "warning":
            logger.warning(f"[{self.dialect}] {step}: {message}")
        else:
            logger.info(f"[{self.dialect}] {step}: {message}")

    def get_logs(self) -> List[Dict[str, Any]]:
        return self.logs


# =============================================================================
# VALIDATION
# =============================================================================


def assert_tables_exist(
    snapshot: Sequence[Table], names: Sequence[str], context_label: str
) -> None:
    """
    Fail on the first name that is not a table of the snapshot.

    An empty list always passes.

    Raises:
        TableNotFound: "<context_label> the table <name> was not found in the database"
    """
    if not names:
        return

    known = {table.name for table in snapshot}
    for name in names:
        if name not in known:
            raise TableNotFound(context_label, name)


def verify_include_tables_exist(
    snapshot: Sequence[Table], include_tables: Sequence[str]
) -> None:
    assert_tables_exist(snapshot, include_tables, INCLUDE_TABLES_PREFIX)


def verify_ignore_tables_exist(
    snapshot: Sequence[Table], ignore_tables: Sequence[str]
) -> None:
    assert_tables_exist(snapshot, ignore_tables, IGNORE_TABLES_PREFIX)


def filter_tables(
    snapshot: Sequence[Table],
    include_tables: Optional[Sequence[str]] = None,
    ignore_tables: Optional[Sequence[str]] = None,
) -> List[Table]:
    """
    Keep the snapshot order; include list first, then drop ignored tables.

    Example:
        snapshot [T1, T2, T3], include [T3, T1] → [T1, T3]
        snapshot [T1, T2, T3], ignore [T2]      → [T1, T3]
    """
    tables = list(snapshot)

    if include_tables:
        wanted = set(include_tables)
        tables = [table for table in tables if table.name in wanted]

    if ignore_tables:
        unwanted = set(ignore_tables)
        tables = [table for table in tables if table.name not in unwanted]

    return tables


# =============================================================================
# PUBLIC ENTRY POINTS
# =============================================================================


async def list_tables_and_columns(
    executor: QueryExecutor, dialect: Union[Dialect, str]
) -> List[Table]:
    """
    Run the catalog query for the dialect and normalize its rows.

    Args:
        executor: Runs the catalog query
        dialect: Database kind ("postgres", "postgresql", "sqlite", "mysql", ...)

    Returns:
        Schema snapshot: tables in catalog order, columns in ordinal order

    Raises:
        UnsupportedDialect: before any query is sent
        Exception: whatever the executor raises for the catalog query
    """
    sql = dialects.select_catalog_query(dialect)
    raw_rows = await executor.execute(sql)
    snapshot = normalize.normalize(raw_rows)

    logger.info(
        f"Catalog listed {len(snapshot)} tables from {len(raw_rows)} column rows"
    )
    return snapshot


async def render_table_info_report(
    snapshot: Sequence[Table],
    include_tables: Optional[Sequence[str]],
    ignore_tables: Optional[Sequence[str]],
    sample_rows: int,
    executor: QueryExecutor,
    dialect: Union[Dialect, str],
) -> TableInfoReport:
    """
    Validate the lists, filter the snapshot and render every remaining table.

    Both lists are checked before any sample query is sent. Failed sample
    queries are returned as warnings next to the text, and the logged steps
    of the call as `steps`.

    Raises:
        TableNotFound: a name in include_tables or ignore_tables is unknown
        UnsupportedDialect: the dialect cannot be quoted for
        ValueError: sample_rows is negative
    """
    include_tables = list(include_tables or [])
    ignore_tables = list(ignore_tables or [])
    resolved = dialects.resolve_dialect(dialect)

    verify_include_tables_exist(snapshot, include_tables)
    verify_ignore_tables_exist(snapshot, ignore_tables)

    tables = filter_tables(snapshot, include_tables, ignore_tables)

    run_logger = IntrospectionLogger(resolved)
    run_logger.log("render", f"Rendering {len(tables)} of {len(snapshot)} tables")

    report = await render.generate_table_info(tables, executor, sample_rows, resolved)

    if report.warnings:
        failed = ", ".join(warning.table for warning in report.warnings)
        run_logger.log("sample", f"Sample rows missing for: {failed}", "warning")
    run_logger.log("render", f"Rendered {len(report.text)} characters")

    return report.model_copy(update={"steps": run_logger.get_logs()})


async def render_table_info(
    snapshot: Sequence[Table],
    include_tables: Optional[Sequence[str]],
    ignore_tables: Optional[Sequence[str]],
    sample_rows: int,
    executor: QueryExecutor,
    dialect: Union[Dialect, str],
) -> str:
    """Same as render_table_info_report, text only."""
    report = await render_table_info_report(
        snapshot, include_tables, ignore_tables, sample_rows, executor, dialect
    )
    return report.text

import logging
from typing import List, Optional, Sequence, Union

from tableinfo.core.database import QueryExecutor
from tableinfo.core.errors import UnsupportedDialect
from tableinfo.core.introspection import dialects, pipeline
from tableinfo.core.schemas import (
    Dialect,
    SerializedSqlDatabase,
    Table,
    TableInfoReport,
)

TARGET_TABLES_PREFIX = "Wrong target table name:"

logger = logging.getLogger(__name__)


class SqlDatabase:
    """
    A database as seen by a prompt: its tables, which of them to show and how
    many sample rows to print.

    Build it with `await SqlDatabase.from_executor(...)`; the snapshot is read
    once at that point and the include/ignore lists are checked against it.

    Example:
        db = await SqlDatabase.from_executor(EngineExecutor(engine), ignore_tables=["audit"])
        prompt_context = await db.get_table_info()
    """

    def __init__(
        self,
        executor: QueryExecutor,
        dialect: Dialect,
        all_tables: List[Table],
        include_tables: Sequence[str] = (),
        ignore_tables: Sequence[str] = (),
        sample_rows_in_table_info: int = 3,
    ):
        if sample_rows_in_table_info < 0:
            raise ValueError("sample_rows_in_table_info must be >= 0")

        pipeline.verify_include_tables_exist(all_tables, include_tables)
        pipeline.verify_ignore_tables_exist(all_tables, ignore_tables)

        self.executor = executor
        self.dialect = dialect
        self.all_tables = all_tables
        self.include_tables = list(include_tables)
        self.ignore_tables = list(ignore_tables)
        self.sample_rows_in_table_info = sample_rows_in_table_info

    @classmethod
    async def from_executor(
        cls,
        executor: QueryExecutor,
        dialect: Optional[Union[Dialect, str]] = None,
        include_tables: Sequence[str] = (),
        ignore_tables: Sequence[str] = (),
        sample_rows_in_table_info: int = 3,
    ) -> "SqlDatabase":
        """
        Introspect the database behind `executor`.

        Args:
            executor: Runs catalog and sample queries
            dialect: Database kind; defaults to `executor.dialect` when the
                executor has one (EngineExecutor does)
            include_tables: Only these tables are rendered
            ignore_tables: These tables are never rendered
            sample_rows_in_table_info: LIMIT of each sample query

        Raises:
            UnsupportedDialect: no dialect given and none on the executor,
                or one we have no catalog query for
            TableNotFound: a listed table is not in the database
        """
        if dialect is None:
            dialect = getattr(executor, "dialect", None)
        if not dialect:
            raise UnsupportedDialect(
                None,
                "No dialect supplied and the executor does not expose one; "
                "pass dialect= to SqlDatabase.from_executor",
            )
        resolved = dialects.resolve_dialect(dialect)

        all_tables = await pipeline.list_tables_and_columns(executor, resolved)
        return cls(
            executor,
            resolved,
            all_tables,
            include_tables=include_tables,
            ignore_tables=ignore_tables,
            sample_rows_in_table_info=sample_rows_in_table_info,
        )

    @property
    def table_names(self) -> List[str]:
        return [table.name for table in self.all_tables]

    @property
    def usable_table_names(self) -> List[str]:
        """Tables left after applying the include and ignore lists."""
        return [
            table.name
            for table in pipeline.filter_tables(
                self.all_tables, self.include_tables, self.ignore_tables
            )
        ]

    async def get_table_info_report(
        self, target_tables: Optional[Sequence[str]] = None
    ) -> TableInfoReport:
        """
        Render the configured tables, or just `target_tables` when given.

        Target tables must exist but are not limited by the include/ignore lists.
        """
        if not target_tables:
            return await pipeline.render_table_info_report(
                self.all_tables,
                self.include_tables,
                self.ignore_tables,
                self.sample_rows_in_table_info,
                self.executor,
                self.dialect,
            )

        pipeline.assert_tables_exist(
            self.all_tables, target_tables, TARGET_TABLES_PREFIX
        )
        logger.info(f"Rendering target tables: {', '.join(target_tables)}")
        return await pipeline.render_table_info_report(
            self.all_tables,
            target_tables,
            None,
            self.sample_rows_in_table_info,
            self.executor,
            self.dialect,
        )

    async def get_table_info(self, target_tables: Optional[Sequence[str]] = None) -> str:
        report = await self.get_table_info_report(target_tables)
        return report.text

    def serialize(self) -> SerializedSqlDatabase:
        return SerializedSqlDatabase(
            dialect=self.dialect,
            include_tables=self.include_tables,
            ignore_tables=self.ignore_tables,
            sample_rows_in_table_info=self.sample_rows_in_table_info,
        )

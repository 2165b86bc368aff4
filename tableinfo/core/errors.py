"""Errors raised while introspecting and rendering a database schema."""

from typing import Optional


class TableInfoError(Exception):
    """Base class for every error raised by tableinfo."""


class UnsupportedDialect(TableInfoError, ValueError):
    """The database kind has no catalog query."""

    def __init__(self, dialect: Optional[str], message: Optional[str] = None):
        self.dialect = dialect
        super().__init__(message or f"Database type not implemented yet: {dialect}")


class TableNotFound(TableInfoError, LookupError):
    """A table named in an include/ignore/target list is absent from the snapshot."""

    def __init__(self, context_label: str, table_name: str):
        self.context_label = context_label
        self.table_name = table_name
        super().__init__(
            f"{context_label} the table {table_name} was not found in the database"
        )


class SampleQueryFailure(TableInfoError):
    """The sample-rows query for one table failed."""

    def __init__(self, table: str, query: str, cause: Optional[BaseException] = None):
        self.table = table
        self.query = query
        self.cause = cause
        super().__init__(f"Sample query for table {table} failed: {cause}")

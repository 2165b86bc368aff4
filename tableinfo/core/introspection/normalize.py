# tableinfo/core/introspection/normalize.py
"""
NORMALIZE MODULE - Group flat catalog rows into tables

Data Flow:
    raw rows → RawCatalogRow (validated) → {table_name: [Column, ...]} → [Table, ...]

This is a fold, not a sort: tables come out in the order they first appear in
the catalog rows, columns in the order of their rows.
"""

from typing import Any, Dict, Iterable, List, Mapping

from tableinfo.core.schemas import Column, RawCatalogRow, Table


def to_column(row: RawCatalogRow) -> Column:
    return Column(
        name=row.column_name,
        data_type=row.data_type,
        is_nullable=row.is_nullable,
    )


def normalize(raw_rows: Iterable[Mapping[str, Any]]) -> List[Table]:
    """
    Build a schema snapshot from catalog rows.

    Args:
        raw_rows: Rows shaped as (table_name, column_name, data_type, is_nullable),
            already ordered by table then ordinal position

    Returns:
        Tables in first-appearance order, each with its columns in row order

    Raises:
        pydantic.ValidationError: a row has no table or column name

    Example:
        Input:
            [
                {"table_name": "T1", "column_name": "a", "data_type": "int", "is_nullable": "NO"},
                {"table_name": "T1", "column_name": "b", "data_type": "text", "is_nullable": "YES"},
                {"table_name": "T2", "column_name": "c", "data_type": "int", "is_nullable": "NO"},
            ]

        Output:
            [Table(name="T1", columns=[a, b]), Table(name="T2", columns=[c])]
    """
    grouped: Dict[str, List[Column]] = {}

    for raw_row in raw_rows:
        row = RawCatalogRow.model_validate(dict(raw_row))
        grouped.setdefault(row.table_name, []).append(to_column(row))

    return [Table(name=name, columns=columns) for name, columns in grouped.items()]

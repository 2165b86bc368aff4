from typing import Any, Dict, List, Literal, Optional, Union
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


# =========================
# Enums
# =========================
class Dialect(str, Enum):
    POSTGRES = "postgres"
    SQLITE = "sqlite"
    MYSQL = "mysql"
    MARIADB = "mariadb"

    @property
    def is_mysql_family(self) -> bool:
        return self in (Dialect.MYSQL, Dialect.MARIADB)


# =========================
# RAW CATALOG ROW
# =========================
class RawCatalogRow(BaseModel):
    """One row of a catalog query, whatever the dialect."""

    table_name: str
    column_name: str
    data_type: Optional[str] = None
    is_nullable: bool = False

    model_config = ConfigDict(extra="ignore")

    @field_validator("is_nullable", mode="before")
    @classmethod
    def parse_is_nullable(cls, value: Union[str, bool, None]) -> bool:
        # information_schema says 'YES'/'NO', some drivers hand back booleans
        if isinstance(value, bool):
            return value
        if value is None:
            return False
        return str(value).strip().upper() == "YES"


# =========================
# SCHEMA SNAPSHOT
# =========================
class Column(BaseModel):
    name: str
    data_type: Optional[str] = None
    is_nullable: bool = False

    model_config = ConfigDict(frozen=True)


class Table(BaseModel):
    name: str
    columns: List[Column] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @property
    def column_names(self) -> List[str]:
        return [column.name for column in self.columns]


# =========================
# RENDERING
# =========================
class SampleWarning(BaseModel):
    table: str
    query: str
    error: str


class TableInfoReport(BaseModel):
    text: str
    warnings: List[SampleWarning] = Field(default_factory=list)
    steps: List[Dict[str, Any]] = Field(default_factory=list)


class TableInfoResponse(BaseModel):
    table_info: str
    warnings: List[SampleWarning] = Field(default_factory=list)
    steps: List[Dict[str, Any]] = Field(default_factory=list)


# =========================
# SQL DATABASE
# =========================
class SerializedSqlDatabase(BaseModel):
    type: Literal["sql_database"] = "sql_database"
    dialect: Dialect
    include_tables: List[str] = Field(default_factory=list)
    ignore_tables: List[str] = Field(default_factory=list)
    sample_rows_in_table_info: int = Field(default=3, ge=0)

import logging
from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from tableinfo.core import schemas
from tableinfo.core.config import settings
from tableinfo.core.database import EngineExecutor, get_executor
from tableinfo.core.errors import TableNotFound, UnsupportedDialect
from tableinfo.core.introspection import pipeline

router = APIRouter(prefix="/schema", tags=["Schema"])

executor_dep = Annotated[EngineExecutor, Depends(get_executor)]


async def load_snapshot(executor: EngineExecutor) -> List[schemas.Table]:
    try:
        return await pipeline.list_tables_and_columns(executor, executor.dialect)
    except UnsupportedDialect as error:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, str(error))


# Tables and columns
@router.get(
    "/tables",
    response_model=List[schemas.Table],
    status_code=status.HTTP_200_OK,
)
async def get_tables(executor: executor_dep):
    return await load_snapshot(executor)


# Prompt-ready description
@router.get("/table-info", response_model=schemas.TableInfoResponse)
async def get_table_info(
    executor: executor_dep,
    include_tables: Annotated[Optional[List[str]], Query()] = None,
    ignore_tables: Annotated[Optional[List[str]], Query()] = None,
    sample_rows: Annotated[Optional[int], Query(ge=0)] = None,
):
    """
    Render CREATE TABLE declarations and sample rows for the database.
    Lists and sample size fall back to the configured defaults.
    """
    snapshot = await load_snapshot(executor)

    try:
        report = await pipeline.render_table_info_report(
            snapshot,
            include_tables if include_tables is not None else settings.INCLUDE_TABLES,
            ignore_tables if ignore_tables is not None else settings.IGNORE_TABLES,
            sample_rows if sample_rows is not None else settings.SAMPLE_ROWS_IN_TABLE_INFO,
            executor,
            executor.dialect,
        )
    except TableNotFound as error:
        logging.warning(f"Table info request rejected: {error}")
        raise HTTPException(status.HTTP_404_NOT_FOUND, str(error))

    return schemas.TableInfoResponse(
        table_info=report.text, warnings=report.warnings, steps=report.steps
    )

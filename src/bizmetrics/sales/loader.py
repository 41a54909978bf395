from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import pandas as pd

from bizmetrics.config.settings import settings
from bizmetrics.errors import DataStoreError
from bizmetrics.sales.mapping import (
    FIELD_TO_COLUMN,
    STATUS_TO_CATEGORY,
    Order,
    clamp_page,
    map_sales_rows,
    total_pages,
)
from bizmetrics.store.supabase_client import SupabaseStore

logger = logging.getLogger(__name__)

SNAPSHOT_NAME = "salesdata.parquet"


@dataclass
class SalesLoad:
    rows: list[dict[str, Any]] = field(default_factory=list)
    source: str = "none"  # store | snapshot | none
    error: str | None = None


def snapshot_path():
    return settings.PROCESSED_DIR / SNAPSHOT_NAME


def read_snapshot() -> list[dict[str, Any]]:
    df = pd.read_parquet(snapshot_path())
    return df.astype(object).where(df.notna(), None).to_dict(orient="records")


def load_sales_rows(store: SupabaseStore) -> SalesLoad:
    """
    All salesdata rows, from the store if reachable, else from the local snapshot.

    An empty `rows` with source "none" tells the page to use built-in samples.
    """
    try:
        return SalesLoad(rows=store.fetch_rows(settings.SALES_TABLE), source="store")
    except DataStoreError as exc:
        logger.warning("Sales rows unavailable from store: %s", exc)
        error = str(exc)

    if snapshot_path().exists():
        logger.info("Using sales snapshot %s", snapshot_path())
        return SalesLoad(rows=read_snapshot(), source="snapshot", error=error)
    return SalesLoad(rows=[], source="none", error=error)


def fetch_orders_page(
    store: SupabaseStore,
    status: str = "all",
    sort_field: str = "created_at",
    ascending: bool = False,
    page: int = 1,
    page_size: int = settings.PAGE_SIZE,
) -> tuple[list[Order], int, int]:
    """
    One page of orders, filtered and sorted by the store.

    Returns (orders, matching count, total pages). A page past the end
    yields the last page. Raises DataStoreError.
    """
    category = STATUS_TO_CATEGORY.get(status)
    ilike = ("Order Category", category) if category else None

    count = store.count_rows(settings.SALES_TABLE, ilike=ilike)
    pages = total_pages(count, page_size)
    rows = store.query_page(
        settings.SALES_TABLE,
        order_by=FIELD_TO_COLUMN.get(sort_field, "Date"),
        ascending=ascending,
        offset=(clamp_page(page, pages) - 1) * page_size,
        limit=page_size,
        ilike=ilike,
    )
    return map_sales_rows(rows), count, pages

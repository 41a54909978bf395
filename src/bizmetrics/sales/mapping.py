from __future__ import annotations

# Mapping raw `salesdata` rows into the shapes the pages display.
# - Raw rows are flat records keyed by spreadsheet-style column names
#   ("Invoice Number", "Total Revenue", ...), with numbers stored as strings.
# - Every numeric field goes through formatting.parse_value.

import math
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Any, Iterable

import numpy as np
import pandas as pd

from bizmetrics.calc.metrics import safe_ratio
from bizmetrics.formatting.formatters import (
    calculate_average,
    calculate_percentage_change,
    calculate_total,
    parse_value,
)


# Order field -> salesdata column (sorting happens on the column)
FIELD_TO_COLUMN = {
    "id": "Invoice Number",
    "created_at": "Date",
    "customer_name": "Customer",
    "product_name": "Item",
    "quantity": "Quantity",
    "price": "Product Revenue",
    "total": "Total Revenue",
    "status": "Order Category",
}

# Status filter -> substring matched against "Order Category"
STATUS_TO_CATEGORY = {
    "completed": "Direct",
    "processing": "Pending",
    "shipped": "Shipping",
}

STATUSES = ["all", *STATUS_TO_CATEGORY]

METRIC_CATEGORIES = [
    "Cost of Goods",
    "Unit Metrics",
    "SG&A Expenses",
    "Business Performance",
    "Product Lines",
]


@dataclass(frozen=True)
class Order:
    id: str
    created_at: str
    customer_name: str
    product_name: str
    quantity: int
    price: float
    total: float
    status: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class InterestMetric:
    id: str
    name: str
    category: str
    value: float
    previous_value: float
    change: float
    unit: str  # currency | percentage | count
    description: str = ""


def determine_status(category: str | None) -> str:
    c = (category or "").lower()
    if "direct" in c:
        return "completed"
    if "pending" in c:
        return "processing"
    if "shipping" in c:
        return "shipped"
    return "completed"


def map_sales_row(row: dict[str, Any]) -> Order:
    return Order(
        id=str(row.get("Invoice Number") or row.get("UUID") or "N/A"),
        created_at=str(row.get("Date") or datetime.now(timezone.utc).isoformat()),
        customer_name=str(row.get("Customer") or "N/A"),
        product_name=str(row.get("Item") or "N/A"),
        quantity=int(parse_value(row.get("Quantity"))),
        price=parse_value(row.get("Product Revenue")),
        total=parse_value(row.get("Total Revenue")),
        status=determine_status(row.get("Order Category")),
    )


def map_sales_rows(rows: Iterable[dict[str, Any]]) -> list[Order]:
    return [map_sales_row(r) for r in rows]


def orders_frame(orders: Iterable[Order]) -> pd.DataFrame:
    columns = list(FIELD_TO_COLUMN)
    return pd.DataFrame([o.to_dict() for o in orders], columns=columns)


def filter_sort_page(
    orders: list[Order],
    status: str = "all",
    sort_field: str = "created_at",
    ascending: bool = False,
    page: int = 1,
    page_size: int = 10,
) -> tuple[list[Order], int, int]:
    """
    Local equivalent of the store query, used on fallback data.

    Returns (orders on the requested page, matching count, total pages).
    A page past the end yields the last page.
    """
    if sort_field not in FIELD_TO_COLUMN:
        sort_field = "created_at"

    matching = [o for o in orders if status == "all" or o.status == status]
    matching.sort(key=lambda o: getattr(o, sort_field), reverse=not ascending)

    total = len(matching)
    pages = total_pages(total, page_size)
    start = (clamp_page(page, pages) - 1) * page_size
    return matching[start : start + page_size], total, pages


def total_pages(count: int, page_size: int) -> int:
    return math.ceil(count / page_size) if page_size > 0 else 0


def clamp_page(page: int, pages: int) -> int:
    # 1-based; an empty result still has page 1
    return min(max(page, 1), max(pages, 1))


def page_totals(orders: list[Order]) -> tuple[float, float]:
    """(sum, average) of order totals on one page; (0.0, 0.0) when empty."""
    totals = [o.total for o in orders]
    return calculate_total(totals), calculate_average(totals)


def _revenue_frame(rows: list[dict[str, Any]]) -> pd.DataFrame:
    df = pd.DataFrame(rows)
    for col in ("Total Revenue", "Quantity", "Product Line"):
        if col not in df.columns:
            df[col] = None
    df["revenue"] = df["Total Revenue"].map(parse_value)
    df["units"] = df["Quantity"].map(parse_value)
    return df


def sales_to_metrics(rows: list[dict[str, Any]], seed: int = 7) -> list[InterestMetric]:
    """
    Derive the Metrics of Interest list from raw sales rows.

    Previous-period values are planning proxies, not history:
    - total revenue: 90% of current; total orders: floor(92%) of current
    - each product line: a seeded draw in [0.85, 1.05) of current
    - COGS: 60% of current revenue vs 62% of previous revenue
    """
    df = _revenue_frame(rows)
    rng = np.random.default_rng(seed)

    total_revenue = float(df["revenue"].sum())
    previous_revenue = total_revenue * 0.9
    total_orders = len(df)
    previous_orders = math.floor(total_orders * 0.92)

    metrics = [
        InterestMetric(
            "1", "Total Revenue", "Business Performance",
            total_revenue, previous_revenue,
            calculate_percentage_change(total_revenue, previous_revenue),
            "currency", "Total revenue from all product lines and channels",
        ),
        InterestMetric(
            "2", "Total Orders", "Business Performance",
            float(total_orders), float(previous_orders),
            calculate_percentage_change(total_orders, previous_orders),
            "count", "Total number of orders processed",
        ),
    ]

    lines = [p for p in df["Product Line"].dropna().unique().tolist() if str(p).strip()]
    for i, line in enumerate(lines, start=1):
        revenue = float(df.loc[df["Product Line"] == line, "revenue"].sum())
        previous = revenue * (0.85 + rng.random() * 0.2)
        metrics.append(
            InterestMetric(
                f"pl-{i}", f"{line} Revenue", "Product Lines",
                revenue, previous, calculate_percentage_change(revenue, previous),
                "currency", f"Total revenue from {line} product line",
            )
        )

    total_cost = total_revenue * 0.6
    previous_cost = previous_revenue * 0.62
    metrics.append(
        InterestMetric(
            "cogs-1", "Total COGS", "Cost of Goods",
            total_cost, previous_cost, calculate_percentage_change(total_cost, previous_cost),
            "currency", "Total cost of goods sold",
        )
    )
    return metrics


def filter_metrics(
    metrics: Iterable[InterestMetric],
    search: str = "",
    category: str = "all",
) -> list[InterestMetric]:
    term = search.strip().lower()
    out = []
    for m in metrics:
        if category != "all" and m.category != category:
            continue
        if term and term not in m.name.lower() and term not in m.description.lower():
            continue
        out.append(m)
    return out


def product_summary(rows: list[dict[str, Any]]) -> pd.DataFrame:
    """Revenue, units and average price per product line, largest revenue first."""
    df = _revenue_frame(rows)
    df = df[df["Product Line"].notna() & (df["Product Line"].astype(str).str.strip() != "")]
    summary = (
        df.groupby("Product Line", as_index=False)[["revenue", "units"]]
        .sum()
        .rename(columns={"Product Line": "product_line"})
    )
    summary["avg_price"] = [safe_ratio(r, u) for r, u in zip(summary["revenue"], summary["units"])]
    return summary.sort_values("revenue", ascending=False).reset_index(drop=True)

from __future__ import annotations

import re
from dataclasses import asdict, dataclass, field
from typing import Iterable

import pandas as pd

from bizmetrics.config.settings import settings
from bizmetrics.errors import InvalidParameterError
from bizmetrics.formatting.formatters import (
    format_currency,
    format_metric_value,
    format_number,
    format_percentage_change,
)
from bizmetrics.sales.mapping import InterestMetric

MONTHS = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]
YEARS = ["2023", "2024", "2025"]


@dataclass(frozen=True)
class ReportMetric:
    name: str
    value: str
    change: str  # "+12%", "-5%"


@dataclass(frozen=True)
class ReportProduct:
    name: str
    revenue: str
    units: str
    avg_price: str


@dataclass(frozen=True)
class MonthlyReport:
    """Everything the PDF renderer needs; all values are display-ready strings."""

    month: str
    year: str
    metrics: list[ReportMetric] = field(default_factory=list)
    products: list[ReportProduct] = field(default_factory=list)
    executive_summary: str = ""
    include_graphs: bool = True
    include_raw_data: bool = True
    include_executive_summary: bool = True

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: dict) -> "MonthlyReport":
        return cls(
            month=d["month"],
            year=d["year"],
            metrics=[ReportMetric(**m) for m in d.get("metrics", [])],
            products=[ReportProduct(**p) for p in d.get("products", [])],
            executive_summary=d.get("executive_summary", ""),
            include_graphs=d.get("include_graphs", True),
            include_raw_data=d.get("include_raw_data", True),
            include_executive_summary=d.get("include_executive_summary", True),
        )


SAMPLE_METRICS = [
    ReportMetric("Total Revenue", "$3,245,000", "+12%"),
    ReportMetric("Total Orders", "1,248", "+8%"),
    ReportMetric("Average Order Value", "$2,600", "+4%"),
    ReportMetric("Production Efficiency", "87%", "+2%"),
    ReportMetric("Process Labor", "$245,000", "-5%"),
    ReportMetric("Raw Material", "$567,000", "+3%"),
    ReportMetric("Packaging", "$123,000", "-2%"),
    ReportMetric("Total COGS", "$1,024,000", "+1%"),
]

SAMPLE_PRODUCTS = [
    ReportProduct("Product A", "$1,200,000", "450", "$2,667"),
    ReportProduct("Product B", "$1,800,000", "620", "$2,903"),
    ReportProduct("Product C", "$800,000", "320", "$2,500"),
    ReportProduct("Product D", "$600,000", "250", "$2,400"),
]

_SUMMARY_TEMPLATE = """
    In {month} {year}, {company} continued to show strong performance across key metrics.
    Total revenue increased by 12% compared to the previous month, driven primarily by growth in Product B sales.
    Production efficiency improved by 2 percentage points, reflecting the impact of recent process improvements and equipment upgrades.
    Process labor costs decreased by 5%, demonstrating the effectiveness of our automation initiatives. However, raw material costs
    increased by 3% due to supply chain challenges that we are actively addressing.
    Looking ahead, we anticipate continued growth in Q2, with a focus on expanding our Product B line and further optimizing
    our production processes to maintain margin improvements.
"""


def executive_summary(month: str, year: str) -> str:
    text = _SUMMARY_TEMPLATE.format(month=month, year=year, company=settings.COMPANY_NAME)
    return re.sub(r"\s+", " ", text).strip()


def report_metrics_from(metrics: Iterable[InterestMetric]) -> list[ReportMetric]:
    return [
        ReportMetric(m.name, format_metric_value(m.value, m.unit), format_percentage_change(m.change, 0))
        for m in metrics
    ]


def report_products_from(summary: pd.DataFrame) -> list[ReportProduct]:
    # summary: output of sales.mapping.product_summary
    return [
        ReportProduct(
            name=str(r.product_line),
            revenue=format_currency(r.revenue),
            units=format_number(r.units),
            avg_price=format_currency(r.avg_price),
        )
        for r in summary.itertuples(index=False)
    ]


def build_report_data(
    month: str,
    year: str,
    include_graphs: bool = True,
    include_raw_data: bool = True,
    include_executive_summary: bool = True,
    metrics: list[ReportMetric] | None = None,
    products: list[ReportProduct] | None = None,
) -> MonthlyReport:
    if month not in MONTHS:
        raise InvalidParameterError(f"Unknown month: {month!r}")
    if not str(year).isdigit():
        raise InvalidParameterError(f"Invalid year: {year!r}")

    return MonthlyReport(
        month=month,
        year=str(year),
        metrics=list(metrics) if metrics is not None else list(SAMPLE_METRICS),
        products=list(products) if products is not None else list(SAMPLE_PRODUCTS),
        executive_summary=executive_summary(month, str(year)),
        include_graphs=include_graphs,
        include_raw_data=include_raw_data,
        include_executive_summary=include_executive_summary,
    )

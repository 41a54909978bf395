from __future__ import annotations

# Built-in sample data.
# - Shown whenever the data store is unreachable or empty, with an inline notice.
# - Values mirror the company's February 2025 figures used in demos.

import numpy as np
import pandas as pd

from bizmetrics.sales.mapping import InterestMetric, Order

SAMPLE_ORDERS: list[Order] = [
    Order("ORD-001", "2025-02-15T10:30:00Z", "Acme Industries", "KX-200", 50, 1200, 60000, "completed"),
    Order("ORD-002", "2025-02-14T14:45:00Z", "TechCorp Solutions", "DX-100", 25, 1800, 45000, "processing"),
    Order("ORD-003", "2025-02-12T09:15:00Z", "Global Manufacturing", "EX-300", 100, 950, 95000, "completed"),
    Order("ORD-004", "2025-02-10T16:20:00Z", "Precision Tools Inc.", "KX-150", 30, 1100, 33000, "shipped"),
    Order("ORD-005", "2025-02-08T11:00:00Z", "Advanced Materials Co.", "DX-200", 75, 1500, 112500, "completed"),
    Order("ORD-006", "2025-02-05T13:30:00Z", "Industrial Solutions", "EX-100", 40, 850, 34000, "processing"),
    Order("ORD-007", "2025-02-03T10:45:00Z", "Quality Products Ltd.", "KX-300", 60, 1350, 81000, "shipped"),
    Order("ORD-008", "2025-02-01T09:00:00Z", "Innovative Manufacturing", "DX-150", 35, 1650, 57750, "completed"),
]


def sample_metrics() -> list[InterestMetric]:
    return [
        InterestMetric("1", "Total Revenue", "Business Performance", 3245000, 2950000, 0.1,
                       "currency", "Total revenue from all product lines and channels"),
        InterestMetric("2", "Total Orders", "Business Performance", 1248, 1150, 0.085,
                       "count", "Total number of orders processed"),
        InterestMetric("3", "Average GM", "Business Performance", 0.42, 0.39, 0.077,
                       "percentage", "Average gross margin across all products"),
        InterestMetric("4", "Process Labor", "Cost of Goods", 245000, 258000, -0.05,
                       "currency", "Total cost of labor for production processes"),
        InterestMetric("5", "Raw Material", "Cost of Goods", 567000, 550000, 0.031,
                       "currency", "Total cost of raw materials"),
        InterestMetric("6", "Packaging", "Cost of Goods", 123000, 125000, -0.016,
                       "currency", "Total cost of packaging materials"),
        InterestMetric("7", "Total COGS", "Cost of Goods", 1024000, 1015000, 0.009,
                       "currency", "Total cost of goods sold"),
        InterestMetric("8", "Unit Process Labor", "Unit Metrics", 196.31, 224.35, -0.125,
                       "currency", "Process labor cost per unit"),
        InterestMetric("9", "Unit Raw Material", "Unit Metrics", 454.33, 478.26, -0.05,
                       "currency", "Raw material cost per unit"),
        InterestMetric("10", "KX Revenue", "Product Lines", 1200000, 1050000, 0.143,
                       "currency", "Total revenue from KX product line"),
        InterestMetric("11", "DX Revenue", "Product Lines", 1450000, 1300000, 0.115,
                       "currency", "Total revenue from DX product line"),
        InterestMetric("12", "EX Revenue", "Product Lines", 595000, 600000, -0.008,
                       "currency", "Total revenue from EX product line"),
        InterestMetric("13", "Sales & Marketing", "SG&A Expenses", 325000, 300000, 0.083,
                       "currency", "Total sales and marketing expenses"),
        InterestMetric("14", "Overhead Labor", "SG&A Expenses", 450000, 435000, 0.034,
                       "currency", "Total overhead labor costs"),
    ]


DASHBOARD_STATS = {
    "total_orders": 1248,
    "total_revenue": 3245000,
    "avg_order_value": 2600,
    "production_efficiency": 87,
    "recent_metrics": [
        {"name": "Process Labor", "value": "$245,000", "trend": "up"},
        {"name": "Raw Material", "value": "$567,000", "trend": "down"},
        {"name": "Packaging", "value": "$123,000", "trend": "stable"},
        {"name": "Maintenance", "value": "$89,000", "trend": "up"},
        {"name": "Total COGS", "value": "$1,024,000", "trend": "down"},
    ],
}

# Metric catalogue for the Metrics Graph page
METRIC_CATALOGUE: dict[str, list[str]] = {
    "Cost of Goods": [
        "Process Labor", "Raw Material", "Packaging", "Maintenance", "Waste",
        "Inventory", "Utilities", "Shipping", "Total COGS",
    ],
    "Unit Metrics": [
        "Unit Process Labor", "Unit Raw Material", "Unit Packaging", "Unit Maintenance",
        "Unit Waste", "Unit Inventory", "Unit Utilities", "Unit Shipping", "Total Unit COGS",
    ],
    "SG&A Expenses": [
        "Professional Fees", "Sales & Marketing", "Overhead Labor", "Benefits", "Accounting",
        "Equipment Rental", "Tax", "Insurance", "Office", "Banking", "R&D", "Warehouse",
        "Misc", "Legal", "Total Expenses",
    ],
    "Business Performance": [
        "Total Orders", "Tons", "Product Revenue", "Tons/Order", "Revenue/Order",
        "Average Price", "Average GM", "Average OM", "% Average GM", "% Average OM",
    ],
    "Product Lines": [
        "KX Orders", "KX Tons", "KX Revenue", "KX Avg Price", "KX Avg GM", "KX Avg OM",
        "DX Orders", "DX Tons", "DX Revenue", "DX Avg Price", "DX Avg GM", "DX Avg OM",
        "EX Orders", "EX Tons", "EX Revenue", "EX Avg Price", "EX Avg GM", "EX Avg OM",
    ],
}

MONTH_LABELS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


def monthly_series(metrics: list[str], seed: int = 42) -> pd.DataFrame:
    """
    Twelve months of demo values per metric, long format (month, metric, value).

    Each metric gets its own generator seeded from (seed, position in the
    catalogue), so a metric's line does not change when others are toggled.
    """
    catalogue = [m for names in METRIC_CATALOGUE.values() for m in names]
    rows = []
    for metric in metrics:
        key = catalogue.index(metric) if metric in catalogue else len(catalogue)
        rng = np.random.default_rng([seed, key])
        values = rng.integers(0, 1_000_000, size=len(MONTH_LABELS))
        for month_idx, (month, value) in enumerate(zip(MONTH_LABELS, values)):
            rows.append({"month": month, "month_idx": month_idx, "metric": metric, "value": float(value)})
    return pd.DataFrame(rows, columns=["month", "month_idx", "metric", "value"])

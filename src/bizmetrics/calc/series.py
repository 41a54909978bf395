from __future__ import annotations

from dataclasses import dataclass, fields, is_dataclass, replace
from typing import TYPE_CHECKING, Any, Callable, Iterable, Sequence

import pandas as pd

from bizmetrics.calc.metrics import calculate_scenario_results
from bizmetrics.errors import InvalidParameterError

if TYPE_CHECKING:
    from bizmetrics.scenarios.scenario_book import Scenario


# Bar-chart contract for the scenario comparison: order matters to the UI.
COMPARISON_FIELDS: tuple[tuple[str, str], ...] = (
    ("revenue", "Revenue"),
    ("cogs", "COGS"),
    ("gross_profit", "Gross Profit"),
    ("operating_expenses", "Operating Expenses"),
    ("operating_profit", "Operating Profit"),
)

EFFICIENCY_SWEEP = [70, 75, 80, 85, 90, 95, 100]
PRICE_SWEEP = [2000, 2200, 2400, 2600, 2800, 3000, 3200]


def replace_path(obj: Any, path: str, value: Any) -> Any:
    """
    Return a copy of `obj` with the dotted `path` set to `value`.

    Works through frozen dataclasses and dicts, e.g.
    replace_path(params, "production.efficiency", 90) or
    replace_path(params, "prices.kx", 1300). The original is never mutated.
    """
    head, _, rest = path.partition(".")

    if isinstance(obj, dict):
        if rest and head not in obj:
            raise InvalidParameterError(f"Unknown parameter path segment: {head!r}")
        out = dict(obj)
        out[head] = replace_path(obj[head], rest, value) if rest else value
        return out

    if is_dataclass(obj):
        names = {f.name for f in fields(obj)}
        if head not in names:
            raise InvalidParameterError(f"Unknown parameter: {head!r}")
        new_value = replace_path(getattr(obj, head), rest, value) if rest else value
        return replace(obj, **{head: new_value})

    raise InvalidParameterError(f"Cannot descend into {type(obj).__name__} at {head!r}")


def sweep(
    base: Any,
    field: str,
    values: Sequence[float],
    metric: str,
    calculate: Callable[[Any], Any] = calculate_scenario_results,
) -> list[tuple[float, float]]:
    """
    Sensitivity sweep: vary one parameter, hold everything else fixed.

    Returns (swept value, result metric) pairs in the same order as `values`.
    """
    points = []
    for v in values:
        result = calculate(replace_path(base, field, v))
        points.append((v, float(getattr(result, metric))))
    return points


def sweep_frame(points: Iterable[tuple[float, float]], series: str) -> pd.DataFrame:
    # Long format so several sweeps can share one Altair chart
    df = pd.DataFrame(list(points), columns=["x", "value"])
    df["step"] = range(len(df))
    df["series"] = series
    return df


@dataclass(frozen=True)
class ComparisonSeries:
    label: str
    values: tuple[float, ...]  # aligned with COMPARISON_FIELDS


def comparison_series(scenarios: Iterable["Scenario"]) -> list[ComparisonSeries]:
    """
    One series per scenario, each computed independently from its own parameters.

    The selection cap is not applied here; callers pass only what the user selected.
    """
    out = []
    for s in scenarios:
        results = calculate_scenario_results(s.parameters)
        out.append(
            ComparisonSeries(
                label=s.name,
                values=tuple(float(getattr(results, key)) for key, _ in COMPARISON_FIELDS),
            )
        )
    return out


def comparison_frame(series: Iterable[ComparisonSeries]) -> pd.DataFrame:
    rows = []
    for s in series:
        for (_, label), value in zip(COMPARISON_FIELDS, s.values):
            rows.append({"scenario": s.label, "metric": label, "value": value})
    return pd.DataFrame(rows, columns=["scenario", "metric", "value"])

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterable

from bizmetrics.config.settings import settings
from bizmetrics.errors import InvalidParameterError


# Sentinel for ratios whose denominator is zero (zero revenue, zero price, zero cost).
RATIO_SENTINEL = 0.0


def safe_ratio(numerator: float, denominator: float) -> float:
    if denominator == 0:
        return RATIO_SENTINEL
    return numerator / denominator


def pct(whole_number: float) -> float:
    # Percentage parameters are whole numbers: 85 means 85%.
    return whole_number / 100.0


@dataclass(frozen=True)
class Parameter:
    """
    A bounded numeric input driving the calculator.

    The UI keeps values inside [min, max] with slider bounds; constructing or
    updating a Parameter outside that range raises InvalidParameterError.
    """

    id: str
    name: str
    value: float
    min: float
    max: float
    step: float
    unit: str
    description: str = ""

    def __post_init__(self) -> None:
        if self.min > self.max:
            raise InvalidParameterError(
                f"{self.name}: min {self.min} is greater than max {self.max}"
            )
        if not self.min <= self.value <= self.max:
            raise InvalidParameterError(
                f"{self.name}: {self.value} is outside [{self.min}, {self.max}]"
            )

    def with_value(self, value: float) -> "Parameter":
        return replace(self, value=value)


@dataclass(frozen=True)
class Metric:
    id: str
    name: str
    value: float
    unit: str  # currency | percentage | count
    description: str = ""


# ---------------------------------------------------------------------------
# Variant A: single product configuration
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ProductInputs:
    efficiency: float = 85.0  # %
    material_cost: float = 450.0  # $/unit
    labor_hours: float = 12.0  # hours/unit
    selling_price: float = 2500.0  # $/unit
    monthly_production: float = 500.0  # units

    # Parameter.name -> field; the names are what the sliders and presets carry
    PARAMETER_FIELDS = {
        "Production Efficiency": "efficiency",
        "Raw Material Cost": "material_cost",
        "Labor Hours": "labor_hours",
        "Selling Price": "selling_price",
        "Monthly Production": "monthly_production",
    }

    @classmethod
    def from_parameters(cls, parameters: Iterable[Parameter]) -> "ProductInputs":
        """Missing parameters keep their default value."""
        values = {}
        for p in parameters:
            name = cls.PARAMETER_FIELDS.get(p.name)
            if name is not None:
                values[name] = float(p.value)
        return cls(**values)


@dataclass(frozen=True)
class ProductMetrics:
    labor_cost: float
    total_cost_per_unit: float
    gross_margin: float
    gross_margin_percent: float
    monthly_revenue: float
    monthly_cost: float
    monthly_profit: float
    roi: float
    adjusted_production: float
    adjusted_revenue: float
    adjusted_profit: float

    def to_metrics(self) -> list[Metric]:
        return [
            Metric("m1", "Unit Cost", self.total_cost_per_unit, "currency",
                   "Total cost to produce one unit"),
            Metric("m2", "Gross Margin", self.gross_margin, "currency",
                   "Profit per unit before operating expenses"),
            Metric("m3", "Gross Margin %", self.gross_margin_percent, "percentage",
                   "Gross margin as a percentage of selling price"),
            Metric("m4", "Monthly Revenue", self.adjusted_revenue, "currency",
                   "Total monthly revenue adjusted for efficiency"),
            Metric("m5", "Monthly Profit", self.adjusted_profit, "currency",
                   "Total monthly profit adjusted for efficiency"),
            Metric("m6", "ROI", self.roi, "percentage",
                   "Return on investment (monthly profit / monthly cost)"),
            Metric("m7", "Effective Production", self.adjusted_production, "count",
                   "Actual production after efficiency adjustment"),
        ]


def calculate_product_metrics(inputs: ProductInputs) -> ProductMetrics:
    labor_cost = inputs.labor_hours * settings.LABOR_RATE
    total_cost_per_unit = inputs.material_cost + labor_cost + settings.OVERHEAD_PER_UNIT

    gross_margin = inputs.selling_price - total_cost_per_unit
    gross_margin_percent = safe_ratio(gross_margin, inputs.selling_price)

    # Unadjusted month, used only for ROI
    monthly_revenue = inputs.selling_price * inputs.monthly_production
    monthly_cost = total_cost_per_unit * inputs.monthly_production
    monthly_profit = monthly_revenue - monthly_cost
    roi = safe_ratio(monthly_profit, monthly_cost)

    adjusted_production = inputs.monthly_production * pct(inputs.efficiency)
    adjusted_revenue = inputs.selling_price * adjusted_production
    adjusted_profit = adjusted_revenue - total_cost_per_unit * adjusted_production

    return ProductMetrics(
        labor_cost=labor_cost,
        total_cost_per_unit=total_cost_per_unit,
        gross_margin=gross_margin,
        gross_margin_percent=gross_margin_percent,
        monthly_revenue=monthly_revenue,
        monthly_cost=monthly_cost,
        monthly_profit=monthly_profit,
        roi=roi,
        adjusted_production=adjusted_production,
        adjusted_revenue=adjusted_revenue,
        adjusted_profit=adjusted_profit,
    )


def calculate_metrics(parameters: Iterable[Parameter]) -> list[Metric]:
    return calculate_product_metrics(ProductInputs.from_parameters(parameters)).to_metrics()


# ---------------------------------------------------------------------------
# Variant B: multi product line scenario
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CostRates:
    materials: float = 450.0  # $/unit
    labor: float = 350.0
    overhead: float = 250.0


@dataclass(frozen=True)
class Production:
    volume: float = 500.0  # units
    efficiency: float = 85.0  # %


@dataclass(frozen=True)
class Market:
    growth: float = 5.0  # %
    competition: float = 3.0  # %


def _default_mix() -> dict[str, float]:
    return {"kx": 40.0, "dx": 35.0, "ex": 25.0}


def _default_prices() -> dict[str, float]:
    return {"kx": 1200.0, "dx": 1800.0, "ex": 950.0}


@dataclass(frozen=True)
class ScenarioParameters:
    # product line -> raw mix share (any scale, normalized before use)
    product_mix: dict[str, float] = field(default_factory=_default_mix)
    # product line -> price per unit
    prices: dict[str, float] = field(default_factory=_default_prices)
    costs: CostRates = field(default_factory=CostRates)
    production: Production = field(default_factory=Production)
    market: Market = field(default_factory=Market)


@dataclass(frozen=True)
class ScenarioResults:
    revenue: float = 0.0
    cogs: float = 0.0
    gross_profit: float = 0.0
    gross_margin: float = 0.0
    operating_expenses: float = 0.0
    operating_profit: float = 0.0
    operating_margin: float = 0.0


def normalize_mix(product_mix: dict[str, float]) -> dict[str, float]:
    """Rescale raw shares so they sum to 100, keeping their proportions."""
    if any(v < 0 for v in product_mix.values()):
        raise InvalidParameterError(f"Product mix shares must be non-negative: {product_mix}")
    total = sum(product_mix.values())
    if total == 0:
        raise InvalidParameterError("Product mix shares sum to zero")
    return {line: share / total * 100.0 for line, share in product_mix.items()}


def calculate_scenario_results(params: ScenarioParameters) -> ScenarioResults:
    unknown = set(params.product_mix) - set(params.prices)
    if unknown:
        raise InvalidParameterError(f"No price for product line(s): {sorted(unknown)}")

    # Lines with a price but no mix entry sell nothing
    mix = {line: params.product_mix.get(line, 0.0) for line in params.prices}
    shares = normalize_mix(mix)

    effective_volume = params.production.volume * pct(params.production.efficiency)
    units = {line: effective_volume * pct(share) for line, share in shares.items()}

    total_revenue = sum(units[line] * params.prices[line] for line in units)
    total_units = sum(units.values())

    # Per-unit cost rates apply uniformly to every line
    c = params.costs
    total_cogs = c.materials * total_units + c.labor * total_units + c.overhead * total_units

    gross_profit = total_revenue - total_cogs
    operating_expenses = total_revenue * settings.OPEX_REVENUE_RATE + settings.FIXED_OPEX
    operating_profit = gross_profit - operating_expenses

    # Market: growth lifts revenue, competition erodes operating profit
    adjusted_revenue = total_revenue * (1 + pct(params.market.growth))
    adjusted_operating_profit = operating_profit * (1 - pct(params.market.competition))

    adjusted_gross_profit = adjusted_revenue - total_cogs
    return ScenarioResults(
        revenue=adjusted_revenue,
        cogs=total_cogs,
        gross_profit=adjusted_gross_profit,
        gross_margin=safe_ratio(adjusted_gross_profit, adjusted_revenue),
        operating_expenses=operating_expenses,
        operating_profit=adjusted_operating_profit,
        operating_margin=safe_ratio(adjusted_operating_profit, adjusted_revenue),
    )

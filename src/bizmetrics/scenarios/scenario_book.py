from __future__ import annotations

from dataclasses import dataclass, field, replace

from bizmetrics.calc.metrics import (
    CostRates,
    Market,
    Production,
    ScenarioParameters,
    ScenarioResults,
    calculate_scenario_results,
)
from bizmetrics.calc.series import replace_path
from bizmetrics.config.settings import settings


@dataclass(frozen=True)
class Scenario:
    """
    Named bundle of parameters plus the results derived from them.

    Results are never edited directly: build scenarios with Scenario.create
    or with_parameters so they are recomputed from the current parameters.
    """

    id: str
    name: str
    description: str
    parameters: ScenarioParameters
    results: ScenarioResults

    @classmethod
    def create(
        cls,
        id: str,
        name: str,
        description: str = "",
        parameters: ScenarioParameters | None = None,
    ) -> "Scenario":
        params = parameters or ScenarioParameters()
        return cls(id, name, description, params, calculate_scenario_results(params))

    def with_parameters(self, parameters: ScenarioParameters) -> "Scenario":
        return replace(self, parameters=parameters, results=calculate_scenario_results(parameters))

    def recalculated(self) -> "Scenario":
        return self.with_parameters(self.parameters)


def toggle_selection(
    selected: list[str],
    scenario_id: str,
    cap: int = settings.MAX_COMPARE_SCENARIOS,
) -> list[str]:
    """
    Toggle a scenario in the comparison selection.

    Deselecting always works. Selecting beyond `cap` is ignored: the returned
    list is unchanged, so the earlier selections are never displaced.
    """
    if scenario_id in selected:
        return [s for s in selected if s != scenario_id]
    if len(selected) >= cap:
        return list(selected)
    return [*selected, scenario_id]


def sample_scenarios() -> list[Scenario]:
    base = ScenarioParameters()
    return [
        Scenario.create(
            "1", "Current State", "Baseline scenario using current business parameters", base
        ),
        Scenario.create(
            "2",
            "Growth Strategy",
            "Increased production volume with higher market growth",
            replace(
                base,
                production=Production(volume=650, efficiency=82),
                market=Market(growth=8, competition=4),
            ),
        ),
        Scenario.create(
            "3",
            "Premium Pricing",
            "Higher prices with focus on DX product line",
            replace(
                base,
                product_mix={"kx": 30.0, "dx": 50.0, "ex": 20.0},
                prices={"kx": 1300.0, "dx": 2000.0, "ex": 1050.0},
            ),
        ),
        Scenario.create(
            "4",
            "Cost Reduction",
            "Lower material and labor costs with improved efficiency",
            replace(
                base,
                costs=CostRates(materials=400, labor=320, overhead=230),
                production=Production(volume=520, efficiency=90),
            ),
        ),
    ]


@dataclass
class ScenarioBook:
    """The scenarios on the Hypothetical Scenarios page and the comparison selection."""

    scenarios: list[Scenario] = field(default_factory=list)
    selected: list[str] = field(default_factory=list)

    @classmethod
    def sample(cls) -> "ScenarioBook":
        return cls(scenarios=sample_scenarios(), selected=["1", "2"])

    def get(self, scenario_id: str) -> Scenario | None:
        for s in self.scenarios:
            if s.id == scenario_id:
                return s
        return None

    def next_id(self) -> str:
        numeric = [int(s.id) for s in self.scenarios if s.id.isdigit()]
        return str(max([0, *numeric]) + 1)

    def create(self) -> Scenario:
        new_id = self.next_id()
        scenario = Scenario.create(
            new_id, f"New Scenario {new_id}", "Description of the new scenario"
        )
        self.scenarios.append(scenario)
        return scenario

    def duplicate(self, scenario_id: str) -> Scenario | None:
        source = self.get(scenario_id)
        if source is None:
            return None
        copy = replace(source, id=self.next_id(), name=f"{source.name} (Copy)").recalculated()
        self.scenarios.append(copy)
        return copy

    def save(self, scenario: Scenario) -> Scenario:
        # Always recompute on save so results match the edited parameters
        updated = scenario.recalculated()
        self.scenarios = [updated if s.id == updated.id else s for s in self.scenarios]
        return updated

    def delete(self, scenario_id: str) -> None:
        self.scenarios = [s for s in self.scenarios if s.id != scenario_id]
        self.selected = [s for s in self.selected if s != scenario_id]

    def can_delete(self) -> bool:
        return len(self.scenarios) > 1

    def toggle(self, scenario_id: str, cap: int = settings.MAX_COMPARE_SCENARIOS) -> None:
        self.selected = toggle_selection(self.selected, scenario_id, cap)

    def selected_scenarios(self) -> list[Scenario]:
        # Book order, not click order
        return [s for s in self.scenarios if s.id in self.selected]


@dataclass(frozen=True)
class ScenarioField:
    path: str  # dotted path into ScenarioParameters
    group: str
    label: str
    min: float
    max: float
    step: float


# Editor sliders, in display order
SCENARIO_FIELDS: tuple[ScenarioField, ...] = (
    ScenarioField("product_mix.kx", "Product Mix", "KX (%)", 0, 100, 5),
    ScenarioField("product_mix.dx", "Product Mix", "DX (%)", 0, 100, 5),
    ScenarioField("product_mix.ex", "Product Mix", "EX (%)", 0, 100, 5),
    ScenarioField("prices.kx", "Pricing", "KX price ($)", 800, 2000, 50),
    ScenarioField("prices.dx", "Pricing", "DX price ($)", 1200, 2500, 50),
    ScenarioField("prices.ex", "Pricing", "EX price ($)", 600, 1500, 50),
    ScenarioField("costs.materials", "Costs", "Materials ($/unit)", 300, 600, 10),
    ScenarioField("costs.labor", "Costs", "Labor ($/unit)", 250, 500, 10),
    ScenarioField("costs.overhead", "Costs", "Overhead ($/unit)", 150, 400, 10),
    ScenarioField("production.volume", "Production", "Volume (units)", 100, 1000, 25),
    ScenarioField("production.efficiency", "Production", "Efficiency (%)", 50, 100, 1),
    ScenarioField("market.growth", "Market", "Market growth (%)", -5, 15, 1),
    ScenarioField("market.competition", "Market", "Competition impact (%)", 0, 10, 1),
)


def get_path(obj, path: str):
    for part in path.split("."):
        obj = obj[part] if isinstance(obj, dict) else getattr(obj, part)
    return obj


def apply_edits(params: ScenarioParameters, values: dict[str, float]) -> ScenarioParameters:
    """Apply {dotted path: value} edits, e.g. from the editor sliders."""
    for path, value in values.items():
        params = replace_path(params, path, value)
    return params

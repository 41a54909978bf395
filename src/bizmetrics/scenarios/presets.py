from __future__ import annotations

import logging
import uuid
from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING

from bizmetrics.calc.metrics import Parameter
from bizmetrics.config.settings import settings
from bizmetrics.errors import DataStoreError, InvalidParameterError

if TYPE_CHECKING:
    from bizmetrics.store.supabase_client import SupabaseStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Preset:
    id: str
    name: str
    parameters: tuple[Parameter, ...]

    def to_record(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "parameters": [asdict(p) for p in self.parameters],
        }

    @classmethod
    def from_record(cls, record: dict) -> "Preset":
        return cls(
            id=str(record["id"]),
            name=str(record["name"]),
            parameters=tuple(Parameter(**p) for p in record.get("parameters") or []),
        )


def default_parameters() -> list[Parameter]:
    return [
        Parameter("p1", "Production Efficiency", 85, 50, 100, 1, "%",
                  "Overall efficiency of production processes"),
        Parameter("p2", "Raw Material Cost", 450, 300, 800, 10, "$/unit",
                  "Cost of raw materials per unit"),
        Parameter("p3", "Labor Hours", 12, 6, 24, 0.5, "hours/unit",
                  "Labor hours required per unit"),
        Parameter("p4", "Selling Price", 2500, 1500, 4000, 50, "$/unit",
                  "Average selling price per unit"),
        Parameter("p5", "Monthly Production", 500, 100, 1000, 25, "units",
                  "Number of units produced per month"),
    ]


def _preset(preset_id: str, name: str, base: list[Parameter], values: list[float]) -> Preset:
    return Preset(preset_id, name, tuple(p.with_value(v) for p, v in zip(base, values)))


def default_presets(base: list[Parameter] | None = None) -> list[Preset]:
    base = base or default_parameters()
    return [
        _preset("preset1", "High Efficiency", base, [95, 500, 10, 2600, 550]),
        _preset("preset2", "Cost Reduction", base, [90, 380, 9, 2400, 525]),
        _preset("preset3", "Premium Product", base, [88, 600, 15, 3200, 400]),
    ]


def update_parameter(parameters: list[Parameter], parameter_id: str, value: float) -> list[Parameter]:
    """Return a new list with one parameter's value changed (range-checked)."""
    if not any(p.id == parameter_id for p in parameters):
        raise InvalidParameterError(f"Unknown parameter id: {parameter_id!r}")
    return [p.with_value(value) if p.id == parameter_id else p for p in parameters]


def load_preset(preset: Preset) -> list[Parameter]:
    return list(preset.parameters)


def new_preset(name: str, parameters: list[Parameter]) -> Preset:
    # Every save is a new preset; existing presets are never overwritten
    return Preset(f"preset-{uuid.uuid4().hex[:12]}", name.strip(), tuple(parameters))


def save_preset(
    store: "SupabaseStore",
    name: str,
    parameters: list[Parameter],
    presets: list[Preset],
) -> tuple[list[Preset], str | None]:
    """
    Persist current parameters as a new preset.

    Returns (presets, error). On a store failure the preset is still kept in the
    returned list so the session can use it; the error text is for display.
    A blank name saves nothing.
    """
    if not name.strip():
        return list(presets), None

    preset = new_preset(name, parameters)
    error = None
    try:
        store.insert_rows(settings.PRESETS_TABLE, [preset.to_record()])
        logger.info("Saved preset %s (%s)", preset.name, preset.id)
    except DataStoreError as exc:
        logger.warning("Preset %s kept locally only: %s", preset.name, exc)
        error = f"Failed to save preset: {exc}"
    return [*presets, preset], error


def fetch_saved_presets(store: "SupabaseStore") -> list[Preset]:
    """Presets saved by users. Rows that no longer validate are skipped."""
    out = []
    for record in store.fetch_rows(settings.PRESETS_TABLE):
        try:
            out.append(Preset.from_record(record))
        except (KeyError, TypeError, InvalidParameterError) as exc:
            logger.warning("Skipping malformed preset row %r: %s", record.get("id"), exc)
    return out

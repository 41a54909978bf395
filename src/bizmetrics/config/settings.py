from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Settings:
    # ---------- Model constants ----------
    LABOR_RATE: float = 35.0  # $/hour
    OVERHEAD_PER_UNIT: float = 250.0  # $/unit
    OPEX_REVENUE_RATE: float = 0.20
    FIXED_OPEX: float = 100_000.0
    MAX_COMPARE_SCENARIOS: int = 4

    # ---------- UI parameters ----------
    PAGE_SIZE: int = 10
    SALES_TABLE: str = "salesdata"
    PRESETS_TABLE: str = "presets"
    COMPANY_NAME: str = "10X Engineered Materials"

    # ---------- Project paths ----------
    PROJECT_ROOT: Path = Path(__file__).resolve().parents[3]

    DATA_DIR: Path = PROJECT_ROOT / "data"
    PROCESSED_DIR: Path = DATA_DIR / "processed"

    REPORTS_DIR: Path = PROJECT_ROOT / "reports"


settings = Settings()

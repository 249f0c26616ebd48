"""Derived metric views."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class FeedCostShare:
    """Cost of one feed within a month."""

    name: str
    value: float
    percent: float


@dataclass(frozen=True)
class FeedNutritionShare:
    """Share of each nutrient supplied by one feed, in percent."""

    name: str
    shares: dict[str, float]


@dataclass(frozen=True)
class MonthlyNutritionRow:
    """Nutrition composition and feed cost for a calendar month."""

    month: int
    nutrients: dict[str, float]
    total_cost: float


@dataclass(frozen=True)
class EggEconomics:
    """Egg cost and profit projection for the selected month."""

    total_cost: float
    egg_unit_cost: float
    break_even_eggs: int
    profit: float
    profit_margin: float


@dataclass(frozen=True)
class DashboardSummary:
    """Snapshot of the headline dashboard figures."""

    month: int
    economics: EggEconomics
    cost_distribution: list[FeedCostShare]
    nutrition: dict[str, float]
    unread_notifications: int
    critical_items: int
    warning_items: int
    total_birds: int
    laying_rate: float
    last_sync: datetime | None

"""Domain records for the farm dashboard."""

from dataclasses import dataclass, field
from datetime import date, datetime
from uuid import UUID

STATUS_NORMAL = "normal"
STATUS_WARNING = "warning"
STATUS_CRITICAL = "critical"

CATEGORY_SYSTEM = "system"
CATEGORY_INVENTORY = "inventory"
CATEGORY_PRODUCTION = "production"

ADJUST_ADD = "add"
ADJUST_SUBTRACT = "subtract"
ADJUST_SET = "set"


@dataclass(frozen=True)
class Feed:
    """A purchasable feed product with its nutrient profile."""

    id: UUID
    name: str
    unit_cost: float
    unit: str
    nutrients: dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class Purchase:
    """A recorded acquisition of a feed."""

    id: UUID
    feed_id: UUID
    quantity: float
    feeding_ratio: float
    purchase_date: date


@dataclass(frozen=True)
class InventoryItem:
    """Stock level of a feed in storage."""

    id: UUID
    name: str
    current_stock: float
    min_level: float
    optimal_level: float
    unit: str
    daily_usage: float
    days_remaining: int = 0
    status: str = STATUS_NORMAL
    last_updated: date | None = None


@dataclass(frozen=True)
class EggSettings:
    """Monthly egg output, unit sale price and current daily laying output."""

    egg_count: int
    egg_price: float
    daily_egg_production: int = 0


@dataclass(frozen=True)
class Notification:
    """Dashboard notification."""

    id: UUID
    category: str
    message: str
    created_at: datetime
    read: bool = False
    item_id: UUID | None = None
    status: str | None = None


@dataclass(frozen=True)
class Flock:
    """A group of hens kept in one house."""

    id: UUID
    name: str
    bird_count: int
    age_weeks: int


@dataclass(frozen=True)
class FlockDetail:
    """Health and performance notes for a flock."""

    id: UUID
    flock_id: UUID
    health_status: str
    mortality_rate: float
    feed_conversion_ratio: float
    notes: str = ""


@dataclass(frozen=True)
class DeleteResult:
    """Outcome of a delete that may be refused."""

    deleted: bool
    reason: str | None = None

"""In-memory state container for one farm dashboard."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID

from farm_metrics.domain.models import (
    EggSettings,
    Feed,
    Flock,
    FlockDetail,
    InventoryItem,
    Notification,
    Purchase,
)
from farm_metrics.domain.nutrients import NutrientRegistry


def _current_month() -> int:
    return datetime.now(tz=UTC).month


@dataclass
class FarmState:
    """Holds every record of a farm; mutated only through the services."""

    feeds: list[Feed] = field(default_factory=list)
    purchases: list[Purchase] = field(default_factory=list)
    inventory: list[InventoryItem] = field(default_factory=list)
    egg_settings: EggSettings = field(
        default_factory=lambda: EggSettings(egg_count=0, egg_price=0)
    )
    notifications: list[Notification] = field(default_factory=list)
    flocks: list[Flock] = field(default_factory=list)
    flock_details: list[FlockDetail] = field(default_factory=list)
    nutrients: NutrientRegistry = field(default_factory=NutrientRegistry)
    current_month: int = field(default_factory=_current_month)
    last_sync: datetime | None = None
    # statuses with an unread stock alert per item, including alerts trimmed
    # from the notification log
    unread_alerts: dict[UUID, list[str]] = field(default_factory=dict)

    def find_feed(self, feed_id: UUID) -> Feed | None:
        return next((feed for feed in self.feeds if feed.id == feed_id), None)

    def find_item(self, item_id: UUID) -> InventoryItem | None:
        return next((item for item in self.inventory if item.id == item_id), None)

    def find_flock(self, flock_id: UUID) -> Flock | None:
        return next((flock for flock in self.flocks if flock.id == flock_id), None)

"""Notification log with stock alert de-duplication."""

import logging
from dataclasses import dataclass, replace
from datetime import UTC, datetime
from uuid import UUID, uuid4

from farm_metrics.domain.models import (
    CATEGORY_INVENTORY,
    STATUS_CRITICAL,
    STATUS_WARNING,
    InventoryItem,
    Notification,
)
from farm_metrics.domain.state import FarmState

logger = logging.getLogger(__name__)

ALERT_STATUSES = frozenset({STATUS_WARNING, STATUS_CRITICAL})


@dataclass
class NotificationService:
    """Keeps the most recent notifications, newest first."""

    state: FarmState
    limit: int = 10

    def notify(
        self,
        category: str,
        message: str,
        item_id: UUID | None = None,
        status: str | None = None,
    ) -> Notification:
        """Prepend a notification and drop the oldest beyond the limit."""
        notification = Notification(
            id=uuid4(),
            category=category,
            message=message,
            created_at=datetime.now(tz=UTC),
            item_id=item_id,
            status=status,
        )
        self.state.notifications = [notification, *self.state.notifications][
            : self.limit
        ]
        return notification

    def emit_stock_alert(self, item: InventoryItem) -> Notification | None:
        """Alert on a warning or critical item unless an unread alert exists."""
        if item.status not in ALERT_STATUSES:
            return None
        if self._has_unread_alert(item):
            return None
        logger.info("Stock alert for %s: %s", item.name, item.status)
        pending = self.state.unread_alerts.setdefault(item.id, [])
        pending.append(item.status)
        return self.notify(
            CATEGORY_INVENTORY,
            _alert_message(item),
            item_id=item.id,
            status=item.status,
        )

    def mark_read(self, notification_id: UUID) -> bool:
        """Mark one notification read; return False if it is unknown."""
        found = False
        updated = []
        for notification in self.state.notifications:
            if notification.id == notification_id:
                found = True
                if not notification.read:
                    self._clear_unread_alert(notification)
                notification = replace(notification, read=True)
            updated.append(notification)
        self.state.notifications = updated
        return found

    def mark_all_read(self) -> int:
        """Mark every notification read and return how many changed."""
        changed = self.unread_count()
        self.state.unread_alerts = {}
        self.state.notifications = [
            replace(item, read=True) for item in self.state.notifications
        ]
        return changed

    def unread_count(self) -> int:
        return sum(1 for item in self.state.notifications if not item.read)

    def list_notifications(self, unread_only: bool = False) -> list[Notification]:
        if unread_only:
            return [item for item in self.state.notifications if not item.read]
        return list(self.state.notifications)

    def _has_unread_alert(self, item: InventoryItem) -> bool:
        if item.status in self.state.unread_alerts.get(item.id, []):
            return True
        # alerts restored without an item reference
        return any(
            not notification.read
            and notification.category == CATEGORY_INVENTORY
            and notification.item_id is None
            and item.name in notification.message
            and item.status in notification.message
            for notification in self.state.notifications
        )

    def _clear_unread_alert(self, notification: Notification) -> None:
        if notification.item_id is None or notification.status is None:
            return
        pending = self.state.unread_alerts.get(notification.item_id, [])
        if notification.status in pending:
            pending.remove(notification.status)
        if not pending:
            self.state.unread_alerts.pop(notification.item_id, None)


def _alert_message(item: InventoryItem) -> str:
    return (
        f"{item.name} stock is {item.status}: "
        f"{item.current_stock:g} {item.unit} left, about {item.days_remaining} days"
    )

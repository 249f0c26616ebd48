"""Tests for the notification log."""

from dataclasses import replace
from datetime import UTC, datetime
from uuid import uuid4

from farm_metrics.domain.models import Notification
from farm_metrics.services.inventory import InventoryService
from farm_metrics.services.notifications import NotificationService


def test_notify_keeps_newest_first_and_caps_the_log(state) -> None:
    service = NotificationService(state, limit=10)

    for index in range(12):
        service.notify("system", f"message {index}")

    messages = [item.message for item in state.notifications]
    assert len(messages) == 10
    assert messages[0] == "message 11"
    assert "message 0" not in messages
    assert "message 1" not in messages


def test_mark_read_and_mark_all_read(state) -> None:
    service = NotificationService(state)
    first = service.notify("system", "first")
    service.notify("production", "second")
    service.notify("system", "third")

    assert service.mark_read(first.id) is True
    assert service.unread_count() == 2
    assert service.mark_all_read() == 2
    assert service.unread_count() == 0
    assert service.mark_all_read() == 0


def test_list_notifications_unread_only(state) -> None:
    service = NotificationService(state)
    read = service.notify("system", "read me")
    service.notify("system", "still unread")
    service.mark_read(read.id)

    unread = service.list_notifications(unread_only=True)

    assert [item.message for item in unread] == ["still unread"]
    assert len(service.list_notifications()) == 2


def test_stock_alert_skips_normal_items(state, policy) -> None:
    item = InventoryService(state, policy).add_item("Hay", 5000, 500, 1500, "kg", 100)

    assert NotificationService(state).emit_stock_alert(item) is None
    assert state.notifications == []


def test_stock_alert_describes_the_item(state, policy) -> None:
    item = InventoryService(state, policy).add_item("Corn", 300, 1000, 3000, "kg", 100)

    alert = NotificationService(state).emit_stock_alert(item)

    assert alert is not None
    assert alert.category == "inventory"
    assert alert.item_id == item.id
    assert alert.status == "critical"
    assert alert.message == "Corn stock is critical: 300 kg left, about 3 days"


def test_stock_alert_matches_restored_alerts_by_message(state, policy) -> None:
    item = InventoryService(state, policy).add_item("Corn", 300, 1000, 3000, "kg", 100)
    state.notifications.append(
        Notification(
            id=uuid4(),
            category="inventory",
            message="Corn stock is critical: 310 kg left, about 3 days",
            created_at=datetime.now(tz=UTC),
        )
    )
    service = NotificationService(state)

    assert service.emit_stock_alert(item) is None

    state.notifications = [replace(state.notifications[0], read=True)]
    assert service.emit_stock_alert(item) is not None


def test_stock_alert_ignores_other_categories(state, policy) -> None:
    item = InventoryService(state, policy).add_item("Corn", 300, 1000, 3000, "kg", 100)
    service = NotificationService(state)
    service.notify(
        "system", "Corn stock is critical", item_id=item.id, status="critical"
    )

    assert service.emit_stock_alert(item) is not None


def test_alerts_trimmed_from_the_log_are_not_repeated(farm_service, state) -> None:
    for index in range(11):
        farm_service.inventory.add_item(f"Bin {index}", 0, 100, 300, "kg", 10)

    first = farm_service.sync()
    second = farm_service.sync()
    third = farm_service.sync()

    assert len(first) == 11
    assert second == []
    assert third == []
    assert len(state.notifications) == 10
    assert len(state.unread_alerts) == 11


def test_mark_read_allows_the_item_to_alert_again(farm_service, state) -> None:
    item = farm_service.inventory.add_item("Corn", 300, 1000, 3000, "kg", 100)
    (alert,) = farm_service.sync()

    farm_service.mark_notification_read(alert.id)

    assert item.id not in state.unread_alerts
    assert [emitted.item_id for emitted in farm_service.sync()] == [item.id]

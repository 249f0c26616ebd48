"""Tests for admin endpoints."""

from fastapi.testclient import TestClient

from farm_metrics.api.app import create_app
from tests.conftest import add_mash_and_hay, add_soy_stock, buy

ADMIN_HEADERS = {"X-Admin-Token": "admin-token"}


def test_admin_requires_token(container) -> None:
    client = TestClient(create_app(container))

    assert client.get("/admin/backup").status_code == 401
    assert (
        client.get("/admin/backup", headers={"X-Admin-Token": "wrong"}).status_code
        == 401
    )


def test_admin_feeds_export(farm_service, container) -> None:
    add_mash_and_hay(farm_service)
    client = TestClient(create_app(container))

    response = client.get("/admin/export/feeds.csv", headers=ADMIN_HEADERS)

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    lines = response.text.splitlines()
    assert lines[0].startswith("id,name,unit_cost,unit,protein (%)")
    assert len(lines) == 3


def test_admin_nutrition_export(farm_service, container) -> None:
    mash, _ = add_mash_and_hay(farm_service)
    buy(farm_service, mash, quantity=500, ratio=20, month=3)
    client = TestClient(create_app(container))

    response = client.get("/admin/export/nutrition.csv", headers=ADMIN_HEADERS)

    assert response.status_code == 200
    assert len(response.text.splitlines()) == 13


def test_admin_backup_round_trip(farm_service, container) -> None:
    mash, _ = add_mash_and_hay(farm_service)
    buy(farm_service, mash, quantity=500, ratio=20, month=3)
    add_soy_stock(farm_service)
    client = TestClient(create_app(container))

    backup = client.get("/admin/backup", headers=ADMIN_HEADERS)
    farm_service.delete_purchase(farm_service.state.purchases[0].id)
    restored = client.post(
        "/admin/backup", content=backup.content, headers=ADMIN_HEADERS
    )

    assert restored.status_code == 200
    assert restored.json() == {
        "status": "restored",
        "feeds": 2,
        "purchases": 1,
        "inventory": 1,
    }
    assert container.farm_service.total_cost(3) == 500000


def test_admin_backup_rejects_bad_document(container) -> None:
    client = TestClient(create_app(container))

    response = client.post("/admin/backup", content=b"{}", headers=ADMIN_HEADERS)

    assert response.status_code == 400
    assert container.state.feeds == []

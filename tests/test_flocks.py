"""Tests for flock records."""

from uuid import uuid4

import pytest


def test_add_and_update_flock(farm_service) -> None:
    flock = farm_service.flocks.add_flock("House A", 1200, 30)

    updated = farm_service.flocks.update_flock(
        flock.id, {"bird_count": 1150, "id": uuid4()}
    )

    assert updated.id == flock.id
    assert updated.bird_count == 1150
    assert farm_service.flocks.total_birds() == 1150


def test_flock_detail_created_on_first_update(farm_service) -> None:
    flock = farm_service.flocks.add_flock("House B", 800, 20)
    assert farm_service.flocks.flock_detail(flock.id) is None

    detail = farm_service.flocks.update_flock_detail(
        flock.id, {"health_status": "good", "mortality_rate": 0.4}
    )
    again = farm_service.flocks.update_flock_detail(flock.id, {"notes": "vaccinated"})

    assert detail.health_status == "good"
    assert detail.feed_conversion_ratio == 0
    assert again.id == detail.id
    assert again.mortality_rate == 0.4
    assert farm_service.flocks.flock_detail(flock.id).notes == "vaccinated"


def test_unknown_flock_raises(farm_service) -> None:
    with pytest.raises(LookupError):
        farm_service.flocks.update_flock(uuid4(), {"name": "Ghost"})
    with pytest.raises(LookupError):
        farm_service.flocks.update_flock_detail(uuid4(), {"notes": "none"})

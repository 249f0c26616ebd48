"""FastAPI application factory."""

import logging
from collections.abc import Callable
from dataclasses import asdict
from typing import TypeVar
from uuid import UUID

from fastapi import FastAPI, HTTPException, Request, status

from farm_metrics.api.admin import router as admin_router
from farm_metrics.api.models import (
    EggSettingsUpdate,
    FeedCreate,
    FeedUpdate,
    FlockCreate,
    FlockDetailUpdate,
    FlockUpdate,
    InventoryAdjustment,
    InventoryItemCreate,
    InventoryItemUpdate,
    MonthUpdate,
    NutrientCreate,
    PurchaseCreate,
)
from farm_metrics.app_logging import configure_logging
from farm_metrics.containers import AppContainer
from farm_metrics.services import metrics
from farm_metrics.services.dashboard import FarmService

T = TypeVar("T")

UNPROCESSABLE = 422


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    app = FastAPI(title="Farm Metrics")
    app.state.container = container

    app.include_router(admin_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/metrics")
    async def dashboard_summary(request: Request) -> dict[str, object]:
        """Headline figures for the selected month."""
        return asdict(_service(request).summary())

    @app.get("/metrics/cost-distribution")
    async def cost_distribution(
        request: Request, month: int | None = None, year: int | None = None
    ) -> dict[str, object]:
        service = _service(request)
        shares = service.feed_cost_percentage(month, year)
        return {
            "total_cost": service.total_cost(month, year),
            "feeds": [asdict(share) for share in shares],
        }

    @app.get("/metrics/nutrition")
    async def nutrition(
        request: Request, month: int | None = None, year: int | None = None
    ) -> dict[str, object]:
        """Weighted nutrient composition and per-feed shares."""
        service = _service(request)
        resolved_month = service.state.current_month if month is None else month
        return {
            "month": resolved_month,
            "nutrients": service.nutrition_contribution(resolved_month, year),
            "labels": {
                key: service.state.nutrients.label(key)
                for key in service.state.nutrients.visible_keys()
            },
            "feeds": [
                asdict(share)
                for share in metrics.feed_nutrition_shares(
                    service.state, resolved_month, year
                )
            ],
        }

    @app.get("/feeds")
    async def list_feeds(
        request: Request, sort: str | None = None, descending: bool = False
    ) -> dict[str, object]:
        service = _service(request)
        feeds = _apply(lambda: service.catalog.sorted_feeds(sort, descending))
        return {"feeds": [asdict(feed) for feed in feeds]}

    @app.post("/feeds", status_code=status.HTTP_201_CREATED)
    async def create_feed(payload: FeedCreate, request: Request) -> dict[str, object]:
        service = _service(request)
        feed = _apply(
            lambda: service.add_feed(
                payload.name, payload.unit_cost, payload.unit, payload.nutrients
            )
        )
        return asdict(feed)

    @app.put("/feeds/{feed_id}")
    async def update_feed(
        feed_id: UUID, payload: FeedUpdate, request: Request
    ) -> dict[str, object]:
        service = _service(request)
        changes = payload.model_dump(exclude_none=True)
        return asdict(_apply(lambda: service.update_feed(feed_id, changes)))

    @app.delete("/feeds/{feed_id}")
    async def delete_feed(feed_id: UUID, request: Request) -> dict[str, str]:
        """Delete a feed; refused with 409 while purchases reference it."""
        result = _service(request).delete_feed(feed_id)
        if result.reason == "not_found":
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        if not result.deleted:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Feed is referenced by purchase records",
            )
        return {"status": "deleted"}

    @app.get("/purchases")
    async def list_purchases(
        request: Request, month: int | None = None, year: int | None = None
    ) -> dict[str, object]:
        service = _service(request)
        purchases = service.purchases.list_purchases(month, year)
        return {"purchases": [asdict(purchase) for purchase in purchases]}

    @app.post("/purchases", status_code=status.HTTP_201_CREATED)
    async def create_purchase(
        payload: PurchaseCreate, request: Request
    ) -> dict[str, object]:
        service = _service(request)
        purchase = _apply(
            lambda: service.add_purchase(
                payload.feed_id,
                payload.quantity,
                payload.feeding_ratio,
                payload.purchase_date,
            )
        )
        return asdict(purchase)

    @app.delete("/purchases/{purchase_id}")
    async def delete_purchase(purchase_id: UUID, request: Request) -> dict[str, str]:
        if not _service(request).delete_purchase(purchase_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return {"status": "deleted"}

    @app.post("/nutrients", status_code=status.HTTP_201_CREATED)
    async def create_nutrient(
        payload: NutrientCreate, request: Request
    ) -> dict[str, str]:
        key = _service(request).add_nutrient(payload.label)
        if key is None:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Nutrient already exists",
            )
        return {"key": key}

    @app.delete("/nutrients/{key}")
    async def delete_nutrient(key: str, request: Request) -> dict[str, str]:
        if not _service(request).remove_nutrient(key):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Core or unknown nutrients cannot be removed",
            )
        return {"status": "deleted"}

    @app.get("/inventory")
    async def list_inventory(request: Request) -> dict[str, object]:
        items = _service(request).state.inventory
        return {"items": [asdict(item) for item in items]}

    @app.post("/inventory", status_code=status.HTTP_201_CREATED)
    async def create_inventory_item(
        payload: InventoryItemCreate, request: Request
    ) -> dict[str, object]:
        service = _service(request)
        fields = payload.model_dump()
        return asdict(_apply(lambda: service.add_inventory_item(**fields)))

    @app.put("/inventory/{item_id}")
    async def update_inventory_item(
        item_id: UUID, payload: InventoryItemUpdate, request: Request
    ) -> dict[str, object]:
        service = _service(request)
        changes = payload.model_dump(exclude_none=True)
        return asdict(_apply(lambda: service.update_inventory_item(item_id, changes)))

    @app.post("/inventory/{item_id}/adjust")
    async def adjust_inventory(
        item_id: UUID, payload: InventoryAdjustment, request: Request
    ) -> dict[str, object]:
        service = _service(request)
        item = _apply(
            lambda: service.adjust_inventory(item_id, payload.type, payload.quantity)
        )
        if payload.notes:
            logger.info("Adjustment note for %s: %s", item.name, payload.notes)
        return asdict(item)

    @app.put("/egg-settings")
    async def update_egg_settings(
        payload: EggSettingsUpdate, request: Request
    ) -> dict[str, object]:
        service = _service(request)
        settings = service.update_egg_settings(
            payload.egg_count, payload.egg_price, payload.daily_egg_production
        )
        return asdict(settings)

    @app.get("/flocks")
    async def list_flocks(request: Request) -> dict[str, object]:
        service = _service(request)
        return {
            "total_birds": service.flocks.total_birds(),
            "flocks": [asdict(flock) for flock in service.state.flocks],
        }

    @app.post("/flocks", status_code=status.HTTP_201_CREATED)
    async def create_flock(payload: FlockCreate, request: Request) -> dict[str, object]:
        service = _service(request)
        flock = _apply(
            lambda: service.add_flock(
                payload.name, payload.bird_count, payload.age_weeks
            )
        )
        return asdict(flock)

    @app.put("/flocks/{flock_id}")
    async def update_flock(
        flock_id: UUID, payload: FlockUpdate, request: Request
    ) -> dict[str, object]:
        service = _service(request)
        changes = payload.model_dump(exclude_none=True)
        return asdict(_apply(lambda: service.update_flock(flock_id, changes)))

    @app.get("/flocks/{flock_id}/detail")
    async def get_flock_detail(flock_id: UUID, request: Request) -> dict[str, object]:
        detail = _service(request).flock_detail(flock_id)
        if detail is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return asdict(detail)

    @app.put("/flocks/{flock_id}/detail")
    async def update_flock_detail(
        flock_id: UUID, payload: FlockDetailUpdate, request: Request
    ) -> dict[str, object]:
        """Update a flock's health record, creating it on first use."""
        service = _service(request)
        changes = payload.model_dump(exclude_none=True)
        return asdict(_apply(lambda: service.update_flock_detail(flock_id, changes)))

    @app.put("/month")
    async def update_month(payload: MonthUpdate, request: Request) -> dict[str, int]:
        service = _service(request)
        _apply(lambda: service.set_month(payload.month))
        return {"month": service.state.current_month}

    @app.get("/notifications")
    async def list_notifications(
        request: Request, unread_only: bool = False
    ) -> dict[str, object]:
        service = _service(request)
        notifications = service.notifications.list_notifications(unread_only)
        return {
            "unread": service.notifications.unread_count(),
            "notifications": [asdict(item) for item in notifications],
        }

    @app.post("/notifications/read-all")
    async def read_all_notifications(request: Request) -> dict[str, int]:
        return {"updated": _service(request).mark_all_notifications_read()}

    @app.post("/notifications/{notification_id}/read")
    async def read_notification(
        notification_id: UUID, request: Request
    ) -> dict[str, str]:
        if not _service(request).mark_notification_read(notification_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return {"status": "ok"}

    @app.post("/sync")
    async def sync(request: Request) -> dict[str, object]:
        """Recompute derived fields and return any new alerts."""
        emitted = _service(request).sync()
        return {"emitted": [asdict(item) for item in emitted]}

    return app


def _service(request: Request) -> FarmService:
    container: AppContainer = request.app.state.container
    return container.farm_service


def _apply(operation: Callable[[], T]) -> T:
    """Run a service call, mapping domain errors to HTTP errors."""
    try:
        return operation()
    except LookupError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
        ) from exc
    except ValueError as exc:
        raise HTTPException(status_code=UNPROCESSABLE, detail=str(exc)) from exc

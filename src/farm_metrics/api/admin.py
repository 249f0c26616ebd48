"""Admin export and backup endpoints with simple token auth."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status
from fastapi.responses import PlainTextResponse, Response

from farm_metrics.services.export import (
    BackupError,
    export_backup,
    feeds_csv,
    load_backup,
    nutrition_csv,
    purchases_csv,
)

if TYPE_CHECKING:
    from farm_metrics.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])

CSV_MEDIA_TYPE = "text/csv"


def _get_admin_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid admin token."""
    if not x_admin_token or x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.get("/export/feeds.csv", dependencies=[Depends(require_admin)])
async def export_feeds(request: Request) -> PlainTextResponse:
    """Feed catalog as CSV."""
    container: AppContainer = request.app.state.container
    return PlainTextResponse(feeds_csv(container.state), media_type=CSV_MEDIA_TYPE)


@router.get("/export/purchases.csv", dependencies=[Depends(require_admin)])
async def export_purchases(request: Request) -> PlainTextResponse:
    """Purchase history as CSV."""
    container: AppContainer = request.app.state.container
    return PlainTextResponse(
        purchases_csv(container.state), media_type=CSV_MEDIA_TYPE
    )


@router.get("/export/nutrition.csv", dependencies=[Depends(require_admin)])
async def export_nutrition(
    request: Request, year: int | None = None
) -> PlainTextResponse:
    """Monthly nutrition composition as CSV."""
    container: AppContainer = request.app.state.container
    return PlainTextResponse(
        nutrition_csv(container.state, year), media_type=CSV_MEDIA_TYPE
    )


@router.get("/backup", dependencies=[Depends(require_admin)])
async def download_backup(request: Request) -> Response:
    """Full state as a JSON backup document."""
    container: AppContainer = request.app.state.container
    return Response(export_backup(container.state), media_type="application/json")


@router.post("/backup", dependencies=[Depends(require_admin)])
async def restore_backup(request: Request) -> dict[str, object]:
    """Replace the current state with an uploaded backup document."""
    container: AppContainer = request.app.state.container
    body = await request.body()
    try:
        state = load_backup(body, container.policy)
    except BackupError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    container.replace_state(state)
    return {
        "status": "restored",
        "feeds": len(state.feeds),
        "purchases": len(state.purchases),
        "inventory": len(state.inventory),
    }

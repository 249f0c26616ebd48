"""ASGI entrypoint for the farm metrics API."""

from farm_metrics.api.app import create_app
from farm_metrics.containers import build_container

app = create_app(build_container())

"""ASGI entrypoint for the fridge planner API."""

from fridge_planner.api.app import create_app
from fridge_planner.containers import build_container

app = create_app(build_container())

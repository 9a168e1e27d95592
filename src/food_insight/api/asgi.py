"""ASGI entrypoint for the Food Insight API."""

from food_insight.api.app import create_app
from food_insight.containers import build_container

app = create_app(build_container())

"""Route table for the coffee API."""

from __future__ import annotations

from typing import Any, Callable

from fastapi import FastAPI

from .handlers.coffee import create_coffee, delete_coffee, get_coffee, get_coffees, update_coffee


# Each item: {'path': str, 'methods': [str], 'handler': callable}
COFFEE_ROUTES: list[dict[str, Any]] = [
    {"path": "/coffee/{coffee_id}", "methods": ["GET"], "handler": get_coffee},
    {"path": "/coffees", "methods": ["GET"], "handler": get_coffees},
    {"path": "/coffee", "methods": ["POST"], "handler": create_coffee},
    {"path": "/coffee/{coffee_id}", "methods": ["PUT"], "handler": update_coffee},
    {"path": "/coffee/{coffee_id}", "methods": ["DELETE"], "handler": delete_coffee},
]


def register_coffee_routes(app: FastAPI) -> None:
    for item in COFFEE_ROUTES:
        handler: Callable[..., Any] = item["handler"]
        app.add_api_route(item["path"], handler, methods=item["methods"], name=handler.__name__)

"""Coffee resource handlers.

Implements:
- GET    /coffee/{id}
- GET    /coffees
- POST   /coffee
- PUT    /coffee/{id}   (If-Match required)
- DELETE /coffee/{id}

Handlers are plain functions so FastAPI runs them in its threadpool; the store
does its own locking. Not-found, conflict and precondition failures are raised
by the service and answered by the exception handlers in `server`.
"""

from __future__ import annotations

from fastapi import Depends, Header, Request
from fastapi.responses import JSONResponse, Response

from ..headers import IF_MATCH
from ..models import CoffeeWrite
from ..responses import coffee_list_response, coffee_response, empty
from ..service import CoffeeService


def get_service(request: Request) -> CoffeeService:
    return request.app.state.service  # type: ignore[attr-defined]


def get_coffee(coffee_id: int, service: CoffeeService = Depends(get_service)) -> JSONResponse:
    return coffee_response(service.find_by_id(coffee_id))


def get_coffees(name: str | None = None, service: CoffeeService = Depends(get_service)) -> JSONResponse:
    return coffee_list_response(service.find_all(name=name))


def create_coffee(body: CoffeeWrite, service: CoffeeService = Depends(get_service)) -> JSONResponse:
    return coffee_response(service.create(body), status_code=201)


def update_coffee(
    coffee_id: int,
    body: CoffeeWrite,
    if_match: str | None = Header(default=None, alias=IF_MATCH),
    service: CoffeeService = Depends(get_service),
) -> JSONResponse:
    return coffee_response(service.update(coffee_id, body, if_match))


def delete_coffee(coffee_id: int, service: CoffeeService = Depends(get_service)) -> Response:
    service.delete(coffee_id)
    return empty(200)

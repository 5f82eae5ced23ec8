"""Response shaping.

Successful single-record responses always carry the record's Location and its
version as an ETag, so the client has what it needs for the next conditional
request. Error responses use a small envelope:

    {"error": {"code": ..., "message": ..., "details": ...}}

except for not-found and conflict, which are answered with an empty body.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from fastapi.responses import JSONResponse, Response

from .headers import ETAG, LOCATION, coffee_location, render_etag
from .models import Coffee


JsonObject = dict[str, Any]


def coffee_headers(coffee: Coffee) -> dict[str, str]:
    return {
        LOCATION: coffee_location(coffee.id),
        ETAG: render_etag(coffee.version),
    }


def coffee_response(coffee: Coffee, *, status_code: int = 200) -> JSONResponse:
    return JSONResponse(coffee.as_dict(), status_code=status_code, headers=coffee_headers(coffee))


def coffee_list_response(coffees: Iterable[Coffee]) -> JSONResponse:
    return JSONResponse([c.as_dict() for c in coffees], status_code=200)


def empty(status_code: int = 200) -> Response:
    return Response(status_code=status_code)


def fail(error: Mapping[str, Any], *, status_code: int) -> JSONResponse:
    """Build a response with an error envelope."""

    payload: JsonObject = {"error": dict(error)}
    return JSONResponse(payload, status_code=status_code)

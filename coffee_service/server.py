"""HTTP application for the coffee service.

- Builds the store selected by settings and wires it into a `CoffeeService`.
- Maps domain errors onto status codes (404/409 with empty bodies, 400/428
  with an error envelope).
- Ensures unexpected exceptions, storage faults included, never escape as
  stack traces: they are logged and answered with a 500 error envelope.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.cors import CORSMiddleware

from . import __version__
from .config import STORE_SQLITE, Settings
from .errors import CoffeeError, error_from_exception
from .responses import empty, fail
from .routes import register_coffee_routes
from .service import CoffeeService
from .sqlite_store import SqliteCoffeeStore
from .store import CoffeeStore, InMemoryCoffeeStore


log = logging.getLogger("coffee_service.server")


def build_store(settings: Settings) -> CoffeeStore:
    if settings.store == STORE_SQLITE:
        return SqliteCoffeeStore(settings.db_path)
    return InMemoryCoffeeStore()


async def _coffee_error_handler(request: Request, exc: CoffeeError) -> Response:
    if exc.empty_body:
        return empty(exc.status_code)
    return fail(exc.as_error(), status_code=exc.status_code)


def create_app(settings: Settings | None = None, *, store: CoffeeStore | None = None) -> FastAPI:
    """Build the app. A store passed in stays owned by the caller and is not closed."""

    settings = settings or Settings.from_env()
    owns_store = store is None
    if store is None:
        store = build_store(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        if owns_store:
            store.close()

    app = FastAPI(
        title="Coffee Service",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.service = CoffeeService(store)  # type: ignore[attr-defined]

    app.add_exception_handler(CoffeeError, _coffee_error_handler)

    @app.middleware("http")
    async def _exception_guard(request: Request, call_next):
        """Turn anything unexpected into a 500 error envelope."""

        try:
            return await call_next(request)
        except Exception as exc:  # noqa: BLE001
            log.exception("unhandled error on %s %s", request.method, request.url.path)
            return JSONResponse(
                {"error": error_from_exception(exc, include_details=settings.debug)},
                status_code=500,
            )

    # Added last so it wraps the exception guard and 500s carry CORS headers too.
    # ETag and Location must be readable by browser clients for If-Match.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["ETag", "Location"],
    )

    @app.get("/healthz")
    async def healthz():
        return {"status": "ok"}

    register_coffee_routes(app)

    return app

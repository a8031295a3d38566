"""
Reservation API App Factory

Used by both `src.main` and the API test suite, which differ only in lifespan.
"""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from typing import Any

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.platform.config.core_setting import settings
from src.platform.exception.exception_handlers import register_exception_handlers
from src.service.table_reservation.driving_adapter.http_controller import (
    health_controller,
    reservation_controller,
    table_controller,
)


API_PREFIX = '/api/v1'

# (router, path under API_PREFIX, OpenAPI tag, tag description)
ROUTES: tuple[tuple[APIRouter, str, str, str], ...] = (
    (
        reservation_controller.router,
        '/reservations',
        'reservation',
        'Book a table, move it, and walk it through confirm / cancel / complete / no-show.',
    ),
    (
        table_controller.router,
        '/tables',
        'table',
        'Seating plan, free tables for a time slot, and per-day availability reports.',
    ),
    (health_controller.router, '/health', 'health', 'Liveness and readiness checks.'),
)


def create_app(
    *,
    lifespan: Callable[[FastAPI], AbstractAsyncContextManager[Any]],
    title_suffix: str = '',
) -> FastAPI:
    app = FastAPI(
        title=f'{settings.PROJECT_NAME}{title_suffix}',
        description=f'Table reservations for a single restaurant ({settings.RESTAURANT_TIMEZONE})',
        version=settings.VERSION,
        lifespan=lifespan,
        openapi_tags=[{'name': tag, 'description': text} for _, _, tag, text in ROUTES],
    )

    if settings.BACKEND_CORS_ORIGINS:
        app.add_middleware(
            CORSMiddleware,  # type: ignore
            allow_origins=settings.BACKEND_CORS_ORIGINS,
            allow_credentials=True,
            allow_methods=['GET', 'POST', 'PUT'],
            allow_headers=['*'],
        )

    register_exception_handlers(app)

    for router, path, tag, _ in ROUTES:
        app.include_router(router, prefix=f'{API_PREFIX}{path}', tags=[tag])

    return app

from __future__ import annotations

from collections.abc import AsyncIterator
from dataclasses import dataclass
from uuid import UUID

from fastapi import Request

from src.application.errors import ValidationError
from src.config.settings import Settings, get_settings
from src.infrastructure.db.session import SQLAlchemyUnitOfWork


@dataclass(slots=True)
class FarmContext:
    farm_id: UUID
    actor_user_id: UUID | None = None


def _parse_uuid(value: str, header: str) -> UUID:
    try:
        return UUID(value)
    except ValueError as exc:
        raise ValidationError(f"Invalid {header} header") from exc


def get_app_settings(request: Request) -> Settings:
    settings = getattr(request.app.state, "settings", None)
    return settings or get_settings()


async def get_farm_context(request: Request) -> FarmContext:
    settings = get_app_settings(request)
    farm_value = request.headers.get(settings.farm_header)
    if not farm_value:
        raise ValidationError(f"Missing {settings.farm_header} header")
    actor_value = request.headers.get(settings.actor_header)
    return FarmContext(
        farm_id=_parse_uuid(farm_value, settings.farm_header),
        actor_user_id=_parse_uuid(actor_value, settings.actor_header) if actor_value else None,
    )


async def get_uow(request: Request) -> AsyncIterator[SQLAlchemyUnitOfWork]:
    session_factory = getattr(request.app.state, "session_factory", None)
    if session_factory is None:
        raise RuntimeError("Session factory not configured")
    uow = SQLAlchemyUnitOfWork(session_factory)
    async with uow:
        yield uow

from __future__ import annotations

import os
import sys
from collections.abc import AsyncIterator
from datetime import date
from pathlib import Path
from uuid import UUID, uuid4

import pytest
from httpx import ASGITransport, AsyncClient

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///default.db")

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(PROJECT_ROOT))

# ruff: noqa: E402
from src.config.settings import Settings
from src.infrastructure.db.base import Base
from src.infrastructure.db.orm import (  # noqa: F401
    animal,
    breeding_event,
    breeding_record,
    farm_breeding_settings,
    pregnancy_record,
)
from src.infrastructure.db.orm.animal import AnimalORM
from src.interfaces.http.main import create_app


@pytest.fixture()
def farm_id() -> UUID:
    return uuid4()


@pytest.fixture()
def actor_id() -> UUID:
    return uuid4()


@pytest.fixture()
def test_settings(tmp_path) -> Settings:
    db_path = tmp_path / "test.db"
    return Settings.model_validate(
        {
            "database_url": f"sqlite+aiosqlite:///{db_path}",
            "farm_header": "X-Farm-ID",
            "actor_header": "X-User-ID",
            "log_level": "INFO",
            "environment": "test",
        }
    )


@pytest.fixture()
def app(test_settings: Settings):
    return create_app(settings=test_settings)


@pytest.fixture()
async def client(app) -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        engine = app.state.engine
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
            await conn.run_sync(Base.metadata.create_all)
        yield client


@pytest.fixture()
def headers(farm_id: UUID, actor_id: UUID) -> dict[str, str]:
    return {"X-Farm-ID": str(farm_id), "X-User-ID": str(actor_id)}


@pytest.fixture()
def seed_animal(app, client, farm_id: UUID):
    async def _seed(tag: str, **fields) -> UUID:
        animal_id = uuid4()
        async with app.state.session_factory() as session:  # type: ignore[attr-defined]
            session.add(
                AnimalORM(
                    id=animal_id,
                    farm_id=fields.pop("farm_id", farm_id),
                    tag=tag,
                    sex=fields.pop("sex", "female"),
                    status="active",
                    birth_date=fields.pop("birth_date", date(2020, 3, 1)),
                    lactation_number=fields.pop("lactation_number", 0),
                    version=1,
                    **fields,
                )
            )
            await session.commit()
        return animal_id

    return _seed

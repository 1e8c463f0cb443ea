"""
共通フィクスチャ
"""

import random
from datetime import datetime, timedelta
from typing import Any

import pytest

from companion_guest.adapters.storage.memory import InMemoryKeyValueStorage
from companion_guest.core.exceptions import MigrationError
from companion_guest.domain.ports.migration_port import IMigrationGateway
from companion_guest.domain.services.guest_session import GuestSessionManager

START_TIME = datetime(2026, 1, 1, 12, 0, 0)


class FakeClock:
    """進めることができる時計"""

    def __init__(self, now: datetime = START_TIME):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


class FakeMigrationGateway(IMigrationGateway):
    """送信内容を記録するゲートウェイ"""

    def __init__(self, fail_with_status: int | None = None):
        self.fail_with_status = fail_with_status
        self.payloads: list[dict[str, Any]] = []

    async def migrate(self, payload: dict[str, Any]) -> None:
        self.payloads.append(payload)
        if self.fail_with_status is not None:
            raise MigrationError(
                f"Migration endpoint returned {self.fail_with_status}",
                status_code=self.fail_with_status,
            )


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def storage():
    return InMemoryKeyValueStorage()


@pytest.fixture
def gateway():
    return FakeMigrationGateway()


@pytest.fixture
def manager(storage, gateway, clock):
    return GuestSessionManager(
        storage=storage,
        migration_gateway=gateway,
        clock=clock,
        rng=random.Random(42),
    )

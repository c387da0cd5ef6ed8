"""
Pytest configuration and shared fixtures.

DATABASE_URL is pointed at SQLite before any satcat module creates its
engine, so importing the app never needs a running PostgreSQL.
"""

import asyncio
import os
from typing import Dict, List, Optional, Sequence

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")

import pytest
from sgp4.io import compute_checksum

from satcat.domains.common.models.base_model import new_entity_id
from satcat.domains.satellite.interfaces.satellite_repository import (
    SatelliteRepositoryInterface,
)
from satcat.domains.satellite.models.satellite_model import SatelliteRecord
from satcat.domains.satellite.services.satellite_service import SatelliteService

# ISS (ZARYA), epoch 2019-12-09
ISS_2019_LINE1 = "1 25544U 98067A   19343.69339541  .00001764  00000-0  38792-4 0  9991"
ISS_2019_LINE2 = "2 25544  51.6439 211.2001 0007417  17.6667  85.6398 15.50103472202482"

# ISS (ZARYA), epoch 2020-05-30
ISS_2020_LINE1 = "1 25544U 98067A   20151.61686127  .00000168  00000-0  11087-4 0  9992"
ISS_2020_LINE2 = "2 25544  51.6444  75.4313 0002297  11.5525  50.1151 15.49398617229298"

# VANGUARD 1
VANGUARD_LINE1 = "1 00005U 58002B   00179.78495062  .00000023  00000-0  28098-4 0  4753"
VANGUARD_LINE2 = "2 00005  34.2682 348.7242 1859667 331.7664  19.3264 10.82419157413667"


def with_mean_motion(line_two: str, field: str) -> str:
    """替換第二行的平均運動欄位（11 字元）並重新計算校驗和"""
    line = line_two[:52] + field + line_two[63:68]
    return line + str(compute_checksum(line))


class InMemorySatelliteRepository(SatelliteRepositoryInterface):
    """記憶體內的衛星儲存庫，記錄每種寫入的次數"""

    def __init__(self):
        self.records: Dict[str, SatelliteRecord] = {}
        self.writes: List[str] = []

    async def create_satellite(self, record: SatelliteRecord) -> str:
        satellite_id = record.id or new_entity_id()
        self.records[satellite_id] = record.model_copy(update={"id": satellite_id})
        self.writes.append("create")
        return satellite_id

    async def bulk_create_satellites(self, records: Sequence[SatelliteRecord]) -> int:
        for record in records:
            self.records[record.id] = record
        self.writes.append("bulk_create")
        return len(records)

    async def get_satellites(self) -> List[SatelliteRecord]:
        return list(self.records.values())

    async def get_satellite_by_id(self, satellite_id: str) -> Optional[SatelliteRecord]:
        return self.records.get(satellite_id)

    async def save_satellite(self, record: SatelliteRecord) -> Optional[SatelliteRecord]:
        if record.id not in self.records:
            return None
        self.records[record.id] = record
        self.writes.append("save")
        return record

    async def delete_satellite(self, satellite_id: str) -> Optional[SatelliteRecord]:
        removed = self.records.pop(satellite_id, None)
        if removed is not None:
            self.writes.append("delete")
        return removed


def run(coro):
    """在同步測試中執行協程"""
    return asyncio.run(coro)


@pytest.fixture
def repository() -> InMemorySatelliteRepository:
    return InMemorySatelliteRepository()


@pytest.fixture
def service(repository) -> SatelliteService:
    return SatelliteService(satellite_repository=repository)

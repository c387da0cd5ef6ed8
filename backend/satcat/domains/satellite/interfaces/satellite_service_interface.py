from abc import ABC, abstractmethod
from typing import Callable, List, Sequence

from satcat.domains.satellite.models.dto import (
    BulkCreateSummary,
    SatellitePatch,
    TLEEntry,
)
from satcat.domains.satellite.models.satellite_model import (
    OrbitalState,
    SatelliteRecord,
)

# (line_one, line_two) -> OrbitalState，失敗時拋出 MalformedTLE
OrbitalStateDeriver = Callable[[str, str], OrbitalState]


class SatelliteServiceInterface(ABC):
    """衛星記錄服務接口，維護 TLE 與軌道狀態的一致性"""

    @abstractmethod
    async def create_satellite(
        self, name: str, line_one: str, line_two: str
    ) -> SatelliteRecord:
        """由 TLE 創建單一衛星"""
        pass

    @abstractmethod
    async def bulk_create_satellites(
        self, entries: Sequence[TLEEntry]
    ) -> BulkCreateSummary:
        """批量創建衛星，任一條目無效則整批拒絕"""
        pass

    @abstractmethod
    async def list_satellites(self) -> List[SatelliteRecord]:
        """列出所有衛星"""
        pass

    @abstractmethod
    async def get_satellite_by_id(self, satellite_id: str) -> SatelliteRecord:
        """根據 ID 獲取衛星"""
        pass

    @abstractmethod
    async def update_satellite_by_id(
        self, satellite_id: str, patch: SatellitePatch
    ) -> SatelliteRecord:
        """更新衛星，TLE 變更時重新推導軌道狀態"""
        pass

    @abstractmethod
    async def delete_satellite_by_id(self, satellite_id: str) -> SatelliteRecord:
        """刪除衛星並返回被刪除的記錄"""
        pass

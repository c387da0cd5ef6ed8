from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from satcat.domains.satellite.models.satellite_model import SatelliteRecord


class SatelliteRepositoryInterface(ABC):
    """衛星儲存庫接口"""

    @abstractmethod
    async def create_satellite(self, record: SatelliteRecord) -> str:
        """創建新衛星，返回儲存庫指派的 ID"""
        pass

    @abstractmethod
    async def bulk_create_satellites(self, records: Sequence[SatelliteRecord]) -> int:
        """以單次寫入批量創建衛星（記錄已帶有 ID），返回寫入數量"""
        pass

    @abstractmethod
    async def get_satellites(self) -> List[SatelliteRecord]:
        """獲取所有衛星"""
        pass

    @abstractmethod
    async def get_satellite_by_id(self, satellite_id: str) -> Optional[SatelliteRecord]:
        """根據 ID 獲取衛星"""
        pass

    @abstractmethod
    async def save_satellite(self, record: SatelliteRecord) -> Optional[SatelliteRecord]:
        """依 ID 覆寫衛星記錄，不存在時返回 None"""
        pass

    @abstractmethod
    async def delete_satellite(self, satellite_id: str) -> Optional[SatelliteRecord]:
        """刪除衛星，返回被刪除的記錄，不存在時返回 None"""
        pass

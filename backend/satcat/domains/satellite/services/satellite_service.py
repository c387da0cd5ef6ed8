import logging
from datetime import datetime
from typing import List, Optional, Sequence

from pydantic import ValidationError

from satcat.domains.common.models.base_model import new_entity_id, utcnow
from satcat.domains.satellite.exceptions import (
    InvalidSatelliteData,
    MalformedTLE,
    SatelliteNotFound,
)
from satcat.domains.satellite.interfaces.satellite_repository import (
    SatelliteRepositoryInterface,
)
from satcat.domains.satellite.interfaces.satellite_service_interface import (
    OrbitalStateDeriver,
    SatelliteServiceInterface,
)
from satcat.domains.satellite.adapters.sqlmodel_satellite_repository import (
    SQLModelSatelliteRepository,
)
from satcat.domains.satellite.models.dto import (
    BulkCreateSummary,
    SatellitePatch,
    TLEEntry,
)
from satcat.domains.satellite.models.satellite_model import (
    OrbitalState,
    SatelliteRecord,
    TLEPair,
)
from satcat.domains.satellite.services.tle_service import derive_orbital_state

logger = logging.getLogger(__name__)


class SatelliteService(SatelliteServiceInterface):
    """衛星記錄服務實現

    每個操作都先完整推導軌道狀態，再對儲存庫做單次寫入，
    因此任何持久化的記錄都滿足 orbital_state == derive(tle)。

    同一衛星的並發更新沒有版本檢查，結果為最後寫入者勝出；
    每筆寫入的記錄本身仍然一致。
    """

    def __init__(
        self,
        satellite_repository: Optional[SatelliteRepositoryInterface] = None,
        deriver: OrbitalStateDeriver = derive_orbital_state,
    ):
        self._satellite_repository = (
            satellite_repository or SQLModelSatelliteRepository()
        )
        self._derive = deriver

    def _derive_state(self, line_one: str, line_two: str) -> OrbitalState:
        try:
            return self._derive(line_one, line_two)
        except MalformedTLE as e:
            logger.warning(f"TLE 推導失敗: {e}")
            raise

    @staticmethod
    def _build_record(
        name: str,
        tle: TLEPair,
        orbital_state: OrbitalState,
        satellite_id: Optional[str] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
    ) -> SatelliteRecord:
        try:
            return SatelliteRecord(
                id=satellite_id,
                name=name,
                tle=tle,
                orbital_state=orbital_state,
                created_at=created_at,
                updated_at=updated_at,
            )
        except ValidationError as e:
            raise InvalidSatelliteData(f"衛星資料無效: {e}") from e

    async def create_satellite(
        self, name: str, line_one: str, line_two: str
    ) -> SatelliteRecord:
        """由 TLE 創建單一衛星

        推導失敗時不寫入任何資料。
        """
        orbital_state = self._derive_state(line_one, line_two)
        now = utcnow()
        record = self._build_record(
            name=name,
            tle=TLEPair(line_one=line_one, line_two=line_two),
            orbital_state=orbital_state,
            created_at=now,
            updated_at=now,
        )

        satellite_id = await self._satellite_repository.create_satellite(record)
        logger.info(f"創建了新衛星記錄: {record.name} ({satellite_id})")
        return record.model_copy(update={"id": satellite_id})

    async def bulk_create_satellites(
        self, entries: Sequence[TLEEntry]
    ) -> BulkCreateSummary:
        """批量創建衛星

        先在本地推導所有條目的軌道狀態並預先產生 ID，
        任一條目無效則整批拒絕（不寫入任何資料），
        全部有效時以單次批量寫入提交。
        """
        now = utcnow()
        records = []
        for index, entry in enumerate(entries):
            try:
                orbital_state = self._derive_state(entry.line_one, entry.line_two)
            except MalformedTLE as e:
                raise MalformedTLE(
                    f"第 {index} 筆條目 ({entry.name}) 的 TLE 無效: {e}",
                    entry.line_one,
                    entry.line_two,
                ) from e

            try:
                record = self._build_record(
                    name=entry.name,
                    tle=TLEPair(line_one=entry.line_one, line_two=entry.line_two),
                    orbital_state=orbital_state,
                    satellite_id=new_entity_id(),
                    created_at=now,
                    updated_at=now,
                )
            except InvalidSatelliteData as e:
                raise InvalidSatelliteData(f"第 {index} 筆條目: {e}") from e
            records.append(record)

        if not records:
            return BulkCreateSummary(created=0, ids=[])

        created = await self._satellite_repository.bulk_create_satellites(records)
        logger.info(f"批量創建了 {created} 個衛星記錄")
        return BulkCreateSummary(created=created, ids=[record.id for record in records])

    async def list_satellites(self) -> List[SatelliteRecord]:
        """列出所有衛星（直接返回快取的軌道狀態）"""
        return await self._satellite_repository.get_satellites()

    async def get_satellite_by_id(self, satellite_id: str) -> SatelliteRecord:
        """根據 ID 獲取衛星"""
        satellite = await self._satellite_repository.get_satellite_by_id(satellite_id)
        if satellite is None:
            raise SatelliteNotFound(satellite_id)
        return satellite

    async def update_satellite_by_id(
        self, satellite_id: str, patch: SatellitePatch
    ) -> SatelliteRecord:
        """更新衛星

        逐欄合併 patch；只要 patch 包含任一 TLE 行，
        就以合併後的兩行重新推導軌道狀態，再一次寫入。
        推導失敗時儲存的記錄保持不變。
        """
        satellite = await self.get_satellite_by_id(satellite_id)

        if patch.is_empty():
            return satellite

        fields = patch.model_fields_set
        for field in ("name", "line_one", "line_two"):
            if field in fields and getattr(patch, field) is None:
                raise InvalidSatelliteData(f"欄位 {field} 不可為 null")

        name = patch.name if "name" in fields else satellite.name
        line_one = patch.line_one if "line_one" in fields else satellite.tle.line_one
        line_two = patch.line_two if "line_two" in fields else satellite.tle.line_two

        orbital_state = satellite.orbital_state
        if patch.touches_tle:
            # 推導需要兩行一起，使用合併後的結果而非只用變更的那一行
            orbital_state = self._derive_state(line_one, line_two)

        merged = self._build_record(
            name=name,
            tle=TLEPair(line_one=line_one, line_two=line_two),
            orbital_state=orbital_state,
            satellite_id=satellite.id,
            created_at=satellite.created_at,
            updated_at=utcnow(),
        )

        saved = await self._satellite_repository.save_satellite(merged)
        if saved is None:
            # 讀取與寫入之間被刪除
            raise SatelliteNotFound(satellite_id)

        logger.info(
            f"更新了衛星 {saved.name} ({satellite_id})，欄位: {sorted(fields)}"
        )
        return saved

    async def delete_satellite_by_id(self, satellite_id: str) -> SatelliteRecord:
        """刪除衛星並返回刪除前的記錄"""
        await self.get_satellite_by_id(satellite_id)

        removed = await self._satellite_repository.delete_satellite(satellite_id)
        if removed is None:
            raise SatelliteNotFound(satellite_id)

        logger.info(f"刪除了衛星 {removed.name} ({satellite_id})")
        return removed

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Optional, Sequence
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select
from sqlalchemy.ext.asyncio import AsyncSession

from satcat.domains.satellite.exceptions import StoreUnavailable
from satcat.domains.satellite.models.satellite_model import (
    SatelliteRecord,
    SatelliteTable,
)
from satcat.domains.satellite.interfaces.satellite_repository import (
    SatelliteRepositoryInterface,
)
from satcat.db.base import async_session_maker

logger = logging.getLogger(__name__)


class SQLModelSatelliteRepository(SatelliteRepositoryInterface):
    """衛星儲存庫的 SQLModel 實現"""

    def __init__(self, session_factory=async_session_maker):
        self._session_factory = session_factory

    @asynccontextmanager
    async def _session(self, action: str) -> AsyncIterator[AsyncSession]:
        """開啟會話，並將 SQLAlchemy 錯誤轉換為 StoreUnavailable"""
        try:
            async with self._session_factory() as session:
                yield session
        except SQLAlchemyError as e:
            logger.error(f"{action}時資料庫出錯: {e}", exc_info=True)
            raise StoreUnavailable(f"{action}失敗: {e}") from e

    async def _get_row(
        self, session: AsyncSession, satellite_id: str
    ) -> Optional[SatelliteTable]:
        statement = select(SatelliteTable).where(SatelliteTable.id == satellite_id)
        results = await session.execute(statement)
        return results.scalar_one_or_none()

    async def create_satellite(self, record: SatelliteRecord) -> str:
        """創建新衛星"""
        row = SatelliteTable.from_record(record)
        async with self._session("創建衛星") as session:
            session.add(row)
            await session.commit()
            return row.id

    async def bulk_create_satellites(self, records: Sequence[SatelliteRecord]) -> int:
        """批量創建衛星，單次提交"""
        rows = [SatelliteTable.from_record(record) for record in records]
        async with self._session("批量創建衛星") as session:
            session.add_all(rows)
            await session.commit()
        return len(rows)

    async def get_satellites(self) -> List[SatelliteRecord]:
        """獲取所有衛星"""
        async with self._session("獲取衛星列表") as session:
            statement = select(SatelliteTable).order_by(
                SatelliteTable.name, SatelliteTable.id
            )
            results = await session.execute(statement)
            return [row.to_record() for row in results.scalars().all()]

    async def get_satellite_by_id(self, satellite_id: str) -> Optional[SatelliteRecord]:
        """根據 ID 獲取衛星"""
        async with self._session("獲取衛星") as session:
            row = await self._get_row(session, satellite_id)
            return row.to_record() if row is not None else None

    async def save_satellite(self, record: SatelliteRecord) -> Optional[SatelliteRecord]:
        """更新衛星數據（名稱、TLE、軌道狀態在同一次提交中寫入）"""
        async with self._session("更新衛星") as session:
            db_satellite = await self._get_row(session, record.id)

            if db_satellite is None:
                return None

            db_satellite.apply_record(record)

            await session.commit()
            await session.refresh(db_satellite)
            return db_satellite.to_record()

    async def delete_satellite(self, satellite_id: str) -> Optional[SatelliteRecord]:
        """刪除衛星"""
        async with self._session("刪除衛星") as session:
            db_satellite = await self._get_row(session, satellite_id)

            if db_satellite is None:
                return None

            removed = db_satellite.to_record()
            await session.delete(db_satellite)
            await session.commit()
            return removed

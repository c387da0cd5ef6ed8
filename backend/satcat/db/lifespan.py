import logging
from contextlib import asynccontextmanager
from pathlib import Path
from fastapi import FastAPI

from sqlmodel import SQLModel

from satcat.db.base import engine, async_session_maker
from satcat.core.config import SATELLITE_SEED_FILE

# 匯入模型以便 SQLModel.metadata 註冊 satellite_record 表格
from satcat.domains.satellite.models.satellite_model import SatelliteTable  # noqa: F401
from satcat.domains.satellite.adapters.sqlmodel_satellite_repository import (
    SQLModelSatelliteRepository,
)
from satcat.domains.satellite.services.satellite_service import SatelliteService
from satcat.domains.satellite.services.tle_service import parse_tle_catalog

logger = logging.getLogger(__name__)


async def create_db_and_tables():
    """Creates database tables if they don't exist."""
    async with engine.begin() as conn:
        logger.info("Creating database tables...")
        await conn.run_sync(SQLModel.metadata.create_all)
        logger.info("Database tables created (if they didn't exist).")


async def seed_satellites_from_catalog(seed_file: str) -> int:
    """資料庫為空時，從 TLE 目錄檔案批量匯入衛星

    Args:
        seed_file: CelesTrak 三行格式的 TLE 檔案路徑

    Returns:
        匯入的衛星數量
    """
    path = Path(seed_file)
    if not path.is_file():
        logger.warning(f"TLE seed file not found: {path}. Skipping satellite seeding.")
        return 0

    service = SatelliteService(SQLModelSatelliteRepository(async_session_maker))
    existing = await service.list_satellites()
    if existing:
        logger.info(
            f"Satellite table already holds {len(existing)} records. Skipping seeding."
        )
        return 0

    entries = parse_tle_catalog(path.read_text(encoding="utf-8"))
    summary = await service.bulk_create_satellites(entries)
    logger.info(f"Seeded {summary.created} satellites from {path}.")
    return summary.created


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Context manager for FastAPI startup and shutdown logic."""
    logger.info("Application startup sequence initiated...")

    logger.info("Database initialization sequence...")
    await create_db_and_tables()

    if SATELLITE_SEED_FILE:
        try:
            await seed_satellites_from_catalog(SATELLITE_SEED_FILE)
        except Exception as e:
            logger.error(f"Error seeding satellites from catalog: {e}", exc_info=True)
            raise

    logger.info("Application startup complete.")

    yield

    # 在應用程式關閉前釋放連線池
    logger.info("Disposing database engine...")
    await engine.dispose()

    logger.info("Application shutdown complete.")

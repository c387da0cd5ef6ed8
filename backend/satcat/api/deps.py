from satcat.db.base import async_session_maker
from satcat.domains.satellite.adapters.sqlmodel_satellite_repository import (
    SQLModelSatelliteRepository,
)
from satcat.domains.satellite.interfaces.satellite_service_interface import (
    SatelliteServiceInterface,
)
from satcat.domains.satellite.services.satellite_service import SatelliteService

# 創建服務實例
satellite_repository = SQLModelSatelliteRepository(async_session_maker)
satellite_service = SatelliteService(satellite_repository=satellite_repository)


def get_satellite_service() -> SatelliteServiceInterface:
    """提供衛星記錄服務的 FastAPI 依賴"""
    return satellite_service

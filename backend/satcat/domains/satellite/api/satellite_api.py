import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Path, status

from satcat.api.deps import get_satellite_service
from satcat.core.config import BULK_CREATE_MAX_ENTRIES
from satcat.domains.satellite.exceptions import (
    InvalidSatelliteData,
    MalformedTLE,
    SatelliteError,
    SatelliteNotFound,
    StoreUnavailable,
)
from satcat.domains.satellite.interfaces.satellite_service_interface import (
    SatelliteServiceInterface,
)
from satcat.domains.satellite.models.dto import (
    BulkCreateSummary,
    SatellitePatch,
    TLECatalogUpload,
    TLEEntry,
)
from satcat.domains.satellite.models.satellite_model import SatelliteRecord
from satcat.domains.satellite.services.tle_service import parse_tle_catalog

logger = logging.getLogger(__name__)
router = APIRouter()


def _to_http_error(error: SatelliteError, action: str) -> HTTPException:
    """將衛星領域例外轉換為 HTTPException"""
    if isinstance(error, SatelliteNotFound):
        logger.info(f"{action}: {error}")
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(error))
    if isinstance(error, (MalformedTLE, InvalidSatelliteData)):
        logger.warning(f"{action}時資料無效: {error}")
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))
    if isinstance(error, StoreUnavailable):
        logger.error(f"{action}時儲存庫不可用: {error}")
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(error)
        )
    logger.error(f"{action}時出錯: {error}", exc_info=True)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"{action}時出錯: {str(error)}",
    )


def _check_batch_size(count: int) -> None:
    if count > BULK_CREATE_MAX_ENTRIES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"單次批量匯入最多 {BULK_CREATE_MAX_ENTRIES} 筆，收到 {count} 筆",
        )


@router.post("/", response_model=SatelliteRecord, status_code=status.HTTP_201_CREATED)
async def create_satellite(
    entry: TLEEntry,
    service: SatelliteServiceInterface = Depends(get_satellite_service),
):
    """由 TLE 創建衛星"""
    try:
        return await service.create_satellite(entry.name, entry.line_one, entry.line_two)
    except SatelliteError as e:
        raise _to_http_error(e, "創建衛星")


@router.post(
    "/bulk", response_model=BulkCreateSummary, status_code=status.HTTP_201_CREATED
)
async def bulk_create_satellites(
    entries: List[TLEEntry],
    service: SatelliteServiceInterface = Depends(get_satellite_service),
):
    """批量創建衛星，任一條目無效則整批拒絕"""
    _check_batch_size(len(entries))
    try:
        return await service.bulk_create_satellites(entries)
    except SatelliteError as e:
        raise _to_http_error(e, "批量創建衛星")


@router.post(
    "/bulk/catalog",
    response_model=BulkCreateSummary,
    status_code=status.HTTP_201_CREATED,
)
async def import_tle_catalog(
    upload: TLECatalogUpload,
    service: SatelliteServiceInterface = Depends(get_satellite_service),
):
    """從三行格式的 TLE 目錄文字批量創建衛星"""
    try:
        entries = parse_tle_catalog(upload.catalog)
        _check_batch_size(len(entries))
        return await service.bulk_create_satellites(entries)
    except SatelliteError as e:
        raise _to_http_error(e, "匯入 TLE 目錄")


@router.get("/", response_model=List[SatelliteRecord])
async def get_satellites(
    service: SatelliteServiceInterface = Depends(get_satellite_service),
):
    """獲取所有衛星"""
    try:
        return await service.list_satellites()
    except SatelliteError as e:
        raise _to_http_error(e, "獲取衛星")


@router.get("/{satellite_id}", response_model=SatelliteRecord)
async def get_satellite_by_id(
    satellite_id: str = Path(..., description="衛星 ID"),
    service: SatelliteServiceInterface = Depends(get_satellite_service),
):
    """根據 ID 獲取特定衛星"""
    try:
        return await service.get_satellite_by_id(satellite_id)
    except SatelliteError as e:
        raise _to_http_error(e, "獲取衛星")


@router.patch("/{satellite_id}", response_model=SatelliteRecord)
async def update_satellite(
    patch: SatellitePatch,
    satellite_id: str = Path(..., description="衛星 ID"),
    service: SatelliteServiceInterface = Depends(get_satellite_service),
):
    """更新衛星名稱或 TLE，TLE 變更時重新推導軌道狀態"""
    try:
        return await service.update_satellite_by_id(satellite_id, patch)
    except SatelliteError as e:
        raise _to_http_error(e, "更新衛星")


@router.delete("/{satellite_id}", response_model=SatelliteRecord)
async def delete_satellite(
    satellite_id: str = Path(..., description="衛星 ID"),
    service: SatelliteServiceInterface = Depends(get_satellite_service),
):
    """刪除衛星並返回被刪除的記錄"""
    try:
        return await service.delete_satellite_by_id(satellite_id)
    except SatelliteError as e:
        raise _to_http_error(e, "刪除衛星")

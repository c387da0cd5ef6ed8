"""
衛星領域模組

包含衛星 TLE 記錄管理、軌道狀態推導與批量匯入等功能。
"""

from satcat.domains.satellite.exceptions import (
    SatelliteError,
    MalformedTLE,
    SatelliteNotFound,
    InvalidSatelliteData,
    StoreUnavailable,
)
from satcat.domains.satellite.models.satellite_model import (
    SatelliteRecord,
    SatelliteTable,
    TLEPair,
    OrbitalState,
)
from satcat.domains.satellite.models.dto import (
    TLEEntry,
    SatellitePatch,
    BulkCreateSummary,
    TLECatalogUpload,
)
from satcat.domains.satellite.interfaces.satellite_repository import (
    SatelliteRepositoryInterface,
)
from satcat.domains.satellite.interfaces.satellite_service_interface import (
    SatelliteServiceInterface,
    OrbitalStateDeriver,
)
from satcat.domains.satellite.adapters.sqlmodel_satellite_repository import (
    SQLModelSatelliteRepository,
)
from satcat.domains.satellite.services.tle_service import (
    derive_orbital_state,
    parse_tle_catalog,
)
from satcat.domains.satellite.services.satellite_service import SatelliteService

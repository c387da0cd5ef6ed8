# backend/satcat/api/v1/router.py
from fastapi import APIRouter

from satcat.domains.satellite.api.satellite_api import router as satellite_router

api_router = APIRouter()

# 衛星記錄 API
api_router.include_router(satellite_router, prefix="/satellites", tags=["Satellites"])

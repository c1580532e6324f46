"""Settings router - FastAPI endpoints for business configuration"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from ...dependencies import get_settings_service
from .schemas import BusinessSettings, SettingResponse, SettingUpdate, SettingValue
from .service import SettingsService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/configuracion", tags=["Settings"])


@router.get("", response_model=dict[str, str])
async def get_settings(service: SettingsService = Depends(get_settings_service)):
    """Get every setting as a key/value mapping"""
    return service.get_all()


@router.put("", response_model=dict[str, str])
async def update_settings(
    data: dict[str, SettingValue],
    service: SettingsService = Depends(get_settings_service),
):
    """Create or update several settings at once"""
    if not data:
        raise HTTPException(status_code=400, detail="No se enviaron configuraciones")
    return service.update_many(data)


@router.patch("", response_model=SettingResponse)
async def update_setting(
    data: SettingUpdate,
    service: SettingsService = Depends(get_settings_service),
):
    """Create or update a single setting"""
    return service.update_one(data.clave, data.valor)


@router.get("/negocio", response_model=BusinessSettings)
async def get_business_settings(service: SettingsService = Depends(get_settings_service)):
    """Currency and business information used for display formatting"""
    return service.get_business_settings()

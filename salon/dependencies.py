"""Shared FastAPI dependencies"""

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from .cache import SettingsCache
from .database import get_db
from .domain.scheduling.service import SchedulingService
from .domain.settings.service import SettingsService


def get_settings_cache(request: Request) -> SettingsCache:
    """The settings cache owned by the running application"""
    return request.app.state.settings_cache


def get_settings_service(
    db: Session = Depends(get_db),
    cache: SettingsCache = Depends(get_settings_cache),
) -> SettingsService:
    """Dependency injection for SettingsService"""
    return SettingsService(db, cache)


def get_scheduling_service(
    db: Session = Depends(get_db),
    settings: SettingsService = Depends(get_settings_service),
) -> SchedulingService:
    """Dependency injection for SchedulingService"""
    return SchedulingService(db, settings)

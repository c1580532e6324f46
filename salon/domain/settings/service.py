"""Settings service - Business configuration with a time-bounded cache"""

import logging
from typing import Any, Optional

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ... import config
from ...cache import SettingsCache
from ...models import Setting
from .repository import SettingsRepository
from .schemas import BusinessSettings, CurrencySettings, SettingResponse

logger = logging.getLogger(__name__)

INTERVAL_KEY = "horarios_intervalo_citas"

CACHE_ALL = "all"
CACHE_BUSINESS = "business"


def stringify(value: Any) -> str:
    """Store every setting as text; booleans as lowercase"""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def format_price(amount: float, currency: Optional[CurrencySettings] = None) -> str:
    """Format a price with the configured symbol, position and decimals"""
    currency = currency or CurrencySettings()
    formatted = f"{amount:.{currency.decimales}f}"
    if currency.posicion == "before":
        return f"{currency.simbolo}{formatted}"
    return f"{formatted}{currency.simbolo}"


def to_response(setting: Setting) -> SettingResponse:
    return SettingResponse(
        id=setting.id,
        clave=setting.key,
        valor=setting.value,
        tipo=setting.type,
        categoria=setting.category,
        updatedAt=setting.updated_at,
    )


class SettingsService:
    """Service layer for business settings"""

    def __init__(self, db: Session, cache: SettingsCache):
        self.db = db
        self.cache = cache
        self.repo = SettingsRepository()

    def get_all(self) -> dict[str, str]:
        """All settings as a key/value mapping"""
        cached = self.cache.get(CACHE_ALL)
        if cached is not None:
            return cached

        values = {s.key: s.value for s in self.repo.get_all(self.db)}
        self.cache.set(CACHE_ALL, values)
        return values

    def update_many(self, values: dict[str, Any]) -> dict[str, str]:
        """Upsert several settings in one transaction"""
        try:
            for key, value in values.items():
                self.repo.upsert(self.db, key, stringify(value), commit=False)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Failed to update settings {list(values)}: {e}")
            raise HTTPException(status_code=500, detail="Error interno del servidor")
        finally:
            self.cache.invalidate()

        logger.info(f"⚙️ Updated {len(values)} setting(s)")
        return self.get_all()

    def update_one(self, key: str, value: Any) -> SettingResponse:
        """Upsert a single setting"""
        try:
            setting = self.repo.upsert(self.db, key, stringify(value))
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Failed to update setting {key}: {e}")
            raise HTTPException(status_code=500, detail="Error interno del servidor")
        finally:
            self.cache.invalidate()

        logger.info(f"⚙️ Setting {key} updated")
        return to_response(setting)

    def get_business_settings(self) -> BusinessSettings:
        """Currency and business information, falling back to defaults for missing keys"""
        cached = self.cache.get(CACHE_BUSINESS)
        if cached is not None:
            return BusinessSettings.model_validate(cached)

        values = self.get_all()
        defaults = BusinessSettings()

        try:
            decimals = int(values.get("moneda_decimales", defaults.moneda.decimales))
        except ValueError:
            logger.warning(f"⚠️ Invalid moneda_decimales '{values.get('moneda_decimales')}', using default")
            decimals = defaults.moneda.decimales

        position = values.get("moneda_posicion", defaults.moneda.posicion)
        if position not in ("before", "after"):
            position = defaults.moneda.posicion

        business = BusinessSettings(
            moneda=CurrencySettings(
                simbolo=values.get("moneda_simbolo") or defaults.moneda.simbolo,
                nombre=values.get("moneda_nombre") or defaults.moneda.nombre,
                posicion=position,
                decimales=decimals,
            ),
            negocio={
                "nombre": values.get("negocio_nombre") or defaults.negocio.nombre,
                "telefono": values.get("negocio_telefono") or defaults.negocio.telefono,
                "direccion": values.get("negocio_direccion") or defaults.negocio.direccion,
                "horario_apertura": values.get("horario_apertura") or defaults.negocio.horario_apertura,
                "horario_cierre": values.get("horario_cierre") or defaults.negocio.horario_cierre,
            },
        )
        self.cache.set(CACHE_BUSINESS, business.model_dump())
        return business

    def format_price(self, amount: float) -> str:
        return format_price(amount, self.get_business_settings().moneda)

    def get_appointment_interval(self) -> int:
        """Minimum minutes between appointments"""
        raw = self.get_all().get(INTERVAL_KEY)
        if raw is None:
            return config.APPOINTMENT_INTERVAL_MINUTES

        try:
            interval = int(raw)
        except ValueError:
            interval = 0

        if interval <= 0:
            logger.warning(f"⚠️ Invalid {INTERVAL_KEY} '{raw}', using {config.APPOINTMENT_INTERVAL_MINUTES}")
            return config.APPOINTMENT_INTERVAL_MINUTES
        return interval

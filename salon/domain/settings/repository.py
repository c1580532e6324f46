"""Settings repository - Database operations for business settings"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Setting


class SettingsRepository:
    """Repository for key/value settings"""

    @staticmethod
    def get_all(db: Session) -> list[Setting]:
        return db.query(Setting).order_by(Setting.key).all()

    @staticmethod
    def get_by_key(db: Session, key: str) -> Optional[Setting]:
        return db.query(Setting).filter(Setting.key == key).first()

    @staticmethod
    def upsert(db: Session, key: str, value: str, commit: bool = True) -> Setting:
        """Update the value of an existing key or create it as a general string setting"""
        setting = db.query(Setting).filter(Setting.key == key).first()
        if setting:
            setting.value = value
        else:
            setting = Setting(key=key, value=value, type="string", category="general")
            db.add(setting)

        if commit:
            db.commit()
            db.refresh(setting)
        return setting

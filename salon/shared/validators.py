"""Shared validation utilities"""

import re
from datetime import date
from typing import Optional

TIME_OF_DAY_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")


def validate_time_of_day(value: Optional[str]) -> str:
    """
    Validate a time of day in 24h HH:MM format.

    Raises:
        ValueError: If the value is not a valid HH:MM string
    """
    if not value or not TIME_OF_DAY_PATTERN.match(value.strip()):
        raise ValueError("Hora inválida, se espera el formato HH:MM")
    return value.strip()


def time_to_minutes(value: str) -> int:
    """Convert HH:MM to minutes since midnight"""
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


def minutes_to_time(minutes: int) -> str:
    """Convert minutes since midnight to HH:MM"""
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def validate_date(value: Optional[str]) -> date:
    """
    Parse a calendar day in YYYY-MM-DD format.

    Raises:
        ValueError: If the value is not a valid ISO date
    """
    if not value:
        raise ValueError("Fecha inválida, se espera el formato YYYY-MM-DD")
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        raise ValueError("Fecha inválida, se espera el formato YYYY-MM-DD") from None


def validate_email(email: Optional[str]) -> Optional[str]:
    """
    Validate email format.

    Returns:
        Lowercase email address

    Raises:
        ValueError: If email format is invalid
    """
    if not email:
        return email

    email = email.strip().lower()

    email_pattern = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"

    if not re.match(email_pattern, email):
        raise ValueError("Email inválido")

    return email


def validate_phone(phone: Optional[str]) -> Optional[str]:
    """
    Normalize a phone number, keeping a leading + and digits only.

    Raises:
        ValueError: If fewer than 7 or more than 15 digits remain
    """
    if not phone:
        return phone

    digits = re.sub(r"\D", "", phone)
    if len(digits) < 7 or len(digits) > 15:
        raise ValueError("Teléfono inválido")

    return f"+{digits}" if phone.strip().startswith("+") else digits

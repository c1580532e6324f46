"""Scheduling router - Read-only availability and occupancy endpoints"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import ValidationError

from ...dependencies import get_scheduling_service
from .schemas import (
    AvailabilityQuery,
    AvailabilityResponse,
    OccupancyQuery,
    OccupancyResponse,
    first_error_message,
)
from .service import SchedulingService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/citas", tags=["Scheduling"])


@router.get("/disponibilidad", response_model=AvailabilityResponse, response_model_exclude_none=True)
async def check_availability(
    fecha: Optional[str] = Query(None, description="YYYY-MM-DD"),
    hora: Optional[str] = Query(None, description="HH:MM"),
    servicioId: Optional[str] = Query(None),
    permitirSuperposicion: Optional[str] = Query(None),
    excluirCitaId: Optional[str] = Query(None),
    service: SchedulingService = Depends(get_scheduling_service),
):
    """
    Check whether an appointment fits at the given date and time.
    Returns conflicts, overlaps and alternative start times.
    """
    if not fecha or not hora:
        raise HTTPException(status_code=400, detail="Fecha y hora son requeridas")

    try:
        query = AvailabilityQuery(
            fecha=fecha,
            hora=hora,
            servicioId=servicioId or None,
            permitirSuperposicion=permitirSuperposicion or False,
            excluirCitaId=excluirCitaId or None,
        )
    except ValidationError as e:
        logger.warning(f"Invalid availability query {fecha} {hora}: {e.errors()}")
        raise HTTPException(status_code=400, detail=first_error_message(e))

    return service.check_availability(query)


@router.get("/ocupacion", response_model=OccupancyResponse)
async def get_occupancy(
    fecha: Optional[str] = Query(None, description="YYYY-MM-DD"),
    service: SchedulingService = Depends(get_scheduling_service),
):
    """Day snapshot with statistics, same-time conflicts and free half-hour slots"""
    if not fecha:
        raise HTTPException(status_code=400, detail="Fecha es requerida")

    try:
        query = OccupancyQuery(fecha=fecha)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=first_error_message(e))

    return service.get_occupancy(query.fecha)

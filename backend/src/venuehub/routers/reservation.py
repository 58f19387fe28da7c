"""Reservation endpoints."""

from fastapi import APIRouter

from venuehub.dependencies import DB
from venuehub.schemas.result import OperationResponse
from venuehub.services.reservation import delete_reservation

router = APIRouter(prefix="/reservations", tags=["reservations"])


@router.delete("/{reservation_id}", response_model=OperationResponse)
async def delete(db: DB, reservation_id: int) -> OperationResponse:
    return OperationResponse.model_validate(await delete_reservation(db, reservation_id))

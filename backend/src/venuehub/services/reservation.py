"""Reservation business logic.

Creating and editing reservations is handled elsewhere; this module only
removes them, which frees the seats in the affected window.
"""

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from venuehub.db.session import transaction
from venuehub.exceptions import NotFoundError
from venuehub.logging import get_logger
from venuehub.repositories.reservation import get_reservation, remove_reservation
from venuehub.services.results import OperationResult

logger = get_logger(__name__)


async def delete_reservation(db: AsyncSession, reservation_id: int) -> OperationResult:
    reservation = await get_reservation(db, reservation_id)
    if reservation is None:
        raise NotFoundError("Reservation", reservation_id)

    try:
        async with transaction(db):
            await remove_reservation(db, reservation)
    except SQLAlchemyError:
        logger.exception("reservation_delete_failed", reservation_id=reservation_id)
        return OperationResult.fail("Error while deleting reservation. Please try again later.")

    logger.info("reservation_deleted", reservation_id=reservation_id, venue_id=reservation.venue_id)
    return OperationResult.ok("Reservation deleted successfully.")

import datetime
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .. import schemas, crud
from ..cancellation import refund_message
from ..database import get_db

router = APIRouter(prefix="/bookings", tags=["Bookings"])


@router.post("/", response_model=schemas.BookingRead, status_code=status.HTTP_201_CREATED)
def create_booking(booking: schemas.BookingCreate, db: Session = Depends(get_db)):
    """
    Create a pending booking request for a guest.
    """
    try:
        return crud.create_booking(db=db, booking=booking, today=datetime.date.today())
    except SQLAlchemyError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"An error occurred while creating the booking: {e}"
        )


@router.get("/", response_model=List[schemas.BookingRead])
def read_guest_bookings(
        guest_id: str,
        skip: int = 0,
        limit: int = 100,
        db: Session = Depends(get_db),
):
    """
    Get all bookings made by a guest.
    """
    return crud.get_bookings_by_guest(db=db, guest_id=guest_id, skip=skip, limit=limit)


@router.get("/{booking_id}", response_model=schemas.BookingRead)
def read_booking(booking_id: int, db: Session = Depends(get_db)):
    return crud.get_booking(db, booking_id)


@router.patch("/{booking_id}/status", response_model=schemas.BookingRead)
def update_booking_status(
        booking_id: int,
        update: schemas.BookingStatusUpdate,
        db: Session = Depends(get_db),
):
    """
    Host decision on a request (confirm / reject), or marking a stay completed.
    """
    return crud.update_booking_status(db, booking_id, update.status, reason=update.reason)


@router.get("/{booking_id}/cancellation-policy", response_model=schemas.RefundDecisionRead)
def read_cancellation_policy(booking_id: int, db: Session = Depends(get_db)):
    """
    What cancelling right now would refund.
    """
    decision = crud.preview_cancellation(db, booking_id, now=datetime.datetime.now())
    return schemas.RefundDecisionRead(
        tier=decision.tier,
        days_until_check_in=decision.days_until_check_in,
        refund_amount=decision.refund_amount,
        message=refund_message(decision.tier),
    )


@router.post("/{booking_id}/cancel", response_model=schemas.BookingRead)
def cancel_booking(
        booking_id: int,
        request: schemas.CancellationRequest,
        db: Session = Depends(get_db),
):
    return crud.cancel_booking(
        db, booking_id, cancelled_by=request.cancelled_by, now=datetime.datetime.now()
    )

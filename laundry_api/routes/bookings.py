# laundry_api/routes/bookings.py
from typing import List

from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError
from sqlalchemy.orm import Session

from laundry_api import crud, schemas
from laundry_api.auth import CurrentUser, get_current_user
from laundry_api.database import get_db
from laundry_api.errors import InvalidInput

router = APIRouter(
    prefix="/bookings",
    tags=["Bookings"]
)


# The body is only read once the caller is authenticated
async def read_booking_body(
    request: Request,
    current_user: CurrentUser = Depends(get_current_user),
) -> schemas.BookingCreate:
    try:
        data = await request.json()
    except ValueError:
        raise InvalidInput("Invalid request body")
    try:
        return schemas.BookingCreate.model_validate(data)
    except ValidationError as exc:
        fields = sorted({str(err["loc"][-1]) for err in exc.errors() if err.get("loc")})
        raise InvalidInput("Invalid request body", fields=fields)


# List the caller's bookings
@router.get("", response_model=List[schemas.BookingResponse])
def list_user_bookings(db: Session = Depends(get_db), current_user: CurrentUser = Depends(get_current_user)):
    return crud.list_bookings_for_owner(db, current_user.user_id)


# Book a slot; no availability check is made
@router.post(
    "",
    response_model=schemas.BookingResponse,
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": schemas.BookingCreate.model_json_schema(by_alias=True)}},
        }
    },
)
def create_booking(
    booking: schemas.BookingCreate = Depends(read_booking_body),
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    return crud.create_booking(db, current_user.user_id, booking)


@router.delete("/{booking_id}", response_model=schemas.MessageResponse)
def delete_user_booking(
    booking_id: str,
    db: Session = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    crud.delete_booking_for_owner(db, booking_id, current_user.user_id)
    return {"message": f"Booking {booking_id} deleted"}

# laundry_api/crud.py
"""
Credential and booking stores.

Every function takes the request's SQLAlchemy ``Session`` and performs at
most one commit. Database failures are logged, rolled back and re-raised as
``InternalError``; nothing here is retried.
"""
import logging
import uuid
from contextlib import contextmanager
from typing import List

from passlib.exc import PasswordValueError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from laundry_api import auth, models, schemas
from laundry_api.errors import AlreadyExists, InternalError, InvalidCredentials, InvalidInput, NotFound
from laundry_api.validation import parse_booking_date, require_fields

logger = logging.getLogger(__name__)

BOOKING_FIELDS = ("slot_id", "machine", "machine_type", "day_name", "date", "time_slot", "timestamp")


@contextmanager
def _store_call(db: Session, action: str):
    try:
        yield
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Database error while %s", action)
        raise InternalError()


# Credential store

def register_user(db: Session, username: str, password: str, rounds: int = auth.DEFAULT_BCRYPT_ROUNDS) -> models.User:
    if not username or not password:
        raise InvalidInput("Username and password required")

    with _store_call(db, "registering a user"):
        existing_user = db.query(models.User).filter(models.User.username == username).first()
        if existing_user:
            raise AlreadyExists()

        try:
            hashed_password = auth.get_password_hash(password, rounds)
        except PasswordValueError:
            # bcrypt refuses NUL bytes
            raise InvalidInput("Password contains unsupported characters", fields=["password"])

        new_user = models.User(username=username, hashed_password=hashed_password)
        db.add(new_user)
        try:
            db.commit()
        except IntegrityError:
            # Lost a race against a concurrent registration of the same name
            db.rollback()
            raise AlreadyExists()
        db.refresh(new_user)

    logger.info("Registered user %s (%s)", new_user.username, new_user.id)
    return new_user


def authenticate_user(db: Session, username: str, password: str) -> models.User:
    with _store_call(db, "looking up a user"):
        db_user = db.query(models.User).filter(models.User.username == username).first()

    if db_user is None:
        auth.dummy_verify()
        raise InvalidCredentials()
    if not auth.verify_password(password, db_user.hashed_password):
        raise InvalidCredentials()
    return db_user


# Booking store

def create_booking(db: Session, owner_id: uuid.UUID, booking_in: schemas.BookingCreate) -> models.Booking:
    # The owner is always the caller; the payload has no say in it
    values = require_fields(booking_in, BOOKING_FIELDS, "All booking fields required")
    values["date"] = parse_booking_date(values["date"])
    booking = models.Booking(user_id=owner_id, **values)

    with _store_call(db, "creating a booking"):
        db.add(booking)
        db.commit()
        db.refresh(booking)

    logger.info("User %s booked %s on %s (%s)", owner_id, booking.machine, booking.date, booking.id)
    return booking


def list_bookings_for_owner(db: Session, owner_id: uuid.UUID) -> List[models.Booking]:
    with _store_call(db, "listing bookings"):
        return (
            db.query(models.Booking)
            .filter(models.Booking.user_id == owner_id)
            .order_by(models.Booking.created_at)
            .all()
        )


def parse_booking_id(booking_id: str) -> uuid.UUID:
    try:
        return uuid.UUID(booking_id)
    except (ValueError, TypeError, AttributeError):
        raise InvalidInput("Invalid booking ID")


def delete_booking_for_owner(db: Session, booking_id: str, owner_id: uuid.UUID) -> models.Booking:
    """Delete a booking only when it belongs to ``owner_id``.

    A booking owned by someone else is reported exactly like a missing one.
    """
    parsed_id = parse_booking_id(booking_id)

    with _store_call(db, "deleting a booking"):
        booking = db.query(models.Booking).filter(
            models.Booking.id == parsed_id,
            models.Booking.user_id == owner_id,
        ).first()
        if booking is None:
            raise NotFound()

        db.delete(booking)
        db.commit()

    logger.info("User %s deleted booking %s", owner_id, parsed_id)
    return booking

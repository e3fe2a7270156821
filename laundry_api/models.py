# laundry_api/models.py
import datetime
import uuid

from sqlalchemy import Column, Date, DateTime, ForeignKey, String, Uuid

from laundry_api.database import Base


def _utcnow():
    return datetime.datetime.now(datetime.timezone.utc)


class User(Base):
    __tablename__ = "users"
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    username = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)  # bcrypt, never plaintext


class Booking(Base):
    __tablename__ = "bookings"
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id"), index=True, nullable=False)
    slot_id = Column(String, nullable=False)
    machine = Column(String, nullable=False)
    machine_type = Column(String, nullable=False)
    day_name = Column(String, nullable=False)
    date = Column(Date, nullable=False)
    time_slot = Column(String, nullable=False)
    timestamp = Column(String, nullable=False)  # as sent by the client
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)

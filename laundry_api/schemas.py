# laundry_api/schemas.py
import datetime
import uuid
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Fields are optional here; presence is checked in laundry_api.validation
class UserCredentials(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None

    @field_validator("username")
    @classmethod
    def strip_username(cls, value):
        return value.strip() if isinstance(value, str) else value


class LoginResponse(CamelModel):
    token: str
    user_id: uuid.UUID


class MessageResponse(BaseModel):
    message: str


class BookingCreate(CamelModel):
    # Numbers sent for text fields are kept as their string form
    model_config = ConfigDict(coerce_numbers_to_str=True)

    slot_id: Optional[str] = None
    machine: Optional[str] = None
    machine_type: Optional[str] = None
    day_name: Optional[str] = None
    date: Optional[str] = None
    time_slot: Optional[str] = None
    timestamp: Optional[str] = None


class BookingResponse(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    user_id: uuid.UUID
    slot_id: str
    machine: str
    machine_type: str
    day_name: str
    date: datetime.date
    time_slot: str
    timestamp: str

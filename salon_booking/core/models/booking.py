"""
Booking-related data models.
"""

import hashlib
import json
from dataclasses import dataclass
from typing import List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..enums import ReservationOutcome, SlotScope


@dataclass(frozen=True)
class SlotKey:
    """The reservable unit: (date, time) or (date, time, technician)."""

    date: str
    time: str
    technician: Optional[str] = None

    @classmethod
    def build(
        cls, date: str, time: str, technician: Optional[str], scope: SlotScope
    ) -> "SlotKey":
        if scope == SlotScope.TECHNICIAN:
            return cls(date=date, time=time, technician=technician)
        return cls(date=date, time=time)

    def matches(self, date: str, time: str, technician: Optional[str]) -> bool:
        """Check whether a stored booking occupies this slot."""
        if self.date != date or self.time != time:
            return False
        if self.technician is None:
            return True
        return self.technician == (technician or None)

    def __str__(self) -> str:
        if self.technician:
            return f"{self.date} {self.time} ({self.technician})"
        return f"{self.date} {self.time}"


class BookingRequest(BaseModel):
    """Booking submission from the LIFF mini-app or chat flow."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    date: Optional[str] = None
    time: Optional[str] = None
    technician: Optional[str] = None
    main_service: Optional[str] = Field(default=None, alias="mainService")
    sub_service: Optional[str] = Field(default=None, alias="subService")
    price: Optional[float] = None
    customer_name: Optional[str] = Field(default=None, alias="customerName")
    contact_phone: Optional[str] = Field(default=None, alias="phoneNumber")
    notes: Optional[str] = None
    customer_channel_id: Optional[str] = Field(default=None, alias="lineUserId")
    submitted_at: Optional[str] = Field(default=None, alias="timestamp")

    @field_validator(
        "date", "time", "technician", "main_service", "sub_service",
        "customer_name", "contact_phone", "notes", "customer_channel_id",
        "submitted_at",
        mode="before",
    )
    @classmethod
    def _blank_to_none(cls, value):
        if isinstance(value, str):
            value = value.strip()
            return value or None
        return value

    @field_validator("price", mode="before")
    @classmethod
    def _coerce_price(cls, value: Union[str, int, float, None]):
        if isinstance(value, str):
            value = value.replace(",", "").strip()
            return value or None
        return value


class BookingRecord(BaseModel):
    """An accepted booking as persisted in the ledger."""

    model_config = ConfigDict(extra="forbid")

    booking_ref: str
    date: str
    time: str
    technician: Optional[str] = None
    main_service: Optional[str] = None
    sub_service: Optional[str] = None
    price: Optional[float] = None
    customer_name: Optional[str] = None
    contact_phone: Optional[str] = None
    notes: Optional[str] = None
    customer_channel_id: Optional[str] = None
    submitted_at: Optional[str] = None
    accepted_at: str

    @classmethod
    def from_request(
        cls, request: BookingRequest, slot_key: SlotKey, accepted_at: str
    ) -> "BookingRecord":
        """Build the record for a validated request; slot fields come from the key."""
        return cls(
            booking_ref=build_booking_ref(slot_key, request.customer_channel_id, accepted_at),
            date=slot_key.date,
            time=slot_key.time,
            technician=request.technician,
            main_service=request.main_service,
            sub_service=request.sub_service,
            price=request.price,
            customer_name=request.customer_name,
            contact_phone=request.contact_phone,
            notes=request.notes,
            customer_channel_id=request.customer_channel_id,
            submitted_at=request.submitted_at,
            accepted_at=accepted_at,
        )

    def slot_key(self, scope: SlotScope) -> SlotKey:
        return SlotKey.build(self.date, self.time, self.technician, scope)

    def service_label(self) -> str:
        """Human-readable service, e.g. 'Cut + Wash'."""
        main = self.main_service or ""
        if self.sub_service:
            return f"{main} + {self.sub_service}".strip()
        return main

    def price_label(self) -> str:
        if self.price is None:
            return "-"
        if float(self.price).is_integer():
            return str(int(self.price))
        return f"{self.price:.2f}"


def build_booking_ref(slot_key: SlotKey, channel_id: Optional[str], accepted_at: str) -> str:
    """Short stable reference for a booking."""
    raw = {
        "date": slot_key.date,
        "time": slot_key.time,
        "tech": slot_key.technician,
        "chat": channel_id,
        "at": accepted_at,
    }
    digest = hashlib.sha256(
        json.dumps(raw, ensure_ascii=False, sort_keys=True).encode("utf-8")
    ).hexdigest()
    return f"BK-{digest[:8].upper()}"


class ReservationResult(BaseModel):
    """Typed outcome of SlotReservationGuard.reserve."""

    outcome: ReservationOutcome
    record: Optional[BookingRecord] = None
    reason: Optional[str] = None
    failed_recipients: List[str] = Field(default_factory=list)

    @property
    def accepted(self) -> bool:
        return self.outcome.accepted

    @classmethod
    def invalid(cls, reason: str) -> "ReservationResult":
        return cls(outcome=ReservationOutcome.REJECTED_INVALID, reason=reason)

    @classmethod
    def conflict(cls, slot_key: SlotKey) -> "ReservationResult":
        return cls(
            outcome=ReservationOutcome.REJECTED_CONFLICT,
            reason=f"Slot {slot_key} is already booked",
        )

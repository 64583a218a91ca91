from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from booking_service.domain.entities.booking import Booking, BookingStatus


class ProposeBookingSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    email: str
    phone: str | None = None
    date: str
    time: str
    meeting_type: str | None = Field(default=None, alias="meetingType")
    notes: str | None = None


class ProposeBookingResponseSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    booking_id: str = Field(alias="bookingId")


class BookingSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    email: str
    phone: str
    date: str
    time: str
    meeting_type: str = Field(alias="meetingType")
    notes: str
    status: BookingStatus
    created_at: str = Field(alias="createdAt")

    @classmethod
    def from_booking(cls, booking: Booking) -> BookingSchema:
        return cls(
            id=booking.id,
            name=booking.contact.name,
            email=booking.contact.email,
            phone=booking.contact.phone,
            date=booking.date.isoformat(),
            time=booking.time.strftime("%H:%M"),
            meeting_type=booking.meeting_type.value,
            notes=booking.notes,
            status=booking.status,
            created_at=booking.created_at.isoformat(),
        )


class BookingListResponseSchema(BaseModel):
    success: bool = True
    bookings: list[BookingSchema]


class BookingResponseSchema(BaseModel):
    success: bool = True
    booking: BookingSchema


class SetStatusSchema(BaseModel):
    id: str = Field(min_length=1)
    status: str = Field(min_length=1)


class CancelResponseSchema(BaseModel):
    success: bool = True
    message: str = "Booking cancelled"


class BusyIntervalSchema(BaseModel):
    start: str
    end: str


class AvailabilityResponseSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    booked_slots: list[BusyIntervalSchema] = Field(alias="bookedSlots")
    time_zone: str = Field(alias="timeZone")

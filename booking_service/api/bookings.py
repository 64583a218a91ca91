from __future__ import annotations

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query

from booking_service.api.errors import to_http_exception
from booking_service.api.identity import get_identity
from booking_service.api.schemas import (
    AvailabilityResponseSchema,
    BusyIntervalSchema,
    CancelResponseSchema,
    ProposeBookingResponseSchema,
    ProposeBookingSchema,
)
from booking_service.application.exceptions import BookingError
from booking_service.application.use_cases.access_gate import AccessGate
from booking_service.application.use_cases.booking_engine import BookingEngine
from booking_service.application.use_cases.notify_booking import NotifyBookingUseCase
from booking_service.application.utils.booking_validation import build_booking_request
from booking_service.core.config import settings
from booking_service.domain.entities.identity import Identity
from booking_service.domain.entities.notification import BookingEvent
from booking_service.wiring.dependencies import get_access_gate, get_booking_engine, get_notify_use_case


router = APIRouter(prefix="/api/bookings")

LOCAL_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S"


@router.post("", status_code=201, response_model=ProposeBookingResponseSchema)
def propose_booking(
    req: ProposeBookingSchema,
    background_tasks: BackgroundTasks,
    engine: BookingEngine = Depends(get_booking_engine),
    notify: NotifyBookingUseCase = Depends(get_notify_use_case),
):
    try:
        request = build_booking_request(
            name=req.name,
            email=req.email,
            date_text=req.date,
            time_text=req.time,
            phone=req.phone,
            meeting_type=req.meeting_type,
            notes=req.notes,
        )
        booking_id = engine.propose_booking(request)
    except BookingError as e:
        raise to_http_exception(e)

    background_tasks.add_task(notify.execute, booking_id, BookingEvent.created)
    return ProposeBookingResponseSchema(booking_id=booking_id)


@router.get("/availability", response_model=AvailabilityResponseSchema)
def availability(
    horizon_days: int | None = Query(None, alias="horizonDays"),
    engine: BookingEngine = Depends(get_booking_engine),
):
    horizon = settings.AVAILABILITY_HORIZON_DAYS if horizon_days is None else horizon_days
    try:
        intervals = engine.compute_availability(horizon)
    except BookingError as e:
        raise to_http_exception(e)

    return AvailabilityResponseSchema(
        booked_slots=[
            BusyIntervalSchema(
                start=i.start.strftime(LOCAL_TIMESTAMP_FORMAT),
                end=i.end.strftime(LOCAL_TIMESTAMP_FORMAT),
            )
            for i in intervals
        ],
        time_zone=engine.timezone.key,
    )


@router.delete("/{booking_id}", response_model=CancelResponseSchema)
def cancel_own_booking(
    booking_id: str,
    background_tasks: BackgroundTasks,
    identity: Identity | None = Depends(get_identity),
    gate: AccessGate = Depends(get_access_gate),
    engine: BookingEngine = Depends(get_booking_engine),
    notify: NotifyBookingUseCase = Depends(get_notify_use_case),
):
    if not booking_id.strip():
        raise HTTPException(status_code=400, detail="Missing booking id")
    try:
        owner_email = gate.cancel_scope(identity)
        booking = engine.cancel_booking(booking_id, owner_email=owner_email)
    except BookingError as e:
        raise to_http_exception(e)

    background_tasks.add_task(notify.execute, booking.id, BookingEvent.status_changed)
    return CancelResponseSchema()

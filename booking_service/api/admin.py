from __future__ import annotations

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query

from booking_service.api.errors import to_http_exception
from booking_service.api.identity import get_identity
from booking_service.api.schemas import (
    BookingListResponseSchema,
    BookingResponseSchema,
    BookingSchema,
    CancelResponseSchema,
    SetStatusSchema,
)
from booking_service.application.exceptions import BookingError
from booking_service.application.use_cases.access_gate import AccessGate, Operation
from booking_service.application.use_cases.booking_engine import BookingEngine
from booking_service.application.use_cases.notify_booking import NotifyBookingUseCase
from booking_service.domain.entities.identity import Identity
from booking_service.domain.entities.notification import BookingEvent
from booking_service.wiring.dependencies import get_access_gate, get_booking_engine, get_notify_use_case


router = APIRouter(prefix="/api/admin/bookings")


@router.get("", response_model=BookingListResponseSchema)
def list_active_bookings(
    identity: Identity | None = Depends(get_identity),
    gate: AccessGate = Depends(get_access_gate),
    engine: BookingEngine = Depends(get_booking_engine),
):
    try:
        gate.authorize(identity, Operation.list_active_bookings)
        bookings = engine.list_active_bookings()
    except BookingError as e:
        raise to_http_exception(e)
    return BookingListResponseSchema(bookings=[BookingSchema.from_booking(b) for b in bookings])


@router.get("/{booking_id}", response_model=BookingResponseSchema)
def get_booking(
    booking_id: str,
    identity: Identity | None = Depends(get_identity),
    gate: AccessGate = Depends(get_access_gate),
    engine: BookingEngine = Depends(get_booking_engine),
):
    try:
        gate.authorize(identity, Operation.get_booking)
        booking = engine.get_booking(booking_id)
    except BookingError as e:
        raise to_http_exception(e)
    return BookingResponseSchema(booking=BookingSchema.from_booking(booking))


@router.patch("", response_model=BookingResponseSchema)
def set_status(
    req: SetStatusSchema,
    background_tasks: BackgroundTasks,
    identity: Identity | None = Depends(get_identity),
    gate: AccessGate = Depends(get_access_gate),
    engine: BookingEngine = Depends(get_booking_engine),
    notify: NotifyBookingUseCase = Depends(get_notify_use_case),
):
    try:
        gate.authorize(identity, Operation.set_status)
        booking = engine.set_status(req.id, req.status)
    except BookingError as e:
        raise to_http_exception(e)

    background_tasks.add_task(notify.execute, booking.id, BookingEvent.status_changed)
    return BookingResponseSchema(booking=BookingSchema.from_booking(booking))


@router.delete("", response_model=CancelResponseSchema)
def cancel_booking(
    background_tasks: BackgroundTasks,
    booking_id: str | None = Query(None, alias="id"),
    identity: Identity | None = Depends(get_identity),
    gate: AccessGate = Depends(get_access_gate),
    engine: BookingEngine = Depends(get_booking_engine),
    notify: NotifyBookingUseCase = Depends(get_notify_use_case),
):
    try:
        gate.authorize(identity, Operation.cancel_booking)
    except BookingError as e:
        raise to_http_exception(e)
    if not booking_id:
        raise HTTPException(status_code=400, detail="Missing booking id")

    try:
        booking = engine.cancel_booking(booking_id)
    except BookingError as e:
        raise to_http_exception(e)

    background_tasks.add_task(notify.execute, booking.id, BookingEvent.status_changed)
    return CancelResponseSchema()

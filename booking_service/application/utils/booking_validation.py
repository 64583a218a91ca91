from __future__ import annotations

import re
from datetime import date, datetime, time

from booking_service.application.exceptions import ValidationError
from booking_service.domain.entities.booking import BookingRequest, BookingStatus, Contact, MeetingType

EMAIL_PATTERN = re.compile(r"^[^\s@<>]+@[^\s@<>]+\.[^\s@<>]+$")
DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
TIME_PATTERN = re.compile(r"^\d{2}:\d{2}$")

MAX_NAME_LENGTH = 100
MAX_EMAIL_LENGTH = 254
MAX_PHONE_LENGTH = 20
MAX_NOTES_LENGTH = 1000

# Older collections stored remote meetings under the name of the video tool.
LEGACY_MEETING_TYPES = {"zoom": MeetingType.remote}


def sanitize_text(value: str | None, max_length: int) -> str:
    """Trim to max_length and drop angle brackets. Not a full HTML sanitizer."""
    text = str(value or "").strip()[:max_length]
    return text.replace("<", "").replace(">", "")


def normalize_email(value: str | None) -> str:
    email = str(value or "").strip().lower()
    if not email or len(email) > MAX_EMAIL_LENGTH or not EMAIL_PATTERN.match(email):
        raise ValidationError("Invalid email format")
    return email


def parse_date(value: str | None) -> date:
    text = str(value or "").strip()
    if not DATE_PATTERN.match(text):
        raise ValidationError("Invalid date format")
    try:
        return date.fromisoformat(text)
    except ValueError:
        raise ValidationError("Invalid date format") from None


def parse_time(value: str | None) -> time:
    text = str(value or "").strip()
    if not TIME_PATTERN.match(text):
        raise ValidationError("Invalid time format")
    try:
        return datetime.strptime(text, "%H:%M").time()
    except ValueError:
        raise ValidationError("Invalid time format") from None


def parse_meeting_type(value: str | None) -> MeetingType:
    if value is None or not str(value).strip():
        return MeetingType.remote
    normalized = str(value).strip().lower()
    if normalized in LEGACY_MEETING_TYPES:
        return LEGACY_MEETING_TYPES[normalized]
    try:
        return MeetingType(normalized)
    except ValueError:
        raise ValidationError("Invalid meeting type") from None


def parse_status(value: str | BookingStatus | None) -> BookingStatus:
    if isinstance(value, BookingStatus):
        return value
    try:
        return BookingStatus(str(value or "").strip().lower())
    except ValueError:
        raise ValidationError("Invalid status value") from None


def build_booking_request(
    name: str | None,
    email: str | None,
    date_text: str | None,
    time_text: str | None,
    phone: str | None = None,
    meeting_type: str | None = None,
    notes: str | None = None,
) -> BookingRequest:
    """Validate raw propose input and turn it into a typed BookingRequest."""
    clean_name = sanitize_text(name, MAX_NAME_LENGTH)
    if not clean_name or not email or not date_text or not time_text:
        raise ValidationError("Missing required fields")

    return BookingRequest(
        contact=Contact(
            name=clean_name,
            email=normalize_email(email),
            phone=sanitize_text(phone, MAX_PHONE_LENGTH),
        ),
        date=parse_date(date_text),
        time=parse_time(time_text),
        meeting_type=parse_meeting_type(meeting_type),
        notes=sanitize_text(notes, MAX_NOTES_LENGTH),
    )

from functools import lru_cache
import logging
from zoneinfo import ZoneInfo

from booking_service.application.ports.clock import ClockPort
from booking_service.application.ports.notifier import NotificationPort
from booking_service.application.ports.slot_store import SlotStorePort
from booking_service.application.use_cases.access_gate import AccessGate
from booking_service.application.use_cases.booking_engine import BookingEngine
from booking_service.application.use_cases.notify_booking import NotifyBookingUseCase
from booking_service.core.config import settings
from booking_service.infrastructure.clock.system_clock import SystemClock
from booking_service.infrastructure.notifications.mock_notifier import MockNotifier
from booking_service.infrastructure.notifications.webhook_notifier import WebhookNotifier
from booking_service.infrastructure.store.json_store import JsonSlotStore
from booking_service.infrastructure.store.memory_store import MemorySlotStore
from booking_service.infrastructure.store.redis_store import RedisSlotStore


logger = logging.getLogger(__name__)


@lru_cache
def get_timezone() -> ZoneInfo:
    return ZoneInfo(settings.BUSINESS_TIMEZONE)


@lru_cache
def get_slot_store() -> SlotStorePort:
    is_dev = settings.ENV.lower() in {"dev", "local"}
    provider = (settings.STORE_PROVIDER or ("json" if is_dev else "memory")).lower()
    if provider == "redis":
        if not settings.REDIS_URL:
            raise ValueError("REDIS_URL is required when STORE_PROVIDER=redis.")
        logger.info("Using RedisSlotStore")
        return RedisSlotStore.from_url(settings.REDIS_URL, key=settings.BOOKINGS_KEY)
    if provider == "json":
        logger.info("Using JsonSlotStore", extra={"reason": settings.STORE_DATA_FILE})
        return JsonSlotStore(data_file=settings.STORE_DATA_FILE)
    if provider != "memory":
        raise ValueError(f"Unknown STORE_PROVIDER: {provider}")
    if not is_dev:
        logger.warning("Using MemorySlotStore outside dev; bookings will not survive a restart")
    return MemorySlotStore()


@lru_cache
def get_clock() -> ClockPort:
    return SystemClock(get_timezone())


@lru_cache
def get_booking_engine() -> BookingEngine:
    # One engine per process: its write lock is what serializes mutations.
    return BookingEngine(
        store=get_slot_store(),
        clock=get_clock(),
        timezone=get_timezone(),
        max_horizon_days=settings.AVAILABILITY_MAX_HORIZON_DAYS,
    )


@lru_cache
def get_access_gate() -> AccessGate:
    return AccessGate(allow_client_cancel=settings.CLIENT_CANCEL_ENABLED)


@lru_cache
def get_notifier() -> NotificationPort:
    if not settings.NOTIFY_WEBHOOK_URL or settings.ENV.lower() in {"dev", "local"}:
        logger.info("Using MockNotifier (NOTIFY_WEBHOOK_URL not set or ENV=dev/local)")
        return MockNotifier()
    return WebhookNotifier(url=settings.NOTIFY_WEBHOOK_URL, timeout=settings.NOTIFY_TIMEOUT_SECONDS)


def get_notify_use_case() -> NotifyBookingUseCase:
    return NotifyBookingUseCase(notifier=get_notifier(), engine=get_booking_engine())

from __future__ import annotations

import pytest

from booking_service.core.config import settings
from booking_service.infrastructure.notifications.mock_notifier import MockNotifier
from booking_service.infrastructure.notifications.webhook_notifier import WebhookNotifier
from booking_service.infrastructure.store.json_store import JsonSlotStore
from booking_service.infrastructure.store.memory_store import MemorySlotStore
from booking_service.wiring.dependencies import get_notifier, get_slot_store


@pytest.fixture(autouse=True)
def fresh_singletons(monkeypatch, tmp_path):
    monkeypatch.setattr(settings, "STORE_PROVIDER", None)
    monkeypatch.setattr(settings, "STORE_DATA_FILE", str(tmp_path / "bookings.json"))
    monkeypatch.setattr(settings, "NOTIFY_WEBHOOK_URL", None)
    get_slot_store.cache_clear()
    get_notifier.cache_clear()
    yield
    get_slot_store.cache_clear()
    get_notifier.cache_clear()


@pytest.mark.parametrize("env", ["dev", "local", "LOCAL"])
def test_dev_env_defaults_to_json_store(monkeypatch, env):
    monkeypatch.setattr(settings, "ENV", env)

    assert isinstance(get_slot_store(), JsonSlotStore)


def test_prod_env_defaults_to_memory_store(monkeypatch):
    monkeypatch.setattr(settings, "ENV", "prod")

    assert isinstance(get_slot_store(), MemorySlotStore)


def test_explicit_store_provider_wins_over_env(monkeypatch):
    monkeypatch.setattr(settings, "ENV", "dev")
    monkeypatch.setattr(settings, "STORE_PROVIDER", "memory")

    assert isinstance(get_slot_store(), MemorySlotStore)


def test_redis_provider_requires_url(monkeypatch):
    monkeypatch.setattr(settings, "STORE_PROVIDER", "redis")
    monkeypatch.setattr(settings, "REDIS_URL", None)

    with pytest.raises(ValueError, match="REDIS_URL"):
        get_slot_store()


def test_unknown_store_provider_is_rejected(monkeypatch):
    monkeypatch.setattr(settings, "STORE_PROVIDER", "sqlite")

    with pytest.raises(ValueError, match="Unknown STORE_PROVIDER"):
        get_slot_store()


def test_dev_env_uses_mock_notifier_even_with_webhook(monkeypatch):
    monkeypatch.setattr(settings, "ENV", "dev")
    monkeypatch.setattr(settings, "NOTIFY_WEBHOOK_URL", "https://hooks.example.com/booking")

    assert isinstance(get_notifier(), MockNotifier)


def test_prod_env_without_webhook_uses_mock_notifier(monkeypatch):
    monkeypatch.setattr(settings, "ENV", "prod")

    assert isinstance(get_notifier(), MockNotifier)


def test_prod_env_with_webhook_uses_webhook_notifier(monkeypatch):
    monkeypatch.setattr(settings, "ENV", "prod")
    monkeypatch.setattr(settings, "NOTIFY_WEBHOOK_URL", "https://hooks.example.com/booking")

    notifier = get_notifier()

    assert isinstance(notifier, WebhookNotifier)
    notifier.close()

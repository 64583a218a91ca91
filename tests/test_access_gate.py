from __future__ import annotations

import pytest

from booking_service.api.identity import resolve_identity
from booking_service.application.exceptions import AccessDeniedError
from booking_service.application.use_cases.access_gate import AccessGate, Operation
from booking_service.domain.entities.identity import Identity, Role


OPERATOR = Identity(user_id="admin", role=Role.operator)
CLIENT = Identity(user_id="ada@example.com", role=Role.client)


@pytest.mark.parametrize("operation", [Operation.propose_booking, Operation.compute_availability])
def test_public_operations_need_no_identity(operation):
    AccessGate().authorize(None, operation)


@pytest.mark.parametrize(
    "operation",
    [Operation.list_active_bookings, Operation.get_booking, Operation.set_status, Operation.cancel_booking],
)
def test_operator_operations(operation):
    gate = AccessGate()
    gate.authorize(OPERATOR, operation)

    with pytest.raises(AccessDeniedError) as anonymous:
        gate.authorize(None, operation)
    assert anonymous.value.authenticated is False

    with pytest.raises(AccessDeniedError) as client:
        gate.authorize(CLIENT, operation)
    assert client.value.authenticated is True


def test_only_operator_role_is_operator():
    assert OPERATOR.is_operator
    assert not CLIENT.is_operator


def test_cancel_scope():
    gate = AccessGate()
    assert gate.cancel_scope(OPERATOR) is None
    assert gate.cancel_scope(CLIENT) == "ada@example.com"
    with pytest.raises(AccessDeniedError):
        gate.cancel_scope(None)


def test_client_cancel_can_be_disabled():
    with pytest.raises(AccessDeniedError):
        AccessGate(allow_client_cancel=False).cancel_scope(CLIENT)


def test_resolve_identity_from_admin_secret():
    identity = resolve_identity("s3cret", None, None, admin_secret="s3cret", trust_identity_headers=False)
    assert identity == OPERATOR
    assert resolve_identity("wrong", None, None, admin_secret="s3cret", trust_identity_headers=False) is None
    assert resolve_identity("anything", None, None, admin_secret=None, trust_identity_headers=False) is None


def test_resolve_identity_from_trusted_headers():
    identity = resolve_identity(None, "Ada@Example.com", "client", admin_secret=None, trust_identity_headers=True)
    assert identity == CLIENT
    assert resolve_identity(None, "ada@example.com", "client", admin_secret=None, trust_identity_headers=False) is None
    assert resolve_identity(None, "x", "superuser", admin_secret=None, trust_identity_headers=True) is None

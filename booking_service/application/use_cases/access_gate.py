from __future__ import annotations

import logging
from enum import Enum

from booking_service.application.exceptions import AccessDeniedError
from booking_service.domain.entities.identity import Identity, Role


class Operation(str, Enum):
    propose_booking = "propose_booking"
    compute_availability = "compute_availability"
    list_active_bookings = "list_active_bookings"
    get_booking = "get_booking"
    set_status = "set_status"
    cancel_booking = "cancel_booking"


PUBLIC_OPERATIONS = frozenset({Operation.propose_booking, Operation.compute_availability})


class AccessGate:
    """
    Stateless role policy. Trusts the identity it is given and never reads the store,
    so it must run before the engine is called.
    """

    def __init__(self, allow_client_cancel: bool = True) -> None:
        self._allow_client_cancel = allow_client_cancel
        self._logger = logging.getLogger(__name__)

    def authorize(self, identity: Identity | None, operation: Operation) -> None:
        if operation in PUBLIC_OPERATIONS:
            return
        if identity is not None and identity.is_operator:
            return
        self._deny(identity, operation)

    def cancel_scope(self, identity: Identity | None) -> str | None:
        """
        Authorize a cancel. Returns None for an unrestricted (operator) cancel,
        or the e-mail a client must own for the booking it cancels.
        """
        if identity is not None and identity.is_operator:
            return None
        if identity is not None and identity.role == Role.client and self._allow_client_cancel:
            return identity.user_id
        self._deny(identity, Operation.cancel_booking)

    def _deny(self, identity: Identity | None, operation: Operation) -> None:
        self._logger.warning(
            "Access denied",
            extra={"operation": operation.value, "role": identity.role.value if identity else "anonymous"},
        )
        if identity is None:
            raise AccessDeniedError("Unauthorized", authenticated=False)
        raise AccessDeniedError("Operator access required", authenticated=True)

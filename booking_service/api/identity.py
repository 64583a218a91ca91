from __future__ import annotations

import hmac
import logging

from fastapi import Header

from booking_service.core.config import settings
from booking_service.domain.entities.identity import Identity, Role


logger = logging.getLogger(__name__)

OPERATOR_USER_ID = "admin"


def resolve_identity(
    admin_secret_header: str | None,
    user_id_header: str | None,
    user_role_header: str | None,
    admin_secret: str | None,
    trust_identity_headers: bool,
) -> Identity | None:
    """
    Turn request headers into a verified identity, or None for anonymous callers.
    The fronting identity provider is trusted as-is when trust_identity_headers is on.
    """
    if admin_secret_header and admin_secret:
        if hmac.compare_digest(admin_secret_header.encode("utf-8"), admin_secret.encode("utf-8")):
            return Identity(user_id=OPERATOR_USER_ID, role=Role.operator)
        logger.warning("Admin secret mismatch", extra={"reason": "bad_admin_secret"})

    if not trust_identity_headers or not user_id_header or not user_role_header:
        return None

    try:
        role = Role(user_role_header.strip().lower())
    except ValueError:
        logger.warning("Unknown role from identity provider", extra={"role": user_role_header})
        return None

    user_id = user_id_header.strip()
    if role == Role.client:
        user_id = user_id.lower()
    return Identity(user_id=user_id, role=role)


def get_identity(
    x_admin_secret: str | None = Header(None, alias="X-Admin-Secret"),
    x_user_id: str | None = Header(None, alias="X-User-Id"),
    x_user_role: str | None = Header(None, alias="X-User-Role"),
) -> Identity | None:
    return resolve_identity(
        admin_secret_header=x_admin_secret,
        user_id_header=x_user_id,
        user_role_header=x_user_role,
        admin_secret=settings.ADMIN_SECRET,
        trust_identity_headers=settings.TRUST_IDENTITY_HEADERS,
    )

# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Registration and login use cases.

Both functions are synchronous and CPU bound (argon2); callers on the event
loop should run them in a worker thread.
"""

from __future__ import annotations

import logging

from gatehouse.auth.passwords import hash_password, verify_password
from gatehouse.auth.users import User, UserRepository
from gatehouse.auth.validators import validate_email, validate_password
from gatehouse.errors import AuthError, ConflictError, InternalError, ValidationError

logger = logging.getLogger(__name__)

MSG_REQUIRED = "All fields are required"
MSG_BAD_EMAIL = "Please enter a valid email address"
MSG_WEAK_PASSWORD = "Password must be at least 6 characters with uppercase, lowercase, and number"
MSG_DUPLICATE = "User with this email already exists"
MSG_REGISTER_FAILED = "Registration failed. Please try again."
MSG_LOGIN_FAILED = "Login failed. Please try again."
MSG_REGISTERED = "Registration successful! Please login."


def register_account(users: UserRepository, name: str, email: str, password: str) -> User:
    """Validate and create a user. Checks run in order and the first failure wins."""
    if not (name or "").strip() or not email or not password:
        raise ValidationError(MSG_REQUIRED)
    if not validate_email(email):
        raise ValidationError(MSG_BAD_EMAIL)
    if not validate_password(password):
        raise ValidationError(MSG_WEAK_PASSWORD)
    if users.find_by_email(email) is not None:
        raise ConflictError(MSG_DUPLICATE)

    try:
        password_hash = hash_password(password)
    except Exception:
        logger.exception("Password hashing failed during registration")
        raise InternalError(MSG_REGISTER_FAILED) from None

    try:
        user = users.insert(name=name, email=email, password_hash=password_hash)
    except Exception:
        logger.exception("User store rejected a new registration")
        raise InternalError(MSG_REGISTER_FAILED) from None

    if user is None:
        # Lost a race against a concurrent registration of the same email.
        raise ConflictError(MSG_DUPLICATE)

    logger.info("Registered user id=%s", user.id)
    return user


def authenticate(users: UserRepository, email: str, password: str) -> User:
    """Resolve credentials to a user. Unknown email and wrong password look the same."""
    if not email or not password:
        raise ValidationError(MSG_REQUIRED)
    if not validate_email(email):
        raise ValidationError(MSG_BAD_EMAIL)

    try:
        user = users.find_by_email(email)
    except Exception:
        logger.exception("User lookup failed during login")
        raise InternalError(MSG_LOGIN_FAILED) from None

    if user is None or not verify_password(user.password_hash, password):
        logger.info("Failed login attempt")
        raise AuthError()

    return user

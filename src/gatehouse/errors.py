# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations


class GatehouseError(Exception):
    """Base class for errors that carry a message safe to show to the client."""

    message = "Something went wrong. Please try again."

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationError(GatehouseError):
    """A required field is missing or malformed."""


class ConflictError(GatehouseError):
    """The email is already registered."""


class AuthError(GatehouseError):
    """Bad credentials. Never says which part was wrong."""

    message = "Invalid email or password"


class InternalError(GatehouseError):
    """Hashing or storage failed while serving a use case."""


class ConfigError(RuntimeError):
    """Invalid configuration detected at startup."""

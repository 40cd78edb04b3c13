# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from gatehouse.errors import ConfigError

MIN_SECRET_LENGTH = 32

# Placeholders that must never sign real sessions.
KNOWN_WEAK_SECRETS = {
    "your-super-secret-jwt-key-change-in-production",
    "changeme",
    "secret",
}

TRUTHY = {"1", "true", "yes", "y"}


def _flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in TRUTHY


@dataclass(frozen=True)
class Settings:
    secret_key: str
    host: str = "0.0.0.0"
    port: int = 3000
    production: bool = False
    cookie_secure: bool = False
    users_path: Optional[Path] = None
    log_level: str = "INFO"
    reload: bool = False

    def __post_init__(self) -> None:
        validate_secret(self.secret_key)
        if not 0 < self.port < 65536:
            raise ConfigError(f"Port out of range: {self.port}")

    @property
    def secure_cookies(self) -> bool:
        return self.production or self.cookie_secure

    @classmethod
    def from_env(cls) -> "Settings":
        secret = os.getenv("GATEHOUSE_SECRET_KEY") or os.getenv("SECRET_KEY") or ""

        raw_port = os.getenv("GATEHOUSE_PORT") or os.getenv("PORT") or "3000"
        try:
            port = int(raw_port)
        except ValueError:
            raise ConfigError(f"Invalid port: {raw_port!r}") from None

        users_path = os.getenv("GATEHOUSE_USERS_PATH", "").strip()

        return cls(
            secret_key=secret,
            host=os.getenv("GATEHOUSE_HOST", "0.0.0.0"),
            port=port,
            production=os.getenv("GATEHOUSE_ENV", "development").strip().lower() == "production",
            cookie_secure=_flag("GATEHOUSE_COOKIE_SECURE"),
            users_path=Path(users_path).resolve() if users_path else None,
            log_level=os.getenv("GATEHOUSE_LOG_LEVEL", "INFO").strip().upper() or "INFO",
            reload=_flag("GATEHOUSE_RELOAD"),
        )


def validate_secret(secret: str) -> None:
    if not secret:
        raise ConfigError("Missing GATEHOUSE_SECRET_KEY (or SECRET_KEY) in environment")
    if secret in KNOWN_WEAK_SECRETS:
        raise ConfigError("Refusing to start with a placeholder signing secret")
    if len(secret) < MIN_SECRET_LENGTH:
        raise ConfigError(f"Signing secret must be at least {MIN_SECRET_LENGTH} characters")

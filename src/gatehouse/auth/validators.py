# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import re

_EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")

# 6+ chars, one lower, one upper, one digit; only letters, digits and @$!%*?&
_PASSWORD_RE = re.compile(r"(?=.*[a-z])(?=.*[A-Z])(?=.*[0-9])[a-zA-Z0-9@$!%*?&]{6,}")


def validate_email(value: object) -> bool:
    """Minimal <local>@<domain>.<tld> shape check, not RFC 5322."""
    if not isinstance(value, str):
        return False
    return _EMAIL_RE.fullmatch(value) is not None


def validate_password(value: object) -> bool:
    if not isinstance(value, str):
        return False
    return _PASSWORD_RE.fullmatch(value) is not None

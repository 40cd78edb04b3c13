# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Authentication building blocks.

This package provides:
- Credential validation (email shape, password strength)
- Password hashing/verification (argon2)
- User repositories (in-memory, or persisted to a YAML file)
- Signed, expiring session tokens (itsdangerous)
"""

# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Gatehouse: registration, login and a cookie-protected dashboard."""

__version__ = "0.1.0"

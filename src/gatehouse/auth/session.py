# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from itsdangerous import BadData, TimestampSigner, URLSafeTimedSerializer

logger = logging.getLogger(__name__)

COOKIE_NAME = "token"
DEFAULT_MAX_AGE_SECONDS = 24 * 60 * 60
SESSION_SALT = "gatehouse.session.v1"


class _ClockedSigner(TimestampSigner):
    """TimestampSigner reading the time from an injectable clock."""

    def __init__(self, *args, clock: Callable[[], float] = time.time, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.clock = clock

    def get_timestamp(self) -> int:
        return int(self.clock())


class SessionTokens:
    """Issue and verify signed, timestamped session tokens carrying ``{uid}``.

    Tokens are self-contained: nothing is stored server side, so a token stays
    valid for ``max_age`` seconds even after the cookie holding it is cleared.
    """

    def __init__(
        self,
        secret_key: str,
        *,
        max_age: int = DEFAULT_MAX_AGE_SECONDS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.max_age = max_age
        self.clock = clock
        self._serializer = URLSafeTimedSerializer(
            secret_key=secret_key,
            salt=SESSION_SALT,
            signer=_ClockedSigner,
            signer_kwargs={"clock": clock},
        )

    def issue(self, user_id: int) -> str:
        return self._serializer.dumps({"uid": user_id})

    def verify(self, token: str) -> Optional[int]:
        """Return the user id, or None for any empty, tampered, malformed or expired token."""
        if not token:
            return None
        try:
            # SignatureExpired is a BadData too
            data = self._serializer.loads(token, max_age=self.max_age)
        except BadData:
            logger.debug("Rejected session token (bad signature, payload or expired)")
            return None

        uid = data.get("uid") if isinstance(data, dict) else None
        # bool is an int subclass
        if not isinstance(uid, int) or isinstance(uid, bool):
            return None
        return uid

# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import logging
import os
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Optional, Protocol

import yaml

logger = logging.getLogger(__name__)

USERS_FILE_VERSION = 1


@dataclass(frozen=True)
class User:
    id: int
    name: str
    email: str
    password_hash: str
    created_at: datetime


class UserRepository(Protocol):
    def find_by_email(self, email: str) -> Optional[User]: ...

    def find_by_id(self, user_id: int) -> Optional[User]: ...

    def insert(self, name: str, email: str, password_hash: str) -> Optional[User]:
        """Create a user unless the email is taken; returns None on conflict."""
        ...


class InMemoryUserRepository:
    """Process-local user store. Everything is lost on restart."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._by_email: Dict[str, User] = {}
        self._by_id: Dict[int, User] = {}
        self._next_id = 1

    def __len__(self) -> int:
        return len(self._by_email)

    def find_by_email(self, email: str) -> Optional[User]:
        return self._by_email.get(email)

    def find_by_id(self, user_id: int) -> Optional[User]:
        return self._by_id.get(user_id)

    def insert(self, name: str, email: str, password_hash: str) -> Optional[User]:
        # Check and write under one lock: concurrent registrations of the same
        # email cannot both succeed.
        with self._lock:
            if email in self._by_email:
                return None
            user = User(
                id=self._next_id,
                name=name,
                email=email,
                password_hash=password_hash,
                created_at=datetime.now(timezone.utc),
            )
            self._store(user)
            self._next_id += 1
            try:
                self._persist()
            except Exception:
                self._unstore(user)
                self._next_id -= 1
                raise
        return user

    def _store(self, user: User) -> None:
        self._by_email[user.email] = user
        self._by_id[user.id] = user

    def _unstore(self, user: User) -> None:
        self._by_email.pop(user.email, None)
        self._by_id.pop(user.id, None)

    def _persist(self) -> None:
        """Persistence hook called under the insert lock; memory needs nothing."""


class YamlUserRepository(InMemoryUserRepository):
    """User store persisted to a YAML file.

    File layout::

        version: 1
        next_id: 3
        users:
          ada@example.com: {id: 1, name: Ada, password_hash: ..., created_at: ...}
    """

    def __init__(self, path: Path) -> None:
        super().__init__()
        self.path = Path(path)
        self._load()

    def _load(self) -> None:
        if not self.path.exists():
            return
        raw = yaml.safe_load(self.path.read_text(encoding="utf-8")) or {}
        users = (raw.get("users") or {}) if isinstance(raw, dict) else {}
        for email, udata in users.items():
            if not isinstance(udata, dict):
                continue
            created = udata.get("created_at")
            if isinstance(created, str):
                created = datetime.fromisoformat(created)
            elif not isinstance(created, datetime):
                created = datetime.now(timezone.utc)
            self._store(
                User(
                    id=int(udata["id"]),
                    name=str(udata.get("name") or ""),
                    email=str(email),
                    password_hash=str(udata.get("password_hash") or ""),
                    created_at=created,
                )
            )

        highest = max(self._by_id, default=0)
        stored_next = raw.get("next_id") if isinstance(raw, dict) else None
        self._next_id = max(highest + 1, int(stored_next or 1))
        logger.info("Loaded %d users from %s", len(self._by_email), self.path)

    def _persist(self) -> None:
        raw = {
            "version": USERS_FILE_VERSION,
            "next_id": self._next_id,
            "users": {
                u.email: {
                    "id": u.id,
                    "name": u.name,
                    "password_hash": u.password_hash,
                    "created_at": u.created_at.isoformat(),
                }
                for u in sorted(self._by_id.values(), key=lambda u: u.id)
            },
        }
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_name(self.path.name + ".tmp")
        tmp.write_text(yaml.safe_dump(raw, sort_keys=False, allow_unicode=True), encoding="utf-8")
        os.replace(tmp, self.path)


def build_user_repository(users_path: Optional[Path] = None) -> UserRepository:
    if users_path:
        return YamlUserRepository(users_path)
    return InMemoryUserRepository()

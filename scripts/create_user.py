#!/usr/bin/env python3
from __future__ import annotations

import os
from getpass import getpass
from pathlib import Path

from gatehouse.auth.users import YamlUserRepository
from gatehouse.errors import GatehouseError
from gatehouse.services.account_service import register_account


def main() -> None:
    users_path = os.getenv("GATEHOUSE_USERS_PATH", "").strip()
    if not users_path:
        raise SystemExit("Set GATEHOUSE_USERS_PATH to the YAML user store first")
    users = YamlUserRepository(Path(users_path).resolve())

    name = input("Name: ").strip()
    email = input("Email: ").strip()
    pw1 = getpass("Password: ")
    pw2 = getpass("Repeat password: ")
    if pw1 != pw2:
        raise SystemExit("Passwords do not match")

    try:
        user = register_account(users, name=name, email=email, password=pw1)
    except GatehouseError as exc:
        raise SystemExit(exc.message)
    print(f"OK -> user {user.id} in {users.path}")


if __name__ == "__main__":
    main()

#!/usr/bin/env python3
"""
Provision the storage directory: root, media folders and (optionally) the
default documents.

Uso:
  python scripts/init_storage.py [--storage-dir ./storage] [--materialize]
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

from api.core.config import get_settings
from api.core.logging_config import setup_logging
from api.repositories.json_storage import JsonDocumentStore, StorageError
from api.services.settings_service import SettingsService
from api.services.user_service import UserService


def main() -> None:
    settings = get_settings()
    ap = argparse.ArgumentParser(description="Initialize the JSON storage directory")
    ap.add_argument("--storage-dir", default=str(settings.storage_dir), help="Storage root (default: STORAGE_DIR)")
    ap.add_argument(
        "--materialize",
        action="store_true",
        help="Also write users.json, settings.json and messages.json with their defaults when absent",
    )
    args = ap.parse_args()
    setup_logging(settings.log_level)

    store = JsonDocumentStore(Path(args.storage_dir).expanduser())
    store.ensure_layout()
    print(f"OK: storage at {store.root}")
    if args.materialize:
        users = UserService(store).list_users()
        svc = SettingsService(store)
        svc.get_settings()
        svc.get_messages()
        print(f"  users: {len(users)}")
        print("  settings.json / messages.json present")


if __name__ == "__main__":
    try:
        main()
    except StorageError as exc:
        sys.stderr.write(f"Erro: {exc}\n")
        raise SystemExit(1)

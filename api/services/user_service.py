"""User collection use cases (list, lookup, upsert, delete by id)."""

from __future__ import annotations

from typing import Any, Dict, List
import logging

from api.repositories.json_storage import CorruptDocumentError, JsonDocumentStore

logger = logging.getLogger(__name__)

USERS_DOCUMENT = "users.json"

User = Dict[str, Any]


class UserNotFoundError(Exception):
    """Raised when no record carries the requested id."""

    def __init__(self, user_id: str):
        super().__init__(f"User {user_id} not found")
        self.user_id = user_id


class UserService:
    """Array-of-records semantics over the Users document."""

    def __init__(self, store: JsonDocumentStore) -> None:
        self.store = store

    def _as_list(self, value: Any) -> List[User]:
        if not isinstance(value, list):
            raise CorruptDocumentError(
                f"{USERS_DOCUMENT} must hold a JSON array",
                self.store.path_for(USERS_DOCUMENT),
            )
        return value

    @staticmethod
    def _matches(record: Any, user_id: str) -> bool:
        return isinstance(record, dict) and record.get("id") == user_id

    def list_users(self) -> List[User]:
        return self._as_list(self.store.read(USERS_DOCUMENT, []))

    def get_user(self, user_id: str) -> User:
        for record in self.list_users():
            if self._matches(record, user_id):
                return record
        raise UserNotFoundError(user_id)

    def upsert_user(self, user_id: str, record: User) -> User:
        """
        Replace the record with ``user_id`` in place, or append it.

        The path id drives the lookup only; the stored record is the body as
        given, even if its own ``id`` differs.
        """
        body_id = record.get("id") if isinstance(record, dict) else None
        if body_id is not None and body_id != user_id:
            logger.warning("Upsert for user %s received body with id %r", user_id, body_id)

        def _apply(current: Any) -> List[User]:
            users = self._as_list(current)
            for idx, existing in enumerate(users):
                if self._matches(existing, user_id):
                    users[idx] = record
                    break
            else:
                users.append(record)
            return users

        self.store.update(USERS_DOCUMENT, [], _apply)
        return record

    def delete_user(self, user_id: str) -> None:
        """Drop every record with ``user_id``; unknown ids are a no-op."""
        def _apply(current: Any) -> List[User]:
            return [u for u in self._as_list(current) if not self._matches(u, user_id)]

        self.store.update(USERS_DOCUMENT, [], _apply)

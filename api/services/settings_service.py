"""Whole-document get/replace for the settings and messages singletons."""

from __future__ import annotations

from typing import Any, Dict

from api.repositories.json_storage import CorruptDocumentError, JSONValue, JsonDocumentStore

SETTINGS_DOCUMENT = "settings.json"
MESSAGES_DOCUMENT = "messages.json"

DEFAULT_SETTINGS: Dict[str, Any] = {
    "systemSettings": {
        "recaptchaEnabled": False,
        "recaptchaSiteKey": "",
        "recaptchaSecretKey": "",
    },
    "walletConfig": {},
    "welcomePageTemplate": {},
    "welcomeInboxTemplate": {},
    "chatbotSettings": {},
    "testimonials": [],
}


class SettingsService:
    def __init__(self, store: JsonDocumentStore) -> None:
        self.store = store

    def get_settings(self) -> Dict[str, Any]:
        value = self.store.read(SETTINGS_DOCUMENT, DEFAULT_SETTINGS)
        if not isinstance(value, dict):
            raise CorruptDocumentError(
                f"{SETTINGS_DOCUMENT} must hold a JSON object",
                self.store.path_for(SETTINGS_DOCUMENT),
            )
        return value

    def put_settings(self, settings: Dict[str, Any]) -> Dict[str, Any]:
        # Replace verbatim: keys missing from the payload are dropped, not merged.
        return self.store.write(SETTINGS_DOCUMENT, settings)

    def get_messages(self) -> JSONValue:
        return self.store.read(MESSAGES_DOCUMENT, [])

    def put_messages(self, messages: JSONValue) -> JSONValue:
        return self.store.write(MESSAGES_DOCUMENT, messages)

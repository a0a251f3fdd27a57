from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Request
from fastapi.responses import JSONResponse

from api.repositories.json_storage import StorageError
from api.services.settings_service import SettingsService
from api.services.user_service import UserNotFoundError, UserService

router = APIRouter(prefix="/api/storage", tags=["storage"])


def _get_user_service(request: Request) -> UserService:
    svc = getattr(getattr(request.app, "state", None), "user_service", None)
    if not svc:
        raise RuntimeError("UserService not configured")
    return svc


def _get_settings_service(request: Request) -> SettingsService:
    svc = getattr(getattr(request.app, "state", None), "settings_service", None)
    if not svc:
        raise RuntimeError("SettingsService not configured")
    return svc


def _ok(data: Any) -> dict:
    return {"success": True, "data": data}


def _error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"success": False, "message": message}, status_code=status_code)


def _storage_error(exc: StorageError) -> JSONResponse:
    return _error_response(exc.message, 500)


# -------------------------------------- users --------------------------------------
@router.get("/users")
def list_users(request: Request):
    try:
        return _ok(_get_user_service(request).list_users())
    except StorageError as exc:
        return _storage_error(exc)


@router.get("/users/{user_id}")
def get_user(user_id: str, request: Request):
    try:
        return _ok(_get_user_service(request).get_user(user_id))
    except UserNotFoundError:
        return _error_response("User not found", 404)
    except StorageError as exc:
        return _storage_error(exc)


@router.post("/users/{user_id}")
def upsert_user(user_id: str, request: Request, payload: dict = Body(...)):
    try:
        return _ok(_get_user_service(request).upsert_user(user_id, payload))
    except StorageError as exc:
        return _storage_error(exc)


@router.delete("/users/{user_id}")
def delete_user(user_id: str, request: Request):
    try:
        _get_user_service(request).delete_user(user_id)
    except StorageError as exc:
        return _storage_error(exc)
    return {"success": True, "message": "User deleted"}


# -------------------------------------- settings --------------------------------------
@router.get("/settings")
def get_settings(request: Request):
    try:
        return _ok(_get_settings_service(request).get_settings())
    except StorageError as exc:
        return _storage_error(exc)


@router.post("/settings")
def put_settings(request: Request, payload: dict = Body(...)):
    try:
        return _ok(_get_settings_service(request).put_settings(payload))
    except StorageError as exc:
        return _storage_error(exc)


# -------------------------------------- messages --------------------------------------
@router.get("/messages")
def get_messages(request: Request):
    try:
        return _ok(_get_settings_service(request).get_messages())
    except StorageError as exc:
        return _storage_error(exc)


@router.post("/messages")
def put_messages(request: Request, payload: Any = Body(...)):
    try:
        return _ok(_get_settings_service(request).put_messages(payload))
    except StorageError as exc:
        return _storage_error(exc)

from __future__ import annotations

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from api.core.mailer import SendResult, email_configured
from api.services import verification_service

router = APIRouter(prefix="/api", tags=["notifications"])
logger = logging.getLogger(__name__)


@router.post("/send-verification-email")
def send_verification_email(payload: dict):
    email = str(payload.get("email") or "").strip()
    code = str(payload.get("code") or "").strip()
    if not email or not code:
        return JSONResponse({"success": False}, status_code=400)
    result = verification_service.send_verification_code(email, code)
    if result is not SendResult.SENT:
        logger.warning("Verification e-mail to %s not delivered (%s)", email, result.value)
        return JSONResponse({"success": False}, status_code=500)
    return {"success": True}


@router.get("/health")
def health():
    return {"status": "ok", "emailConfigured": email_configured()}

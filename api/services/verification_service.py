"""Verification-code e-mails."""

from __future__ import annotations

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from api.core.mailer import SendResult, send_email

TEMPLATES_DIR = Path(__file__).resolve().parents[1] / "templates"
VERIFICATION_SUBJECT = "Verification Code"

_env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=select_autoescape(["html"]),
)


def render_verification_email(code: str) -> str:
    return _env.get_template("verification_email.html").render(code=code)


def send_verification_code(to_address: str, code: str) -> SendResult:
    html_body = render_verification_email(code)
    return send_email(
        VERIFICATION_SUBJECT,
        to_address,
        html_body,
        f"Your verification code: {code}",
    )

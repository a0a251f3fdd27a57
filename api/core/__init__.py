"""
Core utilities shared across the storage API.

This package hosts:
- configuration helpers (env vars, storage paths)
- cross-cutting services such as logging setup and the SMTP mailer

Routers and services depend on these primitives instead of reading os.environ
or talking to smtplib directly.
"""

"""
FastAPI routers grouped by concern (storage, notifications).

Each file inside this package exposes an APIRouter that is included in the
main application (app.py).
"""

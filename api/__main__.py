"""Run the API with uvicorn: ``python -m api``."""
from __future__ import annotations

import uvicorn

from api.app import create_app
from api.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()

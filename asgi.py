"""
asgi.py -- ASGI entry point for authgate.

Run with:  uvicorn asgi:app --reload
           python asgi.py          (uses HOST / PORT from the environment)

Importing this module builds Settings; a missing JWT_SECRET stops the process
here, before the server binds a port.
"""

import uvicorn

from api.main import app
from core.config import get_settings

__all__ = ["app", "main"]


def main() -> None:
    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()

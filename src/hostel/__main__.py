"""Serve the hostel API.

Run with::

    python -m hostel

Host, port and auto-reload come from ``API_HOST``, ``API_PORT`` and
``API_DEBUG``.
"""

import uvicorn

from hostel_config import get_settings

APP_PATH = "hostel.presentation.api.app:app"


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        APP_PATH,
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_debug,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()

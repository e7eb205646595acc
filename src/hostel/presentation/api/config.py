"""Settings as seen by the HTTP layer.

Routes depend on ``get_api_settings`` rather than ``get_settings`` so tests
can hand the app a ``Settings`` built in code via ``dependency_overrides``.
"""

from hostel_config.settings import Settings, get_settings


def get_api_settings() -> Settings:
    return get_settings()

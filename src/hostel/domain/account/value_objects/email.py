"""Email helpers for institutional accounts.

Addresses are stored lower-cased and stripped. Whether an address belongs
to the institution is decided by ``AccountPolicy``; this module only
normalizes and builds the matching pattern.
"""

import re

LOCAL_PART = r"[a-zA-Z0-9._%+-]+"


def normalize_email(value: str | None) -> str:
    """Lower-case and strip an email address (empty string for None)."""
    if value is None:
        return ""
    return value.strip().lower()


def institutional_email_pattern(domain: str) -> re.Pattern[str]:
    """Build the full-match pattern for ``<local>@<domain>``."""
    return re.compile(rf"^{LOCAL_PART}@{re.escape(domain.lower())}$")

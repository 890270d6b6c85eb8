import re
from typing import Any

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

# Matches the width of waitlist_entries.email.
MAX_EMAIL_LENGTH = 255


def is_valid_email(email: Any) -> bool:
    if not isinstance(email, str):
        return False
    email = email.strip()
    if len(email) > MAX_EMAIL_LENGTH:
        return False
    return EMAIL_RE.match(email) is not None


def normalize_email(email: str) -> str:
    return email.strip().lower()

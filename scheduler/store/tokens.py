"""Vote ownership tokens.

A token is a bearer capability: whoever holds it may update or delete the
vote it was issued for. Tokens are random UUID4 strings (122 random bits
from the OS CSPRNG) and are handed out exactly once, when the vote is cast.
"""

import hmac
import uuid
from typing import Any


def issue_token() -> str:
    return str(uuid.uuid4())


def authorize(vote: dict[str, Any], presented: str | None, is_admin: bool = False) -> bool:
    """Return True if the caller may mutate ``vote``."""
    if is_admin:
        return True
    if not isinstance(presented, str) or not presented:
        return False
    return hmac.compare_digest(presented.encode(), vote["token"].encode())

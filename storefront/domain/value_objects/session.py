"""
Session value object

The bearer credential handed to the core by the sign-in flow.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional


@dataclass(frozen=True)
class Session:
    """Bearer credential with an optional expiry"""

    token: str
    expires_at: Optional[datetime] = None

    def is_valid(self, now: Optional[datetime] = None, leeway_seconds: float = 0) -> bool:
        """A session is valid when it has a token and has not (nearly) expired"""
        if not self.token or not self.token.strip():
            return False
        if self.expires_at is None:
            return True
        now = now or datetime.now(timezone.utc)
        expires_at = self.expires_at
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=timezone.utc)
        return now + timedelta(seconds=leeway_seconds) < expires_at

    def authorization_header(self) -> str:
        return f"Bearer {self.token}"

    def __repr__(self) -> str:
        # Never log the raw token
        return f"Session(token='***', expires_at={self.expires_at!r})"

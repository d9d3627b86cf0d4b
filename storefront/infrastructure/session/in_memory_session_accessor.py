"""
In-memory session accessor

Holds the credential handed over by the sign-in flow for the lifetime of the
process. Storage format beyond that belongs to the sign-in flow.
"""

import logging
from datetime import datetime
from typing import Callable, List, Optional

from storefront.domain.repositories.session_accessor import SessionAccessor
from storefront.domain.value_objects.session import Session

logger = logging.getLogger(__name__)


class InMemorySessionAccessor(SessionAccessor):
    """Session accessor backed by a process-local value"""

    def __init__(self, session: Optional[Session] = None):
        self._session = session
        self._sign_out_hooks: List[Callable[[], None]] = []

    def get_session(self) -> Optional[Session]:
        return self._session

    def sign_in(self, token: str, expires_at: Optional[datetime] = None) -> Session:
        self._session = Session(token=token, expires_at=expires_at)
        logger.info("🔐 Session stored (expires_at=%s)", expires_at)
        return self._session

    def sign_out(self) -> None:
        self._session = None
        logger.info("🚪 Session cleared")
        for hook in list(self._sign_out_hooks):
            hook()

    def on_sign_out(self, hook: Callable[[], None]) -> None:
        """Run ``hook`` after every sign_out()"""
        self._sign_out_hooks.append(hook)

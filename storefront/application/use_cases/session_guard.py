"""
Session guard

Validity check performed before every backend call.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from storefront.domain.repositories.session_accessor import SessionAccessor
from storefront.domain.value_objects.session import Session
from storefront.infrastructure.utilities.exceptions import AuthRequiredError

logger = logging.getLogger(__name__)


class SessionGuard:
    """Turns a missing or expired session into AuthRequiredError"""

    def __init__(
        self,
        session_accessor: SessionAccessor,
        leeway_seconds: float = 0,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._accessor = session_accessor
        self._leeway = leeway_seconds
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def current(self) -> Optional[Session]:
        """The session if it is usable right now, else None"""
        session = self._accessor.get_session()
        if session is None:
            return None
        if not session.is_valid(self._clock(), self._leeway):
            logger.info("⏰ Session present but expired or blank")
            return None
        return session

    def require(self) -> Session:
        session = self.current()
        if session is None:
            raise AuthRequiredError()
        return session

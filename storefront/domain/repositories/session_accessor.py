"""
Session accessor interface

The sign-in flow owns the credential; the core only reads it through here.
"""

from abc import ABC, abstractmethod
from typing import Optional

from storefront.domain.value_objects.session import Session


class SessionAccessor(ABC):
    """Supplies the current session, if any"""

    @abstractmethod
    def get_session(self) -> Optional[Session]:
        """Return the current session or None when signed out"""

    def is_signed_in(self) -> bool:
        """Signed-in status as the header shows it"""
        return self.get_session() is not None

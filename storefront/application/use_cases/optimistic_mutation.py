"""
Optimistic mutation wrapper

Runs a backend mutation under one of two disciplines:

- OPTIMISTIC: apply the local change first, confirm or roll it back once the
  call resolves (wishlist membership).
- CONFIRM_AFTER_WRITE: change nothing locally until the backend confirms
  (cart contents).

A per-key guard ignores a second mutation for the same key while the first is
still in flight.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Generic, Hashable, Optional, Set, TypeVar

from storefront.infrastructure.utilities.exceptions import (
    Redirect,
    StorefrontError,
    report_error,
)

T = TypeVar("T")


class MutationKind(Enum):
    """Whether a mutation may show its effect before confirmation"""

    OPTIMISTIC = "optimistic"
    CONFIRM_AFTER_WRITE = "confirm_after_write"


class MutationOutcome(Enum):
    """Where a mutation ended up"""

    OPTIMISTIC = "optimistic"      # applied locally, call in flight
    CONFIRMED = "confirmed"
    ROLLED_BACK = "rolled_back"
    IGNORED = "ignored"            # same key already in flight
    REJECTED = "rejected"          # precondition failed, no call issued


@dataclass
class MutationResult(Generic[T]):
    """Response for a mutation"""

    outcome: MutationOutcome
    value: Optional[T] = None
    error: Optional[StorefrontError] = None

    @property
    def success(self) -> bool:
        return self.outcome is MutationOutcome.CONFIRMED

    @property
    def error_message(self) -> Optional[str]:
        return self.error.user_message if self.error else None

    @property
    def redirect(self) -> Optional[Redirect]:
        return self.error.redirect if self.error else None

    @classmethod
    def rejected(cls, error: StorefrontError) -> "MutationResult[T]":
        return cls(MutationOutcome.REJECTED, error=error)

    @classmethod
    def ignored(cls) -> "MutationResult[T]":
        return cls(MutationOutcome.IGNORED)


def _always_active() -> bool:
    return True


class OptimisticMutation:
    """Reusable mutation runner for one kind of operation"""

    def __init__(self, kind: MutationKind, name: str):
        self.kind = kind
        self.name = name
        self._in_flight: Set[Hashable] = set()
        self._logger = logging.getLogger(self.__class__.__name__)

    def is_in_flight(self, key: Hashable) -> bool:
        return key in self._in_flight

    @property
    def in_flight_keys(self) -> frozenset:
        return frozenset(self._in_flight)

    async def run(
        self,
        call: Callable[[], Awaitable[T]],
        *,
        key: Optional[Hashable] = None,
        apply: Optional[Callable[[], None]] = None,
        rollback: Optional[Callable[[], None]] = None,
        confirm: Optional[Callable[[T], Any]] = None,
        is_active: Callable[[], bool] = _always_active,
    ) -> MutationResult[T]:
        """
        Execute ``call`` and settle local state.

        ``apply`` runs before the call only for OPTIMISTIC mutations;
        ``rollback`` runs after a failed call, ``confirm`` after a successful
        one. Neither runs once ``is_active`` turns false (the surface went
        away while the call was pending).
        """
        if key is not None and key in self._in_flight:
            self._logger.info("⏳ %s IGNORED: %s already in flight", self.name, key)
            return MutationResult.ignored()

        if key is not None:
            self._in_flight.add(key)
        optimistic = self.kind is MutationKind.OPTIMISTIC and apply is not None
        try:
            if optimistic:
                apply()
                self._logger.debug("✨ %s %s: %s", self.name, MutationOutcome.OPTIMISTIC.value, key)

            try:
                value = await call()
            except StorefrontError as e:
                report_error(e, self.name)
                if not is_active():
                    self._logger.info("🗑️ %s failed after dispose, result discarded", self.name)
                elif optimistic and rollback is not None:
                    rollback()
                    self._logger.info("↩️ %s ROLLED BACK: %s", self.name, key)
                return MutationResult(MutationOutcome.ROLLED_BACK, error=e)
            except BaseException:
                # Unexpected failure or cancellation: never leave the optimistic state behind
                if optimistic and rollback is not None and is_active():
                    rollback()
                raise

            if not is_active():
                self._logger.info("🗑️ %s confirmed after dispose, result discarded", self.name)
            elif confirm is not None:
                confirm(value)
            self._logger.info("✅ %s CONFIRMED: %s", self.name, key)
            return MutationResult(MutationOutcome.CONFIRMED, value=value)
        finally:
            if key is not None:
                self._in_flight.discard(key)

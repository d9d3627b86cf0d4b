"""
Use Cases

Contains the storefront use cases.
Each use case owns one surface's view of the backend state.
"""

from .cart_management_use_case import CartManagementUseCase
from .cart_synchronization_use_case import CartSynchronizationClient, SyncState
from .checkout_composition_use_case import CheckoutComposer
from .optimistic_mutation import (
    MutationKind,
    MutationOutcome,
    MutationResult,
    OptimisticMutation,
)
from .order_submission_use_case import OrderSubmissionUseCase
from .session_guard import SessionGuard
from .wishlist_management_use_case import WishlistManagementUseCase

__all__ = [
    "CartManagementUseCase",
    "CartSynchronizationClient",
    "CheckoutComposer",
    "MutationKind",
    "MutationOutcome",
    "MutationResult",
    "OptimisticMutation",
    "OrderSubmissionUseCase",
    "SessionGuard",
    "SyncState",
    "WishlistManagementUseCase",
]

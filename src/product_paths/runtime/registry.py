# SPDX-License-Identifier: MIT
"""Process-wide, set-once storage for the active product identifier."""

from __future__ import annotations

from threading import Lock

import logfire

from product_paths.errors import AlreadyRegisteredError
from product_paths.product import ProductIdentifier


class GlobalRegistry:
    """Thread-safe cell holding at most one :class:`ProductIdentifier`.

    The cell starts empty and accepts exactly one :meth:`register` call for
    its lifetime and cannot be cleared.
    """

    __slots__ = ("_lock", "_value")

    def __init__(self) -> None:
        self._lock = Lock()
        self._value: ProductIdentifier | None = None

    def register(self, identifier: ProductIdentifier) -> None:
        """Store ``identifier`` if no product has been registered yet.

        Args:
            identifier: Product identity for the remainder of the process.

        Raises:
            AlreadyRegisteredError: If a product is already stored. The stored
                value is left untouched.
        """
        with self._lock:
            stored = self._value
            if stored is None:
                self._value = identifier
        if stored is not None:
            logfire.warning(
                "Product already registered",
                current=stored.render_name(),
                rejected=identifier.render_name(),
            )
            raise AlreadyRegisteredError(stored.render_name())
        logfire.info("Registered product", product=identifier.render_name())

    def current(self) -> ProductIdentifier | None:
        """Return the registered identifier, or ``None`` before registration."""
        # Identifiers are frozen; the stored instance is safe to share.
        return self._value

    def is_set(self) -> bool:
        """Return ``True`` once a product has been registered."""
        return self._value is not None


GLOBAL_REGISTRY = GlobalRegistry()


def register(identifier: ProductIdentifier) -> None:
    """Register ``identifier`` in :data:`GLOBAL_REGISTRY`."""
    GLOBAL_REGISTRY.register(identifier)


def current() -> ProductIdentifier | None:
    """Return the identifier stored in :data:`GLOBAL_REGISTRY`."""
    return GLOBAL_REGISTRY.current()


__all__ = ["GLOBAL_REGISTRY", "GlobalRegistry", "current", "register"]

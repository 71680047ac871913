"""
Secret

A fetched secret value tied to an optional lease. Any value is accepted,
including empty ones; only the lease decides validity.
"""

from datetime import timedelta
from typing import Any, Optional

from .lease import Duration, Lease
from .pointer import resolve_pointer


class Secret:
    """A JSON value tied to an optional lease."""

    def __init__(
        self,
        value: Any,
        ttl: Optional[Duration] = None,
        renewable: bool = False,
        lease: Optional[Lease] = None
    ):
        """
        Create a secret.

        Args:
            value: The secret value (any JSON value)
            ttl: Lease duration reported by the secret store, None when the
                 response carried no lease field
            renewable: Whether the secret store reported the lease renewable
            lease: An existing lease to share instead of starting a new one
        """
        self.value = value
        if lease is None and ttl is not None:
            lease = Lease.new(ttl)
        self._lease = lease
        self.renewable = renewable

    @property
    def lease(self) -> Optional[Lease]:
        return self._lease

    def is_valid(self) -> bool:
        """Check if the secret is valid."""
        return self._lease is None or self._lease.is_valid()

    def has_lease(self) -> bool:
        """True when the secret store returned a real (non-zero) lease."""
        return self._lease is not None and self._lease.lease_duration != timedelta(0)

    def needs_renewal(self) -> bool:
        """Check if the secret needs to be renewed."""
        return self._lease is not None and self._lease.needs_renewal()

    def duration(self) -> Optional[timedelta]:
        return self._lease.lease_duration if self._lease else None

    def renew_delay(self) -> Optional[timedelta]:
        return self._lease.renew_delay if self._lease else None

    def select(self, anchor: Optional[str]) -> "Secret":
        """
        Narrow the value to the element a JSON pointer anchor designates.

        The returned secret shares this secret's lease.

        Raises:
            PointerError: If the anchor does not match the value
        """
        if anchor is None:
            return self
        return Secret(resolve_pointer(self.value, anchor), renewable=self.renewable, lease=self._lease)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Secret):
            return NotImplemented
        return self.value == other.value

    __hash__ = None

    def __repr__(self) -> str:
        return f"Secret(<{type(self.value).__name__}>, lease={self._lease!r})"

"""
Auth

A client token tied to an optional lease. A token without a lease never
expires; an empty token is never valid.
"""

from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from .lease import Duration, Lease


@dataclass(frozen=True)
class Auth:
    """Token returned by a successful login."""
    client_token: str
    lease: Optional[Lease] = None
    renewable: bool = False

    @classmethod
    def new(cls, token: str, ttl: Optional[Duration] = None, renewable: bool = False) -> "Auth":
        """Create an Auth, starting a lease when `ttl` is given."""
        lease = Lease.new(ttl) if ttl is not None else None
        return cls(client_token=token, lease=lease, renewable=renewable)

    def is_valid(self) -> bool:
        """Check if the token is still usable."""
        if not self.client_token:
            return False
        return self.lease is None or self.lease.is_valid()

    def needs_renewal(self) -> bool:
        """Check if the token should be renewed."""
        return self.lease is not None and self.lease.needs_renewal()

    def duration(self) -> Optional[timedelta]:
        return self.lease.lease_duration if self.lease else None

    def renew_delay(self) -> Optional[timedelta]:
        return self.lease.renew_delay if self.lease else None

    def __repr__(self) -> str:
        # never leak the token in logs
        return f"Auth(client_token=<{len(self.client_token)} chars>, lease={self.lease!r}, renewable={self.renewable})"

"""
Lease

A lease starts when it is created, lasts `lease_duration` and should be
renewed once two thirds of that duration have elapsed. A zero duration means
the secret store returned no real lease (non-renewable secret, TTL-less
token): such a lease is never valid and never needs renewal.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Union

Duration = Union[timedelta, int, float]

ZERO = timedelta(0)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def as_timedelta(ttl: Duration) -> timedelta:
    """Accept a timedelta or a number of seconds."""
    if isinstance(ttl, timedelta):
        return ttl
    return timedelta(seconds=ttl)


@dataclass(frozen=True)
class Lease:
    """Validity window of a token or a secret."""
    time: datetime
    lease_duration: timedelta
    renew_delay: timedelta

    @classmethod
    def new(cls, ttl: Duration) -> "Lease":
        """Start a lease now, renewable after 2/3 of `ttl`."""
        ttl = as_timedelta(ttl)
        return cls(time=_now(), lease_duration=ttl, renew_delay=ttl * 2 // 3)

    @property
    def expires_at(self) -> datetime:
        return self.time + self.lease_duration

    @property
    def renew_at(self) -> datetime:
        return self.time + self.renew_delay

    def is_valid(self) -> bool:
        """True while the lease has not expired."""
        return self.lease_duration != ZERO and _now() < self.expires_at

    def needs_renewal(self) -> bool:
        """True once the renew delay has elapsed."""
        return self.lease_duration != ZERO and _now() > self.renew_at

    def remaining(self) -> timedelta:
        """Time left before expiry, never negative."""
        return max(self.expires_at - _now(), ZERO)

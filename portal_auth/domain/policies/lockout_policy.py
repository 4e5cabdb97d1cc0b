"""Tiered account lockout policy.

Maps the cumulative failed-login count, evaluated after the current failure
has been counted, to a lockout duration:

    failed count    lockout
    < 5             none
    5 - 9           15 minutes
    10 - 19         1 hour
    >= 20           24 hours

The function is pure so the repository can evaluate it against the count it
just incremented atomically in the database.

Example:
    >>> next_lockout(4) is None
    True
    >>> next_lockout(5)
    datetime.timedelta(seconds=900)
"""

from datetime import timedelta

# (minimum failed count, duration), highest threshold first
LOCKOUT_TIERS: tuple[tuple[int, timedelta], ...] = (
    (20, timedelta(hours=24)),
    (10, timedelta(hours=1)),
    (5, timedelta(minutes=15)),
)


def next_lockout(failed_count: int) -> timedelta | None:
    """Return the lockout duration for a failed-attempt count.

    Args:
        failed_count: Stored failure count including the current failure.

    Returns:
        Lockout duration, or None when the count is below the first tier.
    """
    for threshold, duration in LOCKOUT_TIERS:
        if failed_count >= threshold:
            return duration
    return None

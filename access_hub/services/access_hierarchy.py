"""Ordering of access tiers."""

from access_hub.models.software import AccessLevel

ACCESS_RANK = {
    AccessLevel.READ: 1,
    AccessLevel.WRITE: 2,
    AccessLevel.ADMIN: 3,
}


def rank(level: AccessLevel | str) -> int:
    """Return the privilege rank of a tier.

    Raises:
        ValueError: If the label is not a known tier
    """
    return ACCESS_RANK[AccessLevel(level)]


def covers(have: AccessLevel | str, want: AccessLevel | str) -> bool:
    """True if holding ``have`` already grants everything ``want`` would."""
    return rank(have) >= rank(want)


__all__ = ["ACCESS_RANK", "rank", "covers"]

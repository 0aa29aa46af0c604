"""Unit tests for access tier ordering."""

from itertools import product

import pytest

from access_hub.models import AccessLevel
from access_hub.services.access_hierarchy import covers, rank

EXPECTED_RANK = {AccessLevel.READ: 1, AccessLevel.WRITE: 2, AccessLevel.ADMIN: 3}


class TestRank:
    def test_rank_values(self):
        """Read < Write < Admin with ranks 1, 2, 3."""
        for level, expected in EXPECTED_RANK.items():
            assert rank(level) == expected

    def test_rank_accepts_labels(self):
        assert rank("Write") == 2

    def test_rank_unknown_label_raises(self):
        with pytest.raises(ValueError):
            rank("Owner")


class TestCovers:
    @pytest.mark.parametrize("have,want", list(product(AccessLevel, repeat=2)))
    def test_covers_matches_rank_order(self, have, want):
        """covers(a, b) holds exactly when rank(a) >= rank(b)."""
        assert covers(have, want) == (EXPECTED_RANK[have] >= EXPECTED_RANK[want])

    def test_write_does_not_cover_admin(self):
        assert covers(AccessLevel.WRITE, AccessLevel.ADMIN) is False

    def test_admin_covers_everything(self):
        assert all(covers(AccessLevel.ADMIN, level) for level in AccessLevel)

"""Unit tests for the tiered lockout policy and email masking.

Tests cover:
- Tier boundaries (4/5, 9/10, 19/20)
- Monotonic durations
- Email masking rules
"""

from datetime import timedelta

import pytest

from portal_auth.domain.policies import LOCKOUT_TIERS, mask_email, next_lockout


@pytest.mark.unit
class TestNextLockout:
    """Test next_lockout tier mapping."""

    @pytest.mark.parametrize("count", [0, 1, 4])
    def test_below_first_tier_has_no_lockout(self, count):
        assert next_lockout(count) is None

    @pytest.mark.parametrize(
        ("count", "expected"),
        [
            (5, timedelta(minutes=15)),
            (9, timedelta(minutes=15)),
            (10, timedelta(hours=1)),
            (19, timedelta(hours=1)),
            (20, timedelta(hours=24)),
            (250, timedelta(hours=24)),
        ],
    )
    def test_tier_boundaries(self, count, expected):
        assert next_lockout(count) == expected

    def test_duration_never_decreases_with_count(self):
        """More failures never shorten the lockout."""
        previous = timedelta(0)
        for count in range(0, 40):
            duration = next_lockout(count) or timedelta(0)
            assert duration >= previous
            previous = duration

    def test_tiers_are_ordered_highest_first(self):
        thresholds = [threshold for threshold, _ in LOCKOUT_TIERS]
        assert thresholds == sorted(thresholds, reverse=True)


@pytest.mark.unit
class TestMaskEmail:
    """Test mask_email."""

    def test_masks_all_but_first_three_local_characters(self):
        assert mask_email("alice@example.com") == "ali**@example.com"

    def test_long_local_part(self):
        assert mask_email("administrator@corp.example") == "adm**********@corp.example"

    def test_short_local_part_keeps_visible_prefix(self):
        assert mask_email("ab@example.com") == "ab@example.com"

    def test_single_character_local_part_is_unmasked(self):
        assert mask_email("a@example.com") == "a@example.com"

    def test_domain_is_never_masked(self):
        assert mask_email("someone@sub.domain.example").endswith("@sub.domain.example")

    def test_value_without_at_sign_is_fully_masked(self):
        assert mask_email("not-an-email") == "************"

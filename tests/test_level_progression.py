"""
Unit tests for rank and stage progression.

Tests cover:
1. Stage tables
   - Delta growth formula
   - Cumulative thresholds
   - Stage names and overrides
2. get_position() function
   - Fresh player
   - Stage boundaries
   - Scores past the final stage
   - Monotonicity
3. rank_stars() and get_stage_table()
"""
import pytest
from app.services.level_progression import (
    STAGE_DELTAS,
    STAGE_THRESHOLDS,
    STAGE_NAMES,
    LAST_STAGE_INDEX,
    build_stage_deltas,
    get_position,
    get_stage_index,
    get_stage_name,
    get_stage_table,
    rank_stars,
)


class TestStageTables:
    """Test the precomputed stage tables."""

    def test_hundred_stages(self):
        assert len(STAGE_DELTAS) == 100
        assert len(STAGE_THRESHOLDS) == 100
        assert len(STAGE_NAMES) == 100
        assert LAST_STAGE_INDEX == 99

    def test_initial_deltas(self):
        assert STAGE_DELTAS[:6] == (3, 5, 10, 15, 22, 28)

    def test_delta_growth_formula(self):
        """Each later delta adds 6 plus one more rank every five stages."""
        assert STAGE_DELTAS[6:11] == (35, 42, 49, 56, 64)
        for i in range(6, 100):
            assert STAGE_DELTAS[i] == STAGE_DELTAS[i - 1] + 6 + i // 5

    def test_thresholds_are_cumulative(self):
        assert STAGE_THRESHOLDS[:10] == (3, 8, 18, 33, 55, 83, 118, 160, 209, 265)
        assert STAGE_THRESHOLDS[-1] == sum(STAGE_DELTAS)

    def test_thresholds_strictly_increase(self):
        for previous, current in zip(STAGE_THRESHOLDS, STAGE_THRESHOLDS[1:]):
            assert current > previous

    def test_build_fewer_stages(self):
        assert build_stage_deltas(4) == (3, 5, 10, 15)
        assert build_stage_deltas(7) == (3, 5, 10, 15, 22, 28, 35)

    def test_stage_names(self):
        assert STAGE_NAMES[0] == "Tiny Worm"
        assert STAGE_NAMES[34] == "Swinging Elephant"
        assert STAGE_NAMES[49] == "Splendid Whale"
        assert STAGE_NAMES[50] == "Thoughtful Worm"
        assert STAGE_NAMES[99] == "Omniscient Whale"

    def test_stage_name_overrides(self):
        assert STAGE_NAMES[43] == "Wise Owl"
        assert STAGE_NAMES[84] == "Thoughtful Elephant"
        # Only the first-half Owl is overridden
        assert STAGE_NAMES[93] == "Famous Owl"

    def test_get_stage_name_clamps(self):
        assert get_stage_name(-3) == "Tiny Worm"
        assert get_stage_name(500) == "Omniscient Whale"


class TestGetPosition:
    """Test get_position function."""

    def test_fresh_player(self):
        position = get_position(0)

        assert position.rank == 0
        assert position.stage_index == 0
        assert position.stage_number == 1
        assert position.stage_name == "Tiny Worm"
        assert position.ranks_into_stage == 0
        assert position.ranks_needed_for_stage == 3
        assert position.stage_progress == 0.0
        assert position.progress_in_rank == 0

    def test_just_below_first_stage(self):
        position = get_position(29)

        assert position.rank == 2
        assert position.stage_index == 0
        assert position.ranks_into_stage == 2
        assert position.progress_in_rank == 9

    def test_first_threshold_reached(self):
        position = get_position(30)

        assert position.rank == 3
        assert position.stage_index == 1
        assert position.stage_name == "Slow Snail"
        assert position.ranks_before_stage == 3
        assert position.ranks_into_stage == 0
        assert position.ranks_needed_for_stage == 5

    def test_score_one_hundred(self):
        """Rank 10 has passed thresholds 3 and 8 but not 18."""
        position = get_position(100)

        assert position.rank == 10
        assert position.stage_index == 2
        assert position.ranks_before_stage == STAGE_DELTAS[0] + STAGE_DELTAS[1]
        assert position.ranks_into_stage == 2
        assert position.ranks_needed_for_stage == 10
        assert position.stage_progress == pytest.approx(0.2)
        assert position.progress_in_rank == 0
        assert position.rank_stars == "⭐⭐" + "☆" * 8

    def test_mid_stage_progress(self):
        position = get_position(79)

        assert position.rank == 7
        assert position.stage_index == 1
        assert position.ranks_into_stage == 4
        assert position.ranks_needed_for_stage == 5
        assert position.stage_progress == pytest.approx(0.8)
        assert position.progress_in_rank == 9
        assert position.rank_stars == "⭐⭐⭐⭐☆"

    def test_last_stage_entry(self):
        score = STAGE_THRESHOLDS[98] * 10
        position = get_position(score)

        assert position.stage_index == 99
        assert position.stage_name == "Omniscient Whale"
        assert position.ranks_into_stage == 0
        assert position.ranks_needed_for_stage == STAGE_DELTAS[99]

    def test_completing_last_stage_stays_on_it(self):
        score = STAGE_THRESHOLDS[99] * 10
        position = get_position(score)

        assert position.stage_index == 99
        assert position.ranks_into_stage == STAGE_DELTAS[99]
        assert position.stage_progress == 1.0

    def test_huge_score_pins_to_final_stage(self):
        position = get_position(10 ** 9)

        assert position.stage_index == 99
        assert position.stage_number == 100
        assert position.ranks_into_stage > position.ranks_needed_for_stage
        assert position.stage_progress == 1.0
        assert position.rank_stars == "⭐" * 10

    def test_negative_score_treated_as_zero(self):
        assert get_position(-50) == get_position(0)

    def test_idempotent(self):
        assert get_position(1234) == get_position(1234)

    def test_rank_and_stage_monotonic(self):
        previous = get_position(0)
        for score in range(1, 40000, 7):
            current = get_position(score)
            assert current.rank >= previous.rank
            assert current.stage_index >= previous.stage_index
            assert current.stage_index <= 99
            previous = current

    def test_stage_index_counts_thresholds(self):
        for rank in (0, 2, 3, 7, 8, 17, 18, 500, 5000):
            expected = min(sum(1 for t in STAGE_THRESHOLDS if t <= rank), 99)
            assert get_stage_index(rank) == expected

    def test_to_dict(self):
        data = get_position(100).to_dict()

        assert data["rank"] == 10
        assert data["stage_index"] == 2
        assert data["points_per_rank"] == 10
        assert "rank_stars" in data


class TestRankStars:
    """Test rank_stars function."""

    def test_empty_stage(self):
        assert rank_stars(0, 3) == "☆☆☆"

    def test_full_stage(self):
        assert rank_stars(3, 3) == "⭐⭐⭐"

    def test_caps_at_ten_slots(self):
        stars = rank_stars(20, 40)
        assert stars == "⭐" * 5 + "☆" * 5

    def test_half_slot_rounds_up(self):
        assert rank_stars(1, 20) == "⭐" + "☆" * 9

    def test_no_ranks_needed(self):
        assert rank_stars(5, 0) == ""


class TestStageTable:
    """Test get_stage_table function."""

    def test_describes_every_stage(self):
        table = get_stage_table()

        assert len(table) == 100
        assert table[0] == {
            "stage_index": 0,
            "stage_number": 1,
            "name": "Tiny Worm",
            "starts_at_rank": 0,
            "ranks_needed": 3
        }
        assert table[1]["starts_at_rank"] == 3
        assert table[99]["starts_at_rank"] == STAGE_THRESHOLDS[98]

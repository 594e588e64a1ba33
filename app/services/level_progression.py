"""Rank and stage progression computed from the lifetime score."""
import math
from dataclasses import dataclass, asdict
from typing import Dict, List, Tuple
from app.constants import (
    POINTS_PER_RANK,
    STAGE_COUNT,
    INITIAL_STAGE_DELTAS,
    STAGE_DELTA_BASE_INCREMENT,
    STAGE_DELTA_INDEX_DIVISOR,
    MAX_RANK_STARS,
    FILLED_STAR,
    EMPTY_STAR,
    STAGE_ANIMALS,
    EARLY_STAGE_ADJECTIVES,
    LATE_STAGE_ADJECTIVES,
    EARLY_STAGE_OVERRIDES,
    LATE_STAGE_OVERRIDES,
)


def build_stage_deltas(count: int = STAGE_COUNT) -> Tuple[int, ...]:
    """
    Build the number of ranks each stage takes.

    Starts from INITIAL_STAGE_DELTAS; every later delta is the previous one
    plus 6 + index // 5, where index is the 0-based position being filled.

    Args:
        count: Number of stages

    Returns:
        Tuple of per-stage rank deltas
    """
    deltas = list(INITIAL_STAGE_DELTAS[:count])
    for index in range(len(deltas), count):
        increment = STAGE_DELTA_BASE_INCREMENT + index // STAGE_DELTA_INDEX_DIVISOR
        deltas.append(deltas[index - 1] + increment)
    return tuple(deltas)


def build_stage_thresholds(deltas: Tuple[int, ...]) -> Tuple[int, ...]:
    """Cumulative rank thresholds from per-stage deltas."""
    thresholds = []
    cumulative = 0
    for delta in deltas:
        cumulative += delta
        thresholds.append(cumulative)
    return tuple(thresholds)


def build_stage_names() -> Tuple[str, ...]:
    """
    Build the ordered table of stage names.

    The first half pairs each creature with a modest adjective, the second
    half pairs the same creatures, in the same order, with a grand one.
    A couple of iconic names are then fixed in place.
    """
    half = len(STAGE_ANIMALS)
    names = [""] * (half * 2)

    for i, animal in enumerate(STAGE_ANIMALS):
        names[i] = f"{EARLY_STAGE_ADJECTIVES[i]} {animal}"
        names[i + half] = f"{LATE_STAGE_ADJECTIVES[i]} {animal}"

    for animal, name in EARLY_STAGE_OVERRIDES.items():
        names[STAGE_ANIMALS.index(animal)] = name
    for animal, name in LATE_STAGE_OVERRIDES.items():
        names[STAGE_ANIMALS.index(animal) + half] = name

    return tuple(names)


STAGE_DELTAS = build_stage_deltas()
STAGE_THRESHOLDS = build_stage_thresholds(STAGE_DELTAS)
STAGE_NAMES = build_stage_names()
LAST_STAGE_INDEX = len(STAGE_NAMES) - 1


@dataclass(frozen=True)
class StagePosition:
    """Where a score places the player."""
    score: int
    rank: int
    stage_index: int
    stage_number: int
    stage_name: str
    ranks_before_stage: int
    ranks_into_stage: int
    ranks_needed_for_stage: int
    stage_progress: float
    progress_in_rank: int
    rank_stars: str

    def to_dict(self) -> Dict:
        data = asdict(self)
        data["points_per_rank"] = POINTS_PER_RANK
        return data


def get_stage_name(stage_index: int) -> str:
    """Name of a stage, clamped to the table."""
    return STAGE_NAMES[max(0, min(stage_index, LAST_STAGE_INDEX))]


def get_stage_index(rank: int) -> int:
    """
    Stage index for a rank.

    Counts the thresholds that are <= rank, capped at the last stage.
    """
    stage_index = 0
    for threshold in STAGE_THRESHOLDS:
        if rank >= threshold:
            stage_index += 1
        else:
            break
    return min(stage_index, LAST_STAGE_INDEX)


def rank_stars(ranks_into_stage: int, ranks_needed: int) -> str:
    """
    Star row showing ranks completed within the current stage.

    At most MAX_RANK_STARS slots are drawn regardless of how many ranks the
    stage takes; filled stars scale with the completed share.

    Args:
        ranks_into_stage: Ranks already completed in the stage
        ranks_needed: Ranks the stage takes in total

    Returns:
        String of filled and empty stars
    """
    slots = max(0, min(ranks_needed, MAX_RANK_STARS))
    if ranks_needed > 0:
        # Halves round up
        filled = min(slots, math.floor(ranks_into_stage / ranks_needed * slots + 0.5))
    else:
        filled = slots
    filled = max(0, filled)
    return FILLED_STAR * filled + EMPTY_STAR * (slots - filled)


def get_position(score: int) -> StagePosition:
    """
    Compute rank and stage for a lifetime score.

    - rank = score // 10
    - stage_index = number of thresholds <= rank, capped at the last stage
    - ranks_needed_for_stage = threshold of the stage minus the previous
      threshold; the final delta past the end of the table
    - stage_progress = ranks_into_stage / ranks_needed_for_stage, capped at 1

    Scores past the last threshold stay pinned to the final stage.

    Args:
        score: Lifetime points, non-negative

    Returns:
        StagePosition for the score
    """
    score = max(0, int(score))
    rank = score // POINTS_PER_RANK
    stage_index = get_stage_index(rank)

    ranks_before = STAGE_THRESHOLDS[stage_index - 1] if stage_index > 0 else 0
    if stage_index < len(STAGE_THRESHOLDS):
        ranks_needed = STAGE_THRESHOLDS[stage_index] - ranks_before
    else:
        ranks_needed = STAGE_DELTAS[-1]

    ranks_into_stage = rank - ranks_before
    if ranks_needed > 0:
        progress = min(ranks_into_stage / ranks_needed, 1.0)
    else:
        progress = 1.0

    return StagePosition(
        score=score,
        rank=rank,
        stage_index=stage_index,
        stage_number=stage_index + 1,
        stage_name=get_stage_name(stage_index),
        ranks_before_stage=ranks_before,
        ranks_into_stage=ranks_into_stage,
        ranks_needed_for_stage=ranks_needed,
        stage_progress=progress,
        progress_in_rank=score % POINTS_PER_RANK,
        rank_stars=rank_stars(ranks_into_stage, ranks_needed),
    )


def get_stage_table() -> List[Dict]:
    """
    Describe every stage for display.

    Returns:
        List of dictionaries with stage number, name, ranks to enter the stage
        and ranks it takes
    """
    return [
        {
            "stage_index": i,
            "stage_number": i + 1,
            "name": name,
            "starts_at_rank": STAGE_THRESHOLDS[i - 1] if i > 0 else 0,
            "ranks_needed": STAGE_DELTAS[i],
        }
        for i, name in enumerate(STAGE_NAMES)
    ]

"""Scene duration rebalancing against a target song length"""

import logging
import random
from typing import List, Optional, Sequence, Tuple

from .config import SCENE_DURATIONS, DURATION_TOLERANCE

logger = logging.getLogger(__name__)

SHORT_CLIP, LONG_CLIP = SCENE_DURATIONS
CLIP_STEP = LONG_CLIP - SHORT_CLIP


def total_duration(items: Sequence) -> int:
    """Sum of item durations, ignoring items without one"""
    return sum(item.duration or 0 for item in items)


def rebalance_durations(items: List, target_duration: int, rng: Optional[random.Random] = None) -> List:
    """Lengthen or shorten clips in place until the total fits the target.

    Works on any objects with a mutable ``duration`` of 5 or 10 seconds. The
    grow pass runs until the total reaches ``target_duration``; the shrink pass
    accepts an overshoot of up to DURATION_TOLERANCE seconds. Clips are picked
    uniformly at random so adjustments spread across the sequence. When no
    candidate clip is left the pass stops with a warning and the total may stay
    outside the band. Order, count and identity of items never change.

    Args:
        items: Scenes or production prompts, in timeline order
        target_duration: Target total length in seconds
        rng: Random source, injectable for deterministic selection

    Returns:
        The same list object, mutated in place
    """
    rng = rng or random.Random()
    total = total_duration(items)
    original_total = total

    # Grow pass
    while total < target_duration:
        candidates = [item for item in items if item.duration == SHORT_CLIP]
        if not candidates:
            logger.warning(
                f"[Rebalancer] Cannot reach target {target_duration}s: "
                f"no {SHORT_CLIP}s clips left to lengthen (total {total}s)"
            )
            break
        rng.choice(candidates).duration = LONG_CLIP
        total += CLIP_STEP

    # Shrink pass
    while total > target_duration + DURATION_TOLERANCE:
        candidates = [item for item in items if item.duration == LONG_CLIP]
        if not candidates:
            logger.warning(
                f"[Rebalancer] Cannot reach target {target_duration}s: "
                f"no {LONG_CLIP}s clips left to shorten (total {total}s)"
            )
            break
        rng.choice(candidates).duration = SHORT_CLIP
        total -= CLIP_STEP

    logger.info(f"[Rebalancer] {len(items)} clips: {original_total}s -> {total}s (target {target_duration}s)")
    return items


def format_timecode(seconds: int) -> str:
    """Format seconds as MM:SS"""
    minutes, remaining = divmod(int(seconds), 60)
    return f"{minutes:02d}:{remaining:02d}"


def timeline(items: Sequence) -> List[Tuple[str, str]]:
    """Start and end timecodes for items laid out back to back"""
    cursor = 0
    marks = []
    for item in items:
        start = cursor
        cursor += item.duration or 0
        marks.append((format_timecode(start), format_timecode(cursor)))
    return marks

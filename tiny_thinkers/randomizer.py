"""
Per-session question selection and answer shuffling
"""

import logging
import random

from .config import CHOICES_PER_ROUND, ROUNDS_PER_PHASE

logger = logging.getLogger(__name__)


def new_session_set(pool, count=ROUNDS_PER_PHASE, rng=None):
    """Return a fair shuffle of pool truncated to count items"""
    rng = rng or random
    items = list(pool)
    rng.shuffle(items)
    if len(items) < count:
        logger.warning("Pool has %d items, wanted %d", len(items), count)
    return items[:count]


def build_choice_set(correct, wrong, pool, excluding=None, rng=None):
    """Build the shuffled answer buttons for one round.

    The result holds the correct label, the scripted wrong label and up to
    two distractors drawn from pool. Labels in excluding (the correct and
    wrong labels by default) are never used as distractors.
    """
    rng = rng or random
    if excluding is None:
        excluding = {correct, wrong}
    else:
        excluding = set(excluding) | {correct, wrong}

    # dict keeps pool order so a seeded rng gives repeatable sets
    candidates = [label for label in dict.fromkeys(pool) if label not in excluding]
    wanted = CHOICES_PER_ROUND - 2
    if len(candidates) < wanted:
        logger.warning(
            "Only %d distractors available for %r, showing %d choices",
            len(candidates), correct, 2 + len(candidates),
        )
        wanted = len(candidates)

    choices = [correct, wrong] + rng.sample(candidates, wanted)
    rng.shuffle(choices)
    return choices

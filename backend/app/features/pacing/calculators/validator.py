"""
Pace Validator

Classifies a target finish time against course thresholds and rider
profile. Rules are checked in order and the first match wins, so a
beginner below the beginner bound gets the beginner warning even when
the time would also be an "elite" error.

Boundaries (elite = course elite_minutes):
    < min_minutes           -> error
    < elite                 -> warning
    < elite x 1.2           -> info (competitive)
    <= elite x 1.5          -> success (realistic)
    > elite x 1.5           -> info (leisurely)
"""

from typing import Callable, List, Optional, Tuple

from app.features.courses.models import PaceThresholds
from app.features.pacing.models import PaceJudgment
from app.shared.constants import JudgmentLevel, RiderProfile
from app.shared.formatters import format_duration

COMPETITIVE_MULTIPLIER = 1.2
REALISTIC_MULTIPLIER = 1.5

# (predicate(target, profile, thresholds), builder(target, thresholds))
_Rule = Tuple[
    Callable[[float, RiderProfile, PaceThresholds], bool],
    Callable[[float, PaceThresholds], PaceJudgment],
]


def _beginner_aggressive(target: float, t: PaceThresholds) -> PaceJudgment:
    return PaceJudgment(
        level=JudgmentLevel.WARNING,
        title="Ambitious target for a beginner",
        message=(
            f"A finish under {format_duration(t.beginner_warning_minutes)} is a big ask "
            f"for a first-timer. Start conservatively and ride the hills within yourself."
        ),
    )


def _pro_cruising(target: float, t: PaceThresholds) -> PaceJudgment:
    return PaceJudgment(
        level=JudgmentLevel.INFO,
        title="Cruising pace",
        message=(
            f"{format_duration(target)} is well outside pro race pace. "
            f"Treat it as a training ride or a recovery spin."
        ),
    )


def _elite_professional(target: float, t: PaceThresholds) -> PaceJudgment:
    return PaceJudgment(
        level=JudgmentLevel.ERROR,
        title="Elite professional pace",
        message=(
            f"Finishing under {format_duration(t.min_minutes)} is reserved for the "
            f"front of the elite field. Double-check your target."
        ),
    )


def _very_aggressive(target: float, t: PaceThresholds) -> PaceJudgment:
    return PaceJudgment(
        level=JudgmentLevel.WARNING,
        title="Very aggressive target",
        message=(
            f"Sub-{format_duration(t.elite_minutes)} needs a strong group and "
            f"near-perfect pacing. Expect to suffer on the climbs."
        ),
    )


def _competitive(target: float, t: PaceThresholds) -> PaceJudgment:
    return PaceJudgment(
        level=JudgmentLevel.INFO,
        title="Competitive pace",
        message="A fast, well-trained amateur time. Fuel early and stay in the bunch.",
    )


def _realistic(target: float, t: PaceThresholds) -> PaceJudgment:
    return PaceJudgment(
        level=JudgmentLevel.SUCCESS,
        title="Realistic target",
        message="A solid, achievable goal for a prepared rider. Stick to the splits.",
    )


def _leisurely(target: float, t: PaceThresholds) -> PaceJudgment:
    return PaceJudgment(
        level=JudgmentLevel.INFO,
        title="Leisurely pace",
        message="Plenty of time in hand. Enjoy the ride and the water points.",
    )


PACE_RULES: List[_Rule] = [
    (lambda m, p, t: p == RiderProfile.BEGINNER and m < t.beginner_warning_minutes,
     _beginner_aggressive),
    (lambda m, p, t: p == RiderProfile.PRO and m > t.elite_minutes * REALISTIC_MULTIPLIER,
     _pro_cruising),
    (lambda m, p, t: m < t.min_minutes, _elite_professional),
    (lambda m, p, t: m < t.elite_minutes, _very_aggressive),
    (lambda m, p, t: m < t.elite_minutes * COMPETITIVE_MULTIPLIER, _competitive),
    (lambda m, p, t: m <= t.elite_minutes * REALISTIC_MULTIPLIER, _realistic),
]


class PaceValidator:
    """
    Decision table for target finish times.

    Example usage:
        validator = PaceValidator(course.pace_validation)
        judgment = validator.judge(225, RiderProfile.INTERMEDIATE)
    """

    def __init__(self, thresholds: PaceThresholds, rules: Optional[List[_Rule]] = None):
        self.thresholds = thresholds
        self.rules = rules if rules is not None else PACE_RULES

    def judge(self, target_total_minutes: float, profile: RiderProfile) -> PaceJudgment:
        """Return the first matching judgment (leisurely if none match)."""
        for matches, build in self.rules:
            if matches(target_total_minutes, profile, self.thresholds):
                return build(target_total_minutes, self.thresholds)
        return _leisurely(target_total_minutes, self.thresholds)

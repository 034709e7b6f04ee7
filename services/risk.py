"""
Fall-risk scoring.

The score is a weighted sum of four flags, capped at 100:

    30  any fall in the last six months
    20  more than two falls in the last six months
    25  more than four low-exercise weeks in the last twelve weeks
    25  latest screening answered yes to unsteady, worries or fallen
"""

from dataclasses import dataclass
from typing import Iterable, Optional

RECENT_FALLS_WEIGHT = 30
FREQUENT_FALLS_WEIGHT = 20
LOW_EXERCISE_WEIGHT = 25
SCREENING_WEIGHT = 25

FREQUENT_FALLS_THRESHOLD = 2
LOW_EXERCISE_WEEKS_THRESHOLD = 4
LOW_EXERCISE_MINUTES = 50
MAX_RISK_SCORE = 100

EXERCISE_WINDOW_WEEKS = 12
FALLS_WINDOW_MONTHS = 6


@dataclass(frozen=True)
class RiskFactors:
    fall_count: int
    low_exercise_weeks: int
    screening_risk: bool

    @property
    def has_recent_falls(self) -> bool:
        return self.fall_count > 0


def count_low_exercise_weeks(minutes_per_week: Iterable[int]) -> int:
    return sum(1 for minutes in minutes_per_week if minutes < LOW_EXERCISE_MINUTES)


def screening_flags_risk(unsteady: Optional[bool], worries: Optional[bool], fallen: Optional[bool]) -> bool:
    return bool(unsteady or worries or fallen)


def calculate_risk_score(factors: RiskFactors) -> int:
    score = 0
    if factors.has_recent_falls:
        score += RECENT_FALLS_WEIGHT
    if factors.fall_count > FREQUENT_FALLS_THRESHOLD:
        score += FREQUENT_FALLS_WEIGHT
    if factors.low_exercise_weeks > LOW_EXERCISE_WEEKS_THRESHOLD:
        score += LOW_EXERCISE_WEIGHT
    if factors.screening_risk:
        score += SCREENING_WEIGHT
    return min(score, MAX_RISK_SCORE)

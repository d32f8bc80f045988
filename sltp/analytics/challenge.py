"""Growth challenge progress.

The required pace is the compound daily growth rate that takes the
current balance to the target in the days left, expressed in percent of
balance per day (which is R, since 1R is 1% of balance).
"""

import math
from datetime import date
from typing import Optional

from sltp.models import ChallengeProgress, ChallengeSettings, RiskLevel

# (balance ceiling, aggressive above, moderate above); smaller accounts
# tolerate a faster pace before it is flagged.
RISK_TIERS: list[tuple[float, float, float]] = [
    (5_000, 2.0, 1.0),
    (10_000, 1.5, 0.75),
    (25_000, 1.0, 0.5),
    (50_000, 0.75, 0.4),
    (math.inf, 0.5, 0.25),
]


def required_daily_r(
    current_balance: float, target_balance: float, days_remaining: int
) -> float:
    """Compound daily growth (in percent) needed to reach the target.

    Returns 0 when no days remain and ``math.inf`` when the current
    balance is not positive, since no growth rate can recover it. A
    target at or below the current balance gives 0 or a negative rate.
    A non-positive target with a positive balance returns -100.
    """
    if days_remaining <= 0:
        return 0.0
    if current_balance <= 0:
        return math.inf
    if target_balance <= 0:
        return -100.0

    multiplier = (target_balance / current_balance) ** (1 / days_remaining)
    return (multiplier - 1) * 100


def classify_risk(required_r: float, balance: float) -> RiskLevel:
    """Label how demanding a required daily R is for an account of this size."""
    for ceiling, aggressive_above, moderate_above in RISK_TIERS:
        if balance < ceiling:
            break
    if required_r > aggressive_above:
        return "Aggressive"
    if required_r > moderate_above:
        return "Moderate"
    return "Conservative"


def days_between(start: date, today: date) -> int:
    """Whole calendar days from ``start`` to ``today``."""
    return (today - start).days


def compute_challenge_progress(
    challenge: ChallengeSettings, current_balance: float, today: date
) -> Optional[ChallengeProgress]:
    """Compute where an active challenge stands.

    Args:
        challenge: Challenge settings; start date and starting balance are
            trusted as snapshotted when the challenge was enabled.
        current_balance: Balance now, withdrawals included.
        today: Reference date.

    Returns:
        ChallengeProgress, or None when the challenge is disabled or has
        no start date.
    """
    if not challenge.enabled or challenge.start_date is None:
        return None

    days_elapsed = days_between(challenge.start_date, today)
    days_remaining = max(0, challenge.duration_days - days_elapsed)

    if days_remaining <= 0:
        daily_r = 0.0
        risk_level: RiskLevel = "Conservative"
    else:
        daily_r = required_daily_r(current_balance, challenge.target_balance, days_remaining)
        risk_level = classify_risk(daily_r, current_balance)

    return ChallengeProgress(
        current_balance=current_balance,
        target_balance=challenge.target_balance,
        days_elapsed=days_elapsed,
        days_remaining=days_remaining,
        required_daily_r=daily_r,
        risk_level=risk_level,
    )

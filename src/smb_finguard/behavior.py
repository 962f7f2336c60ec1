# SMB FinGuard - Financial Intelligence Engine for SMBs
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
Behavioral risk profiling of actors from their activity log.

For every actor, three signals contribute to a 0-100 risk score:

- after-hours activity: more than 30% of the events happen before 06:00 or
  after 22:59 (+30),
- over-repeated action: an action accounts for more than half of the
  actor's events (+20 per such action),
- anomalous amounts: z-score outliers among the non-zero event amounts
  (+15 per outlier, see anomalies.py).

An actor is marked as unusual above 50 points. Each triggered signal adds a
pattern description and a matching recommendation.
"""

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass

from .anomalies import detect_anomalies
from .models import ActivityEvent

AFTER_HOURS_START = 22
AFTER_HOURS_END = 6
AFTER_HOURS_SHARE = 0.3
AFTER_HOURS_POINTS = 30
REPEATED_ACTION_SHARE = 0.5
REPEATED_ACTION_POINTS = 20
ANOMALY_POINTS = 15
MAX_SCORE = 100
UNUSUAL_SCORE = 50


@dataclass(frozen=True)
class BehaviorProfile:
    """
    Attributes:
        actor_id: Identifier of the profiled actor.
        event_count: Number of events of the actor.
        unusual_activity: True when the risk score exceeds 50.
        patterns: Descriptions of the triggered signals.
        risk_score: Aggregate score, capped at 100.
        recommendations: One follow-up action per triggered signal.
    """

    actor_id: str
    event_count: int
    unusual_activity: bool
    patterns: tuple[str, ...]
    risk_score: int
    recommendations: tuple[str, ...]


def _is_after_hours(hour: int) -> bool:
    return hour < AFTER_HOURS_END or hour > AFTER_HOURS_START


def _profile(actor_id: str, events: list[ActivityEvent]) -> BehaviorProfile:
    patterns: list[str] = []
    recommendations: list[str] = []
    score = 0
    total = len(events)

    after_hours = sum(1 for e in events if _is_after_hours(e.timestamp.hour))
    if after_hours > total * AFTER_HOURS_SHARE:
        patterns.append("Frequent activity outside business hours")
        recommendations.append("Review after-hours access permissions")
        score += AFTER_HOURS_POINTS

    for action, count in Counter(e.action for e in events).items():
        if count > total * REPEATED_ACTION_SHARE:
            patterns.append(f"Excessive repetition of action: {action}")
            recommendations.append(f"Review the need to repeat {action}")
            score += REPEATED_ACTION_POINTS

    amounts = [e.amount for e in events if e.amount]
    if amounts:
        anomalies = detect_anomalies(amounts)
        if anomalies:
            patterns.append("Anomalous transaction amounts")
            recommendations.append("Verify the transactions with anomalous amounts")
            score += len(anomalies) * ANOMALY_POINTS

    return BehaviorProfile(
        actor_id=actor_id,
        event_count=total,
        unusual_activity=score > UNUSUAL_SCORE,
        patterns=tuple(patterns),
        risk_score=min(MAX_SCORE, score),
        recommendations=tuple(recommendations),
    )


def profile_behavior(events: Iterable[ActivityEvent]) -> dict[str, BehaviorProfile]:
    """
    Score every actor found in the activity log.

    Returns:
        A dict mapping actor id to its BehaviorProfile, in first-seen order.
    """
    by_actor: dict[str, list[ActivityEvent]] = {}
    for event in events:
        by_actor.setdefault(event.actor_id, []).append(event)

    return {actor_id: _profile(actor_id, acts) for actor_id, acts in by_actor.items()}

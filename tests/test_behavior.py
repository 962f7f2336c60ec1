from datetime import datetime
from typing import Optional

from smb_finguard.behavior import profile_behavior
from smb_finguard.models import ActivityEvent


def _event(
    actor: str, hour: int, action: str, amount: Optional[float] = None
) -> ActivityEvent:
    return ActivityEvent(
        actor_id=actor,
        timestamp=datetime(2025, 4, 2, hour, 15),
        action=action,
        amount=amount,
    )


def test_regular_actor_has_no_pattern() -> None:
    events = [
        _event("alice", 9, "login"),
        _event("alice", 10, "view_invoice"),
        _event("alice", 14, "create_invoice"),
    ]

    profile = profile_behavior(events)["alice"]

    assert profile.event_count == 3
    assert profile.patterns == ()
    assert profile.recommendations == ()
    assert profile.risk_score == 0
    assert profile.unusual_activity is False


def test_after_hours_activity_adds_thirty_points() -> None:
    events = [
        _event("bob", 23, "login"),
        _event("bob", 2, "export"),
        _event("bob", 5, "view_invoice"),
    ]

    profile = profile_behavior(events)["bob"]

    assert profile.patterns == ("Frequent activity outside business hours",)
    assert profile.recommendations == ("Review after-hours access permissions",)
    assert profile.risk_score == 30


def test_business_hours_boundaries() -> None:
    """Hours 6 to 22 inclusive are business hours."""
    events = [_event("carol", 22, "a"), _event("carol", 6, "b"), _event("carol", 12, "c")]

    assert profile_behavior(events)["carol"].risk_score == 0


def test_repeated_action_adds_twenty_points() -> None:
    events = [_event("dave", 10, "approve")] * 3 + [_event("dave", 11, "login")]

    profile = profile_behavior(events)["dave"]

    assert profile.patterns == ("Excessive repetition of action: approve",)
    assert profile.recommendations == ("Review the need to repeat approve",)
    assert profile.risk_score == 20


def test_anomalous_amounts_combine_with_other_signals() -> None:
    """After hours (30) + repetition (20) + one amount outlier (15) = 65."""
    events = [_event("eve", 23, "payment", 10.0) for _ in range(30)]
    events.append(_event("eve", 23, "payment", 1000.0))

    profile = profile_behavior(events)["eve"]

    assert profile.patterns == (
        "Frequent activity outside business hours",
        "Excessive repetition of action: payment",
        "Anomalous transaction amounts",
    )
    assert profile.recommendations[-1] == "Verify the transactions with anomalous amounts"
    assert profile.risk_score == 65
    assert profile.unusual_activity is True


def test_zero_and_missing_amounts_are_ignored() -> None:
    events = [_event("frank", 10, f"act{i}", 0.0) for i in range(10)]
    events += [_event("frank", 10, f"other{i}") for i in range(10)]

    assert profile_behavior(events)["frank"].risk_score == 0


def test_profiles_keep_first_seen_order() -> None:
    events = [
        _event("zed", 9, "login"),
        _event("amy", 9, "login"),
        _event("zed", 10, "logout"),
    ]

    profiles = profile_behavior(events)

    assert list(profiles) == ["zed", "amy"]
    assert profiles["zed"].event_count == 2


def test_empty_log_has_no_profiles() -> None:
    assert profile_behavior([]) == {}

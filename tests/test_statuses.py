from __future__ import annotations

from task_tracker.app import statuses


def test_all_statuses_in_fixed_order() -> None:
    assert [descriptor.key for descriptor in statuses.all_statuses()] == [
        "pending",
        "in-progress",
        "completed",
    ]


def test_describe_known_and_unknown() -> None:
    descriptor = statuses.describe("in-progress")
    assert descriptor is not None
    assert descriptor.name == "In Progress"
    assert descriptor.color == "blue"
    assert descriptor.can_transition_to == ["completed", "pending"]
    assert statuses.describe("archived") is None


def test_catalog_is_not_mutated_through_returned_descriptors() -> None:
    descriptor = statuses.describe("pending")
    descriptor.can_transition_to.append("archived")
    statuses.all_statuses()[0].name = "Changed"

    fresh = statuses.describe("pending")
    assert fresh.can_transition_to == ["in-progress", "completed"]
    assert fresh.name == "Pending"


def test_can_transition() -> None:
    assert statuses.can_transition("pending", "completed") is True
    assert statuses.can_transition("completed", "in-progress") is False
    assert statuses.can_transition("completed", "completed") is True
    assert statuses.can_transition("unknown", "pending") is False

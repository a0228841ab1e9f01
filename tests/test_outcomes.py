"""
Batch outcome classification tests.

The overall status of a batch is derived from its two partitions only
after every item ran; these tests pin that three-way rule.
"""
import pytest

from studyhub.services.outcomes import BatchOutcome, Outcome, Status, apply_batch


def test_batch_with_no_conflicts_is_success():
    assert BatchOutcome(applied=[{"id": 1}]).status is Status.SUCCESS


def test_batch_with_both_partitions_is_partial():
    batch = BatchOutcome(applied=[{"id": 1}], already_present=[{"id": 2}])
    assert batch.status is Status.PARTIAL


def test_batch_with_only_conflicts_is_failure():
    assert BatchOutcome(already_present=[{"id": 2}]).status is Status.FAILURE


def test_empty_batch_is_success():
    assert BatchOutcome().status is Status.SUCCESS


def test_outcome_ok_only_for_success():
    assert Outcome(Status.SUCCESS, "done").ok
    assert not Outcome(Status.NOT_FOUND, "missing").ok
    assert not Outcome(Status.FAIL, "duplicate").ok


@pytest.mark.asyncio
async def test_apply_batch_processes_every_item():
    seen = set()
    calls = []

    async def _apply(item):
        calls.append(item)
        if item in seen:
            return False, {"item": item}
        seen.add(item)
        return True, {"item": item}

    batch = await apply_batch(["a", "b", "a", "c", "a"], _apply)
    assert calls == ["a", "b", "a", "c", "a"]
    assert [row["item"] for row in batch.applied] == ["a", "b", "c"]
    assert [row["item"] for row in batch.already_present] == ["a", "a"]
    assert batch.status is Status.PARTIAL

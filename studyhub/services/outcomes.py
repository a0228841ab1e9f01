"""
Outcome types shared by the service layer.

Soft failures (duplicate create, missing delete target, already-present
batch items) are returned as values rather than raised, so the router
can serialise them into the response envelope.  Only persistence faults
propagate as exceptions.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Iterable, TypeVar

T = TypeVar("T")


class Status(str, Enum):
    SUCCESS = "success"
    PARTIAL = "partial success"
    FAILURE = "complete failure"
    NOT_FOUND = "not found"
    FAIL = "fail"
    ERROR = "error"


@dataclass
class Outcome:
    """Result of a single-entity mutation."""

    status: Status
    message: str
    data: Any = None

    @property
    def ok(self) -> bool:
        return self.status is Status.SUCCESS


@dataclass
class BatchOutcome:
    """
    Partitioned result of a batch operation.

    ``applied`` holds rows the batch inserted, ``already_present`` the rows
    that blocked an insert.  The overall status is only meaningful once
    every item has been processed.
    """

    applied: list[dict] = field(default_factory=list)
    already_present: list[dict] = field(default_factory=list)

    @property
    def status(self) -> Status:
        if not self.already_present:
            return Status.SUCCESS
        if self.applied:
            return Status.PARTIAL
        return Status.FAILURE


# Per-item callable: returns (applied, row).
ApplyFn = Callable[[T], Awaitable[tuple[bool, dict]]]


async def apply_batch(items: Iterable[T], apply: ApplyFn) -> BatchOutcome:
    """
    Run *apply* over every item and partition the rows it returns.

    Items are processed sequentially on the caller's session; a conflict
    on one item never stops the rest of the batch.
    """
    outcome = BatchOutcome()
    for item in items:
        applied, row = await apply(item)
        if applied:
            outcome.applied.append(row)
        else:
            outcome.already_present.append(row)
    return outcome

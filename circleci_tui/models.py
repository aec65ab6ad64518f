"""Data models for CircleCI pipelines, workflows and jobs."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any

from circleci_tui.errors import ParseError


def _require(data: Mapping[str, Any], key: str) -> Any:
    try:
        return data[key]
    except (KeyError, TypeError) as exc:
        raise ParseError(f"missing field `{key}`") from exc


def _string(data: Mapping[str, Any], key: str) -> str:
    value = _require(data, key)
    if not isinstance(value, str):
        raise ParseError(f"field `{key}` must be a string")
    return value


def _integer(data: Mapping[str, Any], key: str) -> int:
    value = _require(data, key)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ParseError(f"field `{key}` must be a non-negative integer")
    return value


def _mapping(data: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = _require(data, key)
    if not isinstance(value, Mapping):
        raise ParseError(f"field `{key}` must be an object")
    return value


def _to_time(value: Any, key: str) -> datetime:
    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, str):
        try:
            moment = datetime.fromisoformat(value)
        except ValueError as exc:
            raise ParseError(f"field `{key}` is not a timestamp: {value!r}") from exc
    else:
        raise ParseError(f"field `{key}` must be a timestamp")
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def _time(data: Mapping[str, Any], key: str) -> datetime:
    return _to_time(_require(data, key), key)


def _optional_time(data: Mapping[str, Any], key: str) -> datetime | None:
    value = data.get(key)
    return None if value is None else _to_time(value, key)


def _whole_seconds(delta: timedelta) -> int:
    """Seconds in ``delta``, truncated toward zero."""
    secs = delta.days * 86400 + delta.seconds
    if secs < 0 and delta.microseconds:
        secs += 1
    return secs


def _hours_minutes(secs: int) -> str:
    return f"{secs // 3600}h {(secs % 3600) // 60}m"


@dataclass(frozen=True)
class VcsInfo:
    branch: str
    revision: str
    commit_subject: str
    commit_author_name: str
    commit_timestamp: datetime


@dataclass(frozen=True)
class TriggerInfo:
    trigger_type: str


@dataclass(frozen=True)
class Workflow:
    id: str
    name: str
    status: str
    created_at: datetime
    stopped_at: datetime | None
    pipeline_id: str

    def duration_formatted(self) -> str:
        """Run time of the workflow, or ``running...`` while it has not stopped."""
        if self.stopped_at is None:
            return "running..."
        secs = _whole_seconds(self.stopped_at - self.created_at)
        if secs < 60:
            return f"{secs}s"
        if secs < 3600:
            return f"{secs // 60}m {secs % 60}s"
        return _hours_minutes(secs)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Workflow:
        return cls(
            id=_string(data, "id"),
            name=_string(data, "name"),
            status=_string(data, "status"),
            created_at=_time(data, "created_at"),
            stopped_at=_optional_time(data, "stopped_at"),
            pipeline_id=_string(data, "pipeline_id"),
        )


@dataclass(frozen=True)
class Pipeline:
    id: str
    number: int
    state: str
    created_at: datetime
    updated_at: datetime
    vcs: VcsInfo
    trigger: TriggerInfo
    project_slug: str

    def calculate_duration_from_workflows(
        self, workflows: Sequence[Workflow] | None
    ) -> str:
        """Span from the earliest workflow start to the latest workflow stop."""
        if not workflows:
            return "--"
        earliest_start = min(w.created_at for w in workflows)
        stops = [w.stopped_at for w in workflows if w.stopped_at is not None]
        if not stops:
            return "..."
        secs = max(_whole_seconds(max(stops) - earliest_start), 0)
        if secs < 60:
            return f"{secs}s"
        if secs < 3600:
            mins, rest = divmod(secs, 60)
            return f"{mins}m {rest}s" if rest else f"{mins}m"
        return _hours_minutes(secs)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Pipeline:
        vcs = _mapping(data, "vcs")
        trigger = _mapping(data, "trigger")
        return cls(
            id=_string(data, "id"),
            number=_integer(data, "number"),
            state=_string(data, "state"),
            created_at=_time(data, "created_at"),
            updated_at=_time(data, "updated_at"),
            vcs=VcsInfo(
                branch=_string(vcs, "branch"),
                revision=_string(vcs, "revision"),
                commit_subject=_string(vcs, "commit_subject"),
                commit_author_name=_string(vcs, "commit_author_name"),
                commit_timestamp=_time(vcs, "commit_timestamp"),
            ),
            trigger=TriggerInfo(trigger_type=_string(trigger, "type")),
            project_slug=_string(data, "project_slug"),
        )


@dataclass(frozen=True)
class ExecutorInfo:
    executor_type: str


@dataclass(frozen=True)
class Job:
    id: str
    name: str
    status: str
    job_number: int
    workflow_id: str
    started_at: datetime | None
    stopped_at: datetime | None
    duration: int | None
    executor: ExecutorInfo

    def duration_formatted(self) -> str:
        """Job duration, or its state when no duration is known."""
        if self.duration is not None:
            secs = self.duration
            if secs < 60:
                return f"{secs}s"
            if secs < 3600:
                return f"{secs // 60}m {secs % 60}s"
            return _hours_minutes(secs)
        if self.started_at is not None:
            return "running..."
        return "pending"

    def is_running(self) -> bool:
        return self.status == "running" and self.stopped_at is None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Job:
        duration = data.get("duration")
        if duration is not None and (
            isinstance(duration, bool) or not isinstance(duration, int) or duration < 0
        ):
            raise ParseError("field `duration` must be a non-negative integer")
        executor = _mapping(data, "executor")
        return cls(
            id=_string(data, "id"),
            name=_string(data, "name"),
            status=_string(data, "status"),
            job_number=_integer(data, "job_number"),
            workflow_id=_string(data, "workflow_id"),
            started_at=_optional_time(data, "started_at"),
            stopped_at=_optional_time(data, "stopped_at"),
            duration=duration,
            executor=ExecutorInfo(executor_type=_string(executor, "type")),
        )


@dataclass(frozen=True)
class StepAction:
    name: str
    status: str
    output_url: str | None
    index: int


@dataclass(frozen=True)
class JobStep:
    name: str
    status: str
    actions: list[StepAction] = field(default_factory=list)


_MOCK_ROWS = [
    # id, number, state, created ago, updated ago, branch, revision, subject,
    # author, commit ago, trigger
    ("pipe-001", 1234, "success", timedelta(hours=2), timedelta(hours=1, minutes=45),
     "main", "a1b2c3d", "feat: add webhook retry logic", "alice",
     timedelta(hours=2, minutes=5), "webhook"),
    ("pipe-002", 1235, "running", timedelta(minutes=45), timedelta(minutes=5),
     "feat/oauth", "e4f5g6h", "fix: rate limiter edge case", "bob",
     timedelta(minutes=50), "webhook"),
    ("pipe-003", 1236, "failed", timedelta(hours=4), timedelta(hours=3, minutes=50),
     "fix/memory-leak", "i7j8k9l", "fix: memory leak in connection pool", "charlie",
     timedelta(hours=4, minutes=10), "webhook"),
    ("pipe-004", 1237, "success", timedelta(hours=6), timedelta(hours=5, minutes=52),
     "main", "m0n1o2p", "chore: bump deps", "dave",
     timedelta(hours=6, minutes=2), "scheduled"),
    ("pipe-005", 1238, "pending", timedelta(minutes=2), timedelta(minutes=2),
     "feat/metrics", "q3r4s5t", "feat: add prometheus metrics", "alice",
     timedelta(minutes=5), "api"),
    ("pipe-006", 1239, "success", timedelta(hours=8), timedelta(hours=7, minutes=54),
     "main", "u6v7w8x", "docs: update API documentation", "bob",
     timedelta(hours=8, minutes=3), "webhook"),
    ("pipe-007", 1240, "failed", timedelta(hours=10), timedelta(hours=9, minutes=48),
     "fix/database-conn", "y9z0a1b", "fix: database connection timeout", "charlie",
     timedelta(hours=10, minutes=8), "webhook"),
    ("pipe-008", 1241, "success", timedelta(hours=12), timedelta(hours=11, minutes=56),
     "main", "c2d3e4f", "perf: optimize query performance", "dave",
     timedelta(hours=12, minutes=4), "webhook"),
]


def mock_pipelines(now: datetime | None = None) -> list[Pipeline]:
    """Sample pipelines with timestamps relative to ``now``."""
    if now is None:
        now = datetime.now(timezone.utc)
    return [
        Pipeline(
            id=pid,
            number=number,
            state=state,
            created_at=now - created,
            updated_at=now - updated,
            vcs=VcsInfo(
                branch=branch,
                revision=revision,
                commit_subject=subject,
                commit_author_name=author,
                commit_timestamp=now - committed,
            ),
            trigger=TriggerInfo(trigger_type=trigger),
            project_slug="gh/acme/api-service",
        )
        for (pid, number, state, created, updated, branch, revision, subject,
             author, committed, trigger) in _MOCK_ROWS
    ]
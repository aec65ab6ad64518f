"""Disk cache for job logs, kept under the user's cache directory."""

from __future__ import annotations

import json
import math
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any

import platformdirs

APP_NAME = "circleci-tui"
MAX_AGE_DAYS = 15

_JOB_NUMBER = re.compile(r"\+?\d+")
_U32_LIMIT = 2**32


def default_cache_dir() -> Path:
    """Directory holding cached logs in the platform's cache location."""
    return platformdirs.user_cache_path(APP_NAME, appauthor=False) / "logs"


class CacheStatus(Enum):
    """Outcome of a cache lookup."""

    VALID = "valid"
    STALE = "stale"
    MISSING = "missing"


@dataclass(frozen=True)
class CacheEntry:
    """Result of a lookup; ``logs`` is filled only when the entry is valid."""

    status: CacheStatus
    logs: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return self.status is CacheStatus.VALID


@dataclass(frozen=True)
class CacheMetadata:
    """What is stored next to each cached log."""

    cached_at: datetime
    job_status: str
    log_hash: str


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _format_time(moment: datetime) -> str:
    text = moment.astimezone(timezone.utc).isoformat()
    return text.replace("+00:00", "Z")


def _parse_time(value: Any) -> datetime:
    if not isinstance(value, str):
        raise ValueError(f"invalid timestamp: {value!r}")
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    text = re.sub(r"(\.\d{6})\d+", r"\1", text)
    try:
        moment = datetime.fromisoformat(text)
    except ValueError as exc:
        raise ValueError(f"invalid timestamp: {value!r}") from exc
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def _metadata_from_json(text: str) -> CacheMetadata:
    data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError("metadata must be a JSON object")
    for key in ("cached_at", "job_status", "log_hash"):
        if key not in data:
            raise ValueError(f"missing field `{key}`")
    job_status, log_hash = data["job_status"], data["log_hash"]
    if not isinstance(job_status, str) or not isinstance(log_hash, str):
        raise ValueError("fields `job_status` and `log_hash` must be strings")
    return CacheMetadata(
        cached_at=_parse_time(data["cached_at"]),
        job_status=job_status,
        log_hash=log_hash,
    )


def _metadata_to_json(metadata: CacheMetadata) -> str:
    return json.dumps(
        {
            "cached_at": _format_time(metadata.cached_at),
            "job_status": metadata.job_status,
            "log_hash": metadata.log_hash,
        },
        indent=2,
    )


def _age_days(cached_at: datetime) -> int:
    """Whole days since ``cached_at``, truncated toward zero."""
    return math.trunc((_now() - cached_at).total_seconds() / 86400)


def _split_lines(content: str) -> list[str]:
    if not content:
        return []
    if content.endswith("\n"):
        content = content[:-1]
    return [line[:-1] if line.endswith("\r") else line for line in content.split("\n")]


def _is_valid(metadata: CacheMetadata) -> bool:
    if metadata.job_status == "running":
        return False
    return _age_days(metadata.cached_at) <= MAX_AGE_DAYS


@dataclass
class LogCacheManager:
    """Stores job logs as ``<job>.log`` with a ``<job>.meta`` JSON sidecar."""

    cache_dir: Path = field(default_factory=default_cache_dir)

    def __post_init__(self) -> None:
        self.cache_dir = Path(self.cache_dir)
        self.cache_dir.mkdir(parents=True, exist_ok=True)

    def _paths(self, job_number: int) -> tuple[Path, Path]:
        return (
            self.cache_dir / f"{job_number}.log",
            self.cache_dir / f"{job_number}.meta",
        )

    def get(self, job_number: int) -> CacheEntry:
        """Look up cached logs; raises on unreadable or corrupt metadata."""
        log_path, meta_path = self._paths(job_number)
        if not log_path.exists() or not meta_path.exists():
            return CacheEntry(CacheStatus.MISSING)
        metadata = _metadata_from_json(meta_path.read_text(encoding="utf-8"))
        if not _is_valid(metadata):
            return CacheEntry(CacheStatus.STALE)
        content = log_path.read_text(encoding="utf-8")
        return CacheEntry(CacheStatus.VALID, _split_lines(content))

    def put(self, job_number: int, logs: list[str], job_status: str) -> None:
        """Write logs and their metadata to disk."""
        log_path, meta_path = self._paths(job_number)
        log_path.write_text("\n".join(logs), encoding="utf-8")
        metadata = CacheMetadata(
            cached_at=_now(), job_status=job_status, log_hash=str(len(logs))
        )
        meta_path.write_text(_metadata_to_json(metadata), encoding="utf-8")

    def cleanup_old_entries(self) -> None:
        """Delete entries cached more than fifteen days ago."""
        for path in list(self.cache_dir.iterdir()):
            if path.suffix != ".meta":
                continue
            try:
                metadata = _metadata_from_json(path.read_text(encoding="utf-8"))
            except (OSError, ValueError):
                continue
            if _age_days(metadata.cached_at) <= MAX_AGE_DAYS:
                continue
            stem = path.stem
            if not _JOB_NUMBER.fullmatch(stem):
                continue
            job_number = int(stem)
            if job_number >= _U32_LIMIT:
                continue
            for target in (path, self.cache_dir / f"{job_number}.log"):
                try:
                    target.unlink()
                except OSError:
                    pass
"""Persistent user preferences stored as YAML in the user's config directory."""

from __future__ import annotations

import re
import sys
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any

import platformdirs
import yaml

APP_NAME = "circleci-tui"
CONFIG_NAME = "preferences"
_STALE_AFTER = timedelta(hours=24)


def default_preferences_path() -> Path:
    """Location of the preferences file in the platform's config directory."""
    return platformdirs.user_config_path(APP_NAME, appauthor=False) / f"{CONFIG_NAME}.yml"


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _parse_time(value: Any) -> datetime:
    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        text = re.sub(r"(\.\d{6})\d+", r"\1", text)
        try:
            moment = datetime.fromisoformat(text)
        except ValueError as exc:
            raise ValueError(f"invalid timestamp: {value!r}") from exc
    else:
        raise ValueError(f"invalid timestamp: {value!r}")
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def _field(data: Any, key: str) -> Any:
    if not isinstance(data, dict):
        raise ValueError("expected a mapping")
    if key not in data:
        raise ValueError(f"missing field `{key}`")
    return data[key]


def _index(data: Any, key: str) -> int:
    value = _field(data, key)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"field `{key}` must be a non-negative integer")
    return value


def _text(data: Any, key: str) -> str:
    value = _field(data, key)
    if not isinstance(value, str):
        raise ValueError(f"field `{key}` must be a string")
    return value


def _optional_text(data: Any, key: str) -> str | None:
    value = _field(data, key)
    if value is not None and not isinstance(value, str):
        raise ValueError(f"field `{key}` must be a string or null")
    return value


def _flag(data: Any, key: str) -> bool:
    value = _field(data, key)
    if not isinstance(value, bool):
        raise ValueError(f"field `{key}` must be a boolean")
    return value


@dataclass
class CachedUser:
    """CircleCI user identity with the moment it was fetched."""

    login: str
    name: str | None
    cached_at: datetime

    @classmethod
    def create(cls, login: str, name: str | None) -> CachedUser:
        return cls(login=login, name=name, cached_at=_now())

    def is_stale(self) -> bool:
        """True when the cached identity is older than 24 hours."""
        return _now() - self.cached_at > _STALE_AFTER


@dataclass
class PipelineFilterPrefs:
    """Filters of the pipeline list screen."""

    owner_index: int = 0
    branch: str | None = None
    date_index: int = 0
    status_index: int = 0
    search_text: str = ""


@dataclass
class PipelineDetailFilterPrefs:
    """Filters of the pipeline detail screen."""

    status_index: int = 0
    duration_index: int = 0


@dataclass
class UserPreferences:
    """Every persisted user setting."""

    version: int = 1
    user: CachedUser | None = None
    pipeline_filters: PipelineFilterPrefs = field(default_factory=PipelineFilterPrefs)
    detail_filters: PipelineDetailFilterPrefs = field(
        default_factory=PipelineDetailFilterPrefs
    )
    first_run: bool = True

    def to_dict(self) -> dict[str, Any]:
        user = None
        if self.user is not None:
            user = {
                "login": self.user.login,
                "name": self.user.name,
                "cached_at": self.user.cached_at.isoformat(),
            }
        pf = self.pipeline_filters
        df = self.detail_filters
        return {
            "version": self.version,
            "user": user,
            "pipeline_filters": {
                "owner_index": pf.owner_index,
                "branch": pf.branch,
                "date_index": pf.date_index,
                "status_index": pf.status_index,
                "search_text": pf.search_text,
            },
            "detail_filters": {
                "status_index": df.status_index,
                "duration_index": df.duration_index,
            },
            "first_run": self.first_run,
        }

    @classmethod
    def from_dict(cls, data: Any) -> UserPreferences:
        """Build preferences from a mapping; raises ValueError on bad data."""
        raw_user = _field(data, "user")
        user = None
        if raw_user is not None:
            user = CachedUser(
                login=_text(raw_user, "login"),
                name=_optional_text(raw_user, "name"),
                cached_at=_parse_time(_field(raw_user, "cached_at")),
            )
        pf = _field(data, "pipeline_filters")
        df = _field(data, "detail_filters")
        return cls(
            version=_index(data, "version"),
            user=user,
            pipeline_filters=PipelineFilterPrefs(
                owner_index=_index(pf, "owner_index"),
                branch=_optional_text(pf, "branch"),
                date_index=_index(pf, "date_index"),
                status_index=_index(pf, "status_index"),
                search_text=_text(pf, "search_text"),
            ),
            detail_filters=PipelineDetailFilterPrefs(
                status_index=_index(df, "status_index"),
                duration_index=_index(df, "duration_index"),
            ),
            first_run=_flag(data, "first_run"),
        )


@dataclass
class PreferencesManager:
    """Loads, holds and saves the user's preferences."""

    preferences: UserPreferences = field(default_factory=UserPreferences)
    path: Path = field(default_factory=default_preferences_path)

    @classmethod
    def load(cls, path: Path | str | None = None) -> PreferencesManager:
        """Read preferences from ``path``.

        A missing file is created with defaults; an unreadable or corrupt
        file is reported on stderr and replaced by defaults in memory.
        """
        target = Path(path) if path is not None else default_preferences_path()
        try:
            if target.exists():
                with target.open(encoding="utf-8") as fh:
                    preferences = UserPreferences.from_dict(yaml.safe_load(fh))
            else:
                preferences = UserPreferences()
                cls(preferences, target).save()
        except (OSError, yaml.YAMLError, ValueError) as exc:
            print(
                f"Warning: Failed to load preferences ({exc}), using defaults",
                file=sys.stderr,
            )
            preferences = UserPreferences()
        return cls(preferences=preferences, path=target)

    def save(self) -> None:
        """Write the preferences to disk, creating directories as needed."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8") as fh:
            yaml.safe_dump(self.preferences.to_dict(), fh, sort_keys=False)

    def is_user_cache_stale(self) -> bool:
        """True when no user is cached or the cached user is stale."""
        user = self.preferences.user
        return user is None or user.is_stale()

    def update_user_cache(self, login: str, name: str | None) -> None:
        self.preferences.user = CachedUser.create(login, name)

    def clear_first_run(self) -> None:
        self.preferences.first_run = False
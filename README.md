# circleci-tui

Building blocks for a keyboard-driven terminal monitor of CircleCI
pipelines: data models for pipelines, workflows and jobs, API error types, a
status colour theme, persistent user preferences, an on-disk log cache, git
branch detection, and a small interactive faceted-search demo.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## What is inside

### Models — `circleci_tui.models`

`Pipeline`, `Workflow`, `Job`, `VcsInfo`, `TriggerInfo`, `ExecutorInfo`,
`JobStep` and `StepAction` are frozen dataclasses shaped like the objects of
the CircleCI API. `Pipeline.from_dict`, `Workflow.from_dict` and
`Job.from_dict` build them from decoded JSON and raise `ParseError` when a
field is missing or has the wrong type. Timestamps are ISO 8601 strings (or
`datetime` objects); naive ones are taken as UTC.

Durations are formatted for display:

- `Job.duration_formatted()` gives `"45s"`, `"2m 5s"` or `"1h 3m"`, and
  `"running..."` (started, no duration) or `"pending"` when no duration is
  known.
- `Workflow.duration_formatted()` measures from creation to stop, or reports
  `"running..."`.
- `Pipeline.calculate_duration_from_workflows(workflows)` spans the earliest
  workflow start to the latest workflow stop, dropping a zero seconds part
  (`"2m"` rather than `"2m 0s"`); it returns `"--"` when `workflows` is `None`
  or empty and `"..."` while none has stopped.

`Job.is_running()` is true when the status is `"running"` and the job has no
stop time. `mock_pipelines(now)` returns eight sample pipelines with
timestamps relative to `now` (the current UTC time by default).

### Errors — `circleci_tui.errors`

All API failures derive from `ApiError`:

- `NetworkError(message)` — `"Network error: ..."`
- `HttpError(status, message)` — `"HTTP error 404: ..."`
- `ParseError(message)` — `"Parse error: ..."`
- `ApiTimeout()` — `"Request timeout"`

### Theme — `circleci_tui.theme`

```python
from circleci_tui.theme import status_color, status_icon

status_icon("success")    # "✓"
status_icon("FAILED")     # "✗" — matching ignores case
status_icon("whatever")   # "?"
status_color("running").hex()   # "#f71abd"
```

`status_color` returns an `Rgb` colour; unknown statuses get the pending
colour. The module also defines the palette constants (`BG_DARK`,
`FG_PRIMARY`, `SUCCESS`, `FAILED`, `RUNNING`, `ACCENT`, `BORDER`, ...).

### Preferences — `circleci_tui.preferences`

Preferences are kept as YAML, by default at `default_preferences_path()` in
the platform's configuration directory.

```python
from circleci_tui.preferences import PreferencesManager

manager = PreferencesManager.load()          # or load("path/to/preferences.yml")
if manager.is_user_cache_stale():
    manager.update_user_cache("demo-user", "Demo User")
manager.preferences.pipeline_filters.branch = "main"
manager.clear_first_run()
manager.save()
```

When the file does not exist, `load` writes one with the defaults. When it
cannot be read or holds invalid data, a warning goes to stderr and the
defaults are used in memory. `UserPreferences` holds the `version`, the
cached `user` (`CachedUser`, stale after 24 hours), the `first_run` flag and
the filter choices in `PipelineFilterPrefs` and `PipelineDetailFilterPrefs`;
`to_dict` and `from_dict` convert it to and from plain data.

### Log cache — `circleci_tui.log_cache`

`LogCacheManager(cache_dir)` stores job logs on disk, by default under
`default_cache_dir()`, as `<job>.log` with a `<job>.meta` JSON file beside
it. `put(job_number, logs, job_status)` writes an entry; `get(job_number)`
returns a `CacheEntry` whose `status` is `CacheStatus.VALID`, `STALE` or
`MISSING`, with the log lines filled in only when valid. Entries for
`"running"` jobs are always stale, and entries older than 15 days expire.
`get` raises when the metadata file is corrupt. `cleanup_old_entries()`
deletes expired entries.

### Git — `circleci_tui.git`

`find_git_dir(path)` looks in `path` (the current directory by default) and
its parents for a repository and returns its git directory, following
`.git` files as used by worktrees. `get_current_branch(path)` returns the
name of the local branch HEAD points at. It returns `None` outside a
repository, on a detached HEAD, when the current branch has no commits yet,
or when the repository cannot be read. Upstream tracking branches are not
consulted.

## Faceted search demo

```
circleci-tui-facets
```

A curses filter bar with four facets (pipelines, projects, time range,
status).

- Left / Right: move between filters
- Enter: open the dropdown, or confirm the focused option
- Up / Down: move within an open dropdown
- Esc: close the dropdown
- q: quit (when no dropdown is open)

Filters that differ from their default are listed under "Active filters".
The state and text of the demo are available without a terminal through
`FacetedSearchDemo`, `Facet` and `Key`.

## What this package does not do

It contains no CircleCI API client and no full pipeline monitor: nothing
here fetches pipelines, workflows, jobs or logs over the network, and there
is no screen for browsing them. The only command is the faceted-search
demo above.
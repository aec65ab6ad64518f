"""Models, theme, preferences, log cache, git branch detection and a filter-bar demo for a CircleCI terminal monitor."""

__version__ = "0.1.0"

__all__ = [
    "errors",
    "faceted_demo",
    "git",
    "log_cache",
    "models",
    "preferences",
    "theme",
]
"""Detection of the git branch checked out in the working directory."""

from __future__ import annotations

from pathlib import Path

_HEADS = "refs/heads/"


def _looks_like_git_dir(path: Path) -> bool:
    return (
        (path / "HEAD").is_file()
        and (path / "objects").is_dir()
        and (path / "refs").is_dir()
    )


def _resolve_gitfile(gitfile: Path) -> Path | None:
    content = gitfile.read_text(encoding="utf-8").strip()
    if not content.startswith("gitdir:"):
        return None
    target = Path(content[len("gitdir:"):].strip())
    if not target.is_absolute():
        target = gitfile.parent / target
    target = target.resolve()
    return target if (target / "HEAD").is_file() else None


def find_git_dir(path: str | Path | None = None) -> Path | None:
    """Find the git directory of the repository containing ``path``.

    Searches ``path`` and its parents; returns None outside a repository.
    """
    try:
        start = Path(path if path is not None else ".").resolve()
        for candidate in (start, *start.parents):
            dot_git = candidate / ".git"
            if dot_git.is_dir():
                return dot_git if (dot_git / "HEAD").is_file() else None
            if dot_git.is_file():
                return _resolve_gitfile(dot_git)
            if _looks_like_git_dir(candidate):
                return candidate
    except (OSError, UnicodeDecodeError):
        return None
    return None


def _common_dir(git_dir: Path) -> Path:
    commondir = git_dir / "commondir"
    if commondir.is_file():
        target = Path(commondir.read_text(encoding="utf-8").strip())
        if not target.is_absolute():
            target = git_dir / target
        return target.resolve()
    return git_dir


def _ref_exists(common_dir: Path, ref: str) -> bool:
    if (common_dir / ref).is_file():
        return True
    packed = common_dir / "packed-refs"
    if not packed.is_file():
        return False
    for line in packed.read_text(encoding="utf-8").splitlines():
        if line.startswith(("#", "^")):
            continue
        parts = line.split()
        if len(parts) == 2 and parts[1] == ref:
            return True
    return False


def get_current_branch(path: str | Path | None = None) -> str | None:
    """Name of the branch HEAD points at.

    Returns None outside a repository, with a detached HEAD, in a repository
    without commits on the current branch, or when the repository cannot be read.
    """
    git_dir = find_git_dir(path)
    if git_dir is None:
        return None
    try:
        head = (git_dir / "HEAD").read_text(encoding="utf-8").strip()
        if not head.startswith("ref:"):
            return None
        ref = head[len("ref:"):].strip()
        if not ref.startswith(_HEADS):
            return None
        if not _ref_exists(_common_dir(git_dir), ref):
            return None
    except (OSError, UnicodeDecodeError):
        return None
    branch = ref[len(_HEADS):]
    return branch or None
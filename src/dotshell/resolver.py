"""readlink subprocess wrapper: probe for a canonicalization tool once, then reuse it."""

from __future__ import annotations

import enum
import os
import shutil
import subprocess
from collections.abc import Sequence

# Tried in this order; the first one on PATH wins for the rest of the process.
CANDIDATES = ("gnureadlink", "greadlink", "readlink")

UNAVAILABLE_EXIT_CODE = 15


class ResolverState(enum.Enum):
    UNRESOLVED = "unresolved"
    RESOLVED = "resolved"
    UNAVAILABLE = "unavailable"


class ResolverError(Exception):
    """Base class for path resolution failures."""

    returncode = 1


class ToolUnavailable(ResolverError):
    """None of the canonicalization tools is installed."""

    returncode = UNAVAILABLE_EXIT_CODE

    def __init__(self, candidates: Sequence[str] = CANDIDATES) -> None:
        self.candidates = tuple(candidates)
        super().__init__(
            f"no path canonicalization tool found (tried: {', '.join(self.candidates)})"
        )


class ResolveFailed(ResolverError):
    """The tool ran but exited non-zero."""

    def __init__(self, tool: str, returncode: int, stderr: str = "") -> None:
        self.tool = tool
        self.returncode = returncode
        self.stderr = stderr
        detail = stderr.strip() or f"exit status {returncode}"
        super().__init__(f"{tool} failed: {detail}")


class PathResolver:
    """Canonicalize paths with whichever readlink flavour is installed.

    The probe happens on the first call that has something to resolve. After
    that the state never changes: either the chosen tool is reused, or every
    call raises ToolUnavailable without looking again.

    search_path: passed to shutil.which; None means the process PATH.
    """

    def __init__(
        self,
        candidates: Sequence[str] = CANDIDATES,
        search_path: str | None = None,
    ) -> None:
        self.candidates = tuple(candidates)
        self.search_path = search_path
        self.state = ResolverState.UNRESOLVED
        self.tool: str | None = None

    def _probe(self) -> str:
        """Return the memoized tool, probing the candidates on first use."""
        if self.state is ResolverState.UNRESOLVED:
            for name in self.candidates:
                found = shutil.which(name, path=self.search_path)
                if found:
                    self.tool = found
                    self.state = ResolverState.RESOLVED
                    break
            else:
                self.state = ResolverState.UNAVAILABLE

        if self.state is ResolverState.UNAVAILABLE:
            raise ToolUnavailable(self.candidates)
        return self.tool

    def resolve(self, paths: Sequence[str]) -> list[str]:
        """Return the absolute, symlink-free form of each path, in input order."""
        paths = list(paths)
        if not paths:
            return []

        tool = self._probe()
        # "--" keeps paths starting with a dash from being read as options
        cmd = [tool, "-f", "--", *paths]
        try:
            proc = subprocess.run(cmd, capture_output=True)
        except OSError as exc:
            # tool removed or made non-executable after the probe
            raise ResolveFailed(tool, 127, str(exc)) from exc
        if proc.returncode != 0:
            raise ResolveFailed(
                tool, proc.returncode, proc.stderr.decode(errors="replace")
            )

        # Filenames are bytes and may hold any line break except "\n"
        out = proc.stdout
        if out.endswith(b"\n"):
            out = out[:-1]
        resolved = [os.fsdecode(line) for line in out.split(b"\n")] if out else []
        if len(resolved) != len(paths):
            raise ResolveFailed(
                tool, 1, f"expected {len(paths)} path(s), got {len(resolved)}"
            )
        return resolved


_resolver: PathResolver | None = None


def get_resolver() -> PathResolver:
    """Return the process-wide resolver, creating it on first use."""
    global _resolver
    if _resolver is None:
        _resolver = PathResolver()
    return _resolver


def reset_resolver() -> None:
    """Forget the process-wide resolver so the next call probes again."""
    global _resolver
    _resolver = None


def resolve(paths: Sequence[str]) -> list[str]:
    """Canonicalize paths with the process-wide resolver."""
    return get_resolver().resolve(paths)

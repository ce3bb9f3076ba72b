"""Thin wrapper around the ``git`` command line.

Every call is logged at debug level and run with captured text output in the
repository directory. Tests replace ``subprocess.run`` (or the whole runner)
to avoid touching a real repository.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from storefront.exceptions import ExternalServiceError

logger = logging.getLogger(__name__)


class GitRunner:
    """Run git commands inside ``repo_dir``.

    Parameters
    ----------
    repo_dir : Path
        Working tree of the repository the sites are published from.
    """

    def __init__(self, repo_dir: Path) -> None:
        self.repo_dir = Path(repo_dir)

    def run(self, *args: str, check: bool = True) -> subprocess.CompletedProcess[str]:
        """Run ``git <args>`` and return the completed process.

        Raises
        ------
        ExternalServiceError
            If the command exits non-zero and ``check`` is true, or git cannot
            be started at all.
        """
        cmd = ["git", *args]
        logger.debug("$ %s", " ".join(cmd))
        try:
            result = subprocess.run(
                cmd, cwd=self.repo_dir, capture_output=True, text=True
            )
        except OSError as exc:
            raise ExternalServiceError(
                f"Cannot run git: {exc}", context={"command": cmd}, transient=False
            ) from exc
        if check and result.returncode != 0:
            raise ExternalServiceError(
                f"git {' '.join(args)} failed: {(result.stderr or result.stdout).strip()}",
                context={"command": cmd, "returncode": result.returncode},
                transient=False,
            )
        return result

    def output(self, *args: str, check: bool = True) -> str:
        """Return the stripped stdout of ``git <args>``."""
        return (self.run(*args, check=check).stdout or "").strip()

    def current_branch(self) -> str:
        return self.output("rev-parse", "--abbrev-ref", "HEAD")

    def branch_exists(self, branch: str, remote: str) -> bool:
        """True when ``branch`` exists locally or on ``remote``."""
        local = self.run(
            "show-ref", "--verify", "--quiet", f"refs/heads/{branch}", check=False
        )
        if local.returncode == 0:
            return True
        return bool(self.output("ls-remote", "--heads", remote, branch, check=False))

"""Publish generated sites, one git branch per site.

For each directory under the output root the deployer switches the repository
to the site's branch (creating an orphan branch on first publish), replaces
the working tree with the site files, commits and pushes. The site is copied
to a temporary directory before any git command runs, since clearing the
working tree could otherwise remove tracked output files.

Per-site failures are recorded in the returned ``DeployResult`` list and do
not stop the remaining sites. The repository is always returned to the branch
it started on.
"""

from __future__ import annotations

import logging
import shutil
import tempfile
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Mapping

from storefront.config import (
    DEFAULT_GIT_REMOTE,
    DEPLOY_GITIGNORE,
    DEPLOY_PROTECTED_NAMES,
    FALLBACK_BRANCH,
)
from storefront.exceptions import AppError, UserInputError

from .git import GitRunner

logger = logging.getLogger(__name__)


@dataclass
class DeployResult:
    """Outcome of publishing one site."""

    site: str
    branch: str
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def branch_for_site(domain_slug: str, overrides: Mapping[str, str] | None = None) -> str:
    """Return the branch a site is published to.

    >>> branch_for_site("selfcleaninglitterbox-shop", {"selfcleaninglitterbox-shop": "litter"})
    'litter'
    >>> branch_for_site("example-shop")
    'example-shop'
    """
    return (overrides or {}).get(domain_slug) or domain_slug


def discover_site_dirs(output_dir: Path) -> list[Path]:
    """Return the generated site directories under ``output_dir``, sorted by name.

    Raises
    ------
    UserInputError
        If ``output_dir`` is missing or holds no site directories.
    """
    output_dir = Path(output_dir)
    if not output_dir.is_dir():
        raise UserInputError(
            f"No output directory found at {output_dir}. Generate the sites first."
        )
    sites = sorted(p for p in output_dir.iterdir() if p.is_dir())
    if not sites:
        raise UserInputError(
            f"No generated sites found in {output_dir}. Generate the sites first."
        )
    return sites


def clear_working_tree(repo_dir: Path, protected: set[str]) -> None:
    """Delete every top-level entry of ``repo_dir`` not named in ``protected``."""
    for entry in repo_dir.iterdir():
        if entry.name in protected:
            continue
        if entry.is_dir() and not entry.is_symlink():
            shutil.rmtree(entry)
        else:
            entry.unlink()


class SiteDeployer:
    """Publish every site under ``output_dir`` from the repository at ``repo_dir``.

    Parameters
    ----------
    repo_dir : Path
        Repository working tree; its contents are replaced per branch.
    output_dir : Path
        Directory holding one generated site per subdirectory.
    remote : str, optional
        Remote to push to.
    branch_overrides : Mapping[str, str] | None, optional
        Site directory name to branch name overrides.
    dry_run : bool, optional
        Commit locally but skip ``git push``.
    git : GitRunner | None, optional
        Injected runner, mainly for tests.
    """

    def __init__(
        self,
        repo_dir: Path,
        output_dir: Path,
        remote: str = DEFAULT_GIT_REMOTE,
        branch_overrides: Mapping[str, str] | None = None,
        dry_run: bool = False,
        git: GitRunner | None = None,
    ) -> None:
        self.repo_dir = Path(repo_dir)
        self.output_dir = Path(output_dir)
        self.remote = remote
        self.branch_overrides = dict(branch_overrides or {})
        self.dry_run = dry_run
        self.git = git or GitRunner(self.repo_dir)

    @property
    def protected_names(self) -> set[str]:
        names = set(DEPLOY_PROTECTED_NAMES)
        try:
            # Keep the output dir alive when it lives inside the repository
            relative = self.output_dir.resolve().relative_to(self.repo_dir.resolve())
        except ValueError:
            return names
        if relative.parts:
            names.add(relative.parts[0])
        return names

    def checkout_branch(self, branch: str) -> None:
        """Switch to ``branch``, creating an empty orphan branch when it does not exist."""
        if self.git.branch_exists(branch, self.remote):
            self.git.run("checkout", branch)
            return
        self.git.run("checkout", "--orphan", branch)
        self.git.run("rm", "-rf", "--quiet", ".", check=False)

    def deploy_site(self, site_dir: Path) -> DeployResult:
        """Publish one site; errors are returned in the result, not raised."""
        branch = branch_for_site(site_dir.name, self.branch_overrides)
        result = DeployResult(site=site_dir.name, branch=branch)
        logger.info(f"Deploying {site_dir.name} -> branch {branch}")
        with tempfile.TemporaryDirectory(prefix=f"deploy-{site_dir.name}-") as tmp:
            staged = Path(tmp) / "site"
            try:
                shutil.copytree(site_dir, staged)
                self.checkout_branch(branch)
                if self.git.output("ls-files", check=False):
                    self.git.run("rm", "-rf", "--quiet", ".", check=False)
                clear_working_tree(self.repo_dir, self.protected_names)
                shutil.copytree(staged, self.repo_dir, dirs_exist_ok=True)
                (self.repo_dir / ".gitignore").write_text(DEPLOY_GITIGNORE, encoding="utf-8")
                self.git.run("add", "-A")
                stamp = datetime.now(timezone.utc).isoformat(timespec="seconds")
                self.git.run("commit", "-m", f"Deploy {site_dir.name} - {stamp}", "--allow-empty")
                if self.dry_run:
                    logger.info(f"Dry run: not pushing {branch}")
                else:
                    self.git.run("push", self.remote, branch)
            except (AppError, OSError, shutil.Error) as exc:
                logger.error(f"Failed to deploy {site_dir.name}: {exc}")
                result.error = str(exc)
                return result
        logger.info(f"Published {site_dir.name} to {branch}")
        return result

    def restore_branch(self, branch: str) -> None:
        """Return to ``branch``, falling back to the default branch."""
        logger.info(f"Returning to {branch}")
        try:
            self.git.run("checkout", branch)
        except AppError as exc:
            logger.warning(f"Cannot return to {branch} ({exc}); checking out {FALLBACK_BRANCH}")
            self.git.run("checkout", FALLBACK_BRANCH)

    def deploy_all(self) -> list[DeployResult]:
        """Publish every discovered site and return one result per site.

        Raises
        ------
        UserInputError
            If there are no sites to publish.
        ExternalServiceError
            If the current branch cannot be determined.
        """
        sites = discover_site_dirs(self.output_dir)
        original = self.git.current_branch()
        logger.info(f"Deploying {len(sites)} site(s); current branch: {original}")
        results: list[DeployResult] = []
        try:
            for site_dir in sites:
                results.append(self.deploy_site(site_dir))
        finally:
            self.restore_branch(original)
        return results

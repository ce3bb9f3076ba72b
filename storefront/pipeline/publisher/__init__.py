"""Publisher pipeline package: one git branch per generated site."""

from .deployer import (
    DeployResult,
    SiteDeployer,
    branch_for_site,
    clear_working_tree,
    discover_site_dirs,
)
from .git import GitRunner

__all__ = [
    "DeployResult",
    "GitRunner",
    "SiteDeployer",
    "branch_for_site",
    "clear_working_tree",
    "discover_site_dirs",
]

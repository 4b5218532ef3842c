"""
common.py: Install-root resolution shared by the patcher and its CLI.
"""
import os
from pathlib import Path

from .bannerlib import PatcherConfig


def resolve_install_root(config: PatcherConfig, explicit=None, environ=None, cwd=None) -> Path:
    """Return the directory the targets are resolved against.

    An explicit path wins, then the install-root environment variable (used
    verbatim when non-empty), then <cwd>/<default_install_dir>.
    """
    if explicit:
        return Path(explicit)
    if environ is None:
        environ = os.environ
    override = environ.get(config.install_root_env)
    if override:
        return Path(override)
    if cwd is None:
        cwd = Path.cwd()
    return Path(cwd) / config.default_install_dir

#!/usr/bin/env python3
"""
suppress_dev_warning.py: Guard the clusterio development-branch banner behind
CLUSTERIO_SUPPRESS_DEV_WARNING in the installed controller, ctl and host bundles.

Usage:
    python3 suppress_dev_warning.py [--install-root DIR] [--config FILE] [--dry-run] [--strict]

The install root defaults to $NODE_PATH, falling back to ./node_modules.
"""
import sys
from pathlib import Path

import click

from banner_utils.bannerlib import PatchState, load_config
from banner_utils.common import resolve_install_root
from banner_utils.patcher import patch_all


@click.command()
@click.option('--install-root', type=click.Path(file_okay=False, path_type=Path),
              help='Directory containing the installed packages; overrides $NODE_PATH.')
@click.option('--config', 'config_path', type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help='TOML file overriding the targets, banner or environment variable names.')
@click.option('--dry-run', is_flag=True,
              help='Report what would be patched without writing any files.')
@click.option('--strict', is_flag=True,
              help='Exit non-zero when a target does not contain the expected banner.')
def main(install_root, config_path, dry_run, strict):
    """Wrap the development warning banner in a runtime environment check."""
    try:
        config = load_config(config_path)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint='--config')

    root = resolve_install_root(config, explicit=install_root)
    results = patch_all(root, config, dry_run=dry_run)

    failed = any(r.error is not None for r in results)
    if strict and any(r.state is PatchState.UNRECOGNIZED for r in results):
        failed = True
    if failed:
        sys.exit(1)


if __name__ == '__main__':
    main()

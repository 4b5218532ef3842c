"""
Apply the banner guard to each installed target file.
"""
import io
from pathlib import Path

import click
from pydantic import BaseModel

from .bannerlib import PatcherConfig, PatchState, patch_contents


class TargetResult(BaseModel):
    target: str
    state: PatchState | None = None
    patched: bool = False
    error: str | None = None


def patch_target(install_root: Path, target: str, config: PatcherConfig, dry_run: bool = False) -> TargetResult:
    path = Path(install_root) / target
    if not path.exists():
        return TargetResult(target=target, state=PatchState.ABSENT)

    try:
        # newline='' keeps CRLF and every byte outside the fragment intact
        with io.open(path, 'r', encoding='utf-8', newline='') as f:
            contents = f.read()
    except (OSError, UnicodeDecodeError) as e:
        return TargetResult(target=target, error=str(e))

    state, updated = patch_contents(contents, config.original, config.wrapped, config.marker)
    if updated is None or dry_run:
        return TargetResult(target=target, state=state)

    try:
        with io.open(path, 'w', encoding='utf-8', newline='') as f:
            f.write(updated)
    except OSError as e:
        return TargetResult(target=target, state=state, error=str(e))
    return TargetResult(target=target, state=state, patched=True)


def report(result: TargetResult, echo=click.echo) -> None:
    """Emit the single status line for *result*."""
    target = result.target
    if result.error is not None:
        echo(f"ERROR: Unable to patch {target}: {result.error}", err=True)
    elif result.state is PatchState.ABSENT:
        echo(f"Skipping {target} (not installed)")
    elif result.state is PatchState.ALREADY_PATCHED:
        echo(f"Already patched: {target}")
    elif result.state is PatchState.UNRECOGNIZED:
        echo(f"WARNING: Unable to locate banner in {target} - skipping", err=True)
    elif result.patched:
        echo(f"Patched: {target}")
    else:
        echo(f"Would patch: {target}")


def patch_all(install_root: Path, config: PatcherConfig, dry_run: bool = False, echo=click.echo) -> list[TargetResult]:
    """Patch every configured target in order, reporting each as it is processed."""
    results: list[TargetResult] = []
    for target in config.targets:
        result = patch_target(install_root, target, config, dry_run=dry_run)
        report(result, echo=echo)
        results.append(result)
    return results

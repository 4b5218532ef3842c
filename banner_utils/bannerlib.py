"""
Matching logic for the clusterio development-branch warning banner.

Everything here works on file contents as strings; reading and writing the
installed package files happens in patcher.py.
"""
import re
from enum import Enum
from pathlib import Path, PurePosixPath

import toml
from pydantic import BaseModel, Field, ValidationError, field_validator

ASCII_BANNER = (
    "+==========================================================+\n"
    "I WARNING:  This is the development branch for the 2.0     I\n"
    "I           version of clusterio.  Expect things to break. I\n"
    "+==========================================================+"
)

DEFAULT_TARGETS = [
    "@clusterio/controller/dist/node/controller.js",
    "@clusterio/ctl/dist/node/ctl.js",
    "@clusterio/host/dist/node/host.js",
]

ENV_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class PatchState(str, Enum):
    ABSENT = "absent"
    ALREADY_PATCHED = "already patched"
    UNRECOGNIZED = "unrecognized"
    PATCHABLE = "patchable"


class PatcherConfig(BaseModel):
    install_root_env: str = Field(default="NODE_PATH")
    default_install_dir: str = Field(default="node_modules")
    guard_env: str = Field(default="CLUSTERIO_SUPPRESS_DEV_WARNING")
    banner: str = Field(default=ASCII_BANNER)
    targets: list[str] = Field(default_factory=lambda: list(DEFAULT_TARGETS))

    @field_validator("install_root_env", "guard_env")
    @classmethod
    def _env_name(cls, v: str) -> str:
        if not ENV_NAME_RE.match(v):
            raise ValueError(f"not a valid environment variable name: {v!r}")
        return v

    @field_validator("targets")
    @classmethod
    def _relative_targets(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("targets must not be empty")
        for target in v:
            if not target or PurePosixPath(target).is_absolute() or Path(target).is_absolute():
                raise ValueError(f"target must be a relative path: {target!r}")
            if ".." in PurePosixPath(target.replace("\\", "/")).parts:
                raise ValueError(f"target must stay inside the install root: {target!r}")
        return v

    @property
    def original(self) -> str:
        return original_fragment(self.banner)

    @property
    def wrapped(self) -> str:
        return wrapped_fragment(self.banner, self.guard_env)

    @property
    def marker(self) -> str:
        return self.guard_env


def original_fragment(banner: str) -> str:
    """Return the unguarded banner statement as it appears in the bundled entry points."""
    return "    console.warn(`\n" + banner + "\n`);\n"


def wrapped_fragment(banner: str, guard_env: str) -> str:
    """Return the banner statement wrapped in a check on *guard_env*."""
    return (
        f"    if (!process.env.{guard_env}) {{\n"
        "        console.warn(`\n" + banner + "\n`);\n"
        "    }\n"
    )


def classify(contents: str, original: str, marker: str) -> PatchState:
    """Classify file contents; the marker check comes first so re-runs are no-ops."""
    if marker in contents:
        return PatchState.ALREADY_PATCHED
    if original not in contents:
        return PatchState.UNRECOGNIZED
    return PatchState.PATCHABLE


def patch_contents(contents: str, original: str, wrapped: str, marker: str) -> tuple[PatchState, str | None]:
    """Return the classification and, when patchable, the rewritten contents."""
    state = classify(contents, original, marker)
    if state is not PatchState.PATCHABLE:
        return state, None
    return state, contents.replace(original, wrapped, 1)


def load_config(path: Path | None = None) -> PatcherConfig:
    """Load a PatcherConfig, overriding the defaults with keys from a TOML file."""
    if path is None:
        return PatcherConfig()
    try:
        data = toml.loads(path.read_text(encoding="utf-8"))
    except (OSError, toml.TomlDecodeError) as e:
        raise ValueError(f"Unable to read config {path}: {e}") from e
    try:
        return PatcherConfig(**data)
    except ValidationError as e:
        raise ValueError(f"Invalid config {path}: {e}") from e

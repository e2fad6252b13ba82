"""Run configuration and YAML config file loading.

Handles:
- Loading a config file (YAML mapping).
- Merging CLI options over config file values over defaults.
- Validating the final configuration before anything is built.

Config file format::

    repo_url: "https://github.com/trynova/nova"
    repo_dir: "nova"
    build_dir: "nova-builds"
    benchmarks_dir: "benchmarks"
    artifact_prefix: "nova-"
    workload_suffix: ".js"
    run_verb: "eval"
    build_command: ["cargo", "build", "--release", "-p", "nova_cli"]
    built_binary: "target/release/nova_cli"
    fetch: true

Every key is optional.
"""

from __future__ import annotations

import shlex
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

_PATH_FIELDS = {"repo_dir", "build_dir", "benchmarks_dir", "built_binary"}


@dataclass
class RunConfig:
    """Resolved configuration for a benchmark run."""

    # Source checkout
    repo_url: str = "https://github.com/trynova/nova"
    repo_dir: Path = field(default_factory=lambda: Path("nova"))
    fetch: bool = True

    # Building
    build_dir: Path = field(default_factory=lambda: Path("nova-builds"))
    artifact_prefix: str = "nova-"
    build_command: list[str] = field(
        default_factory=lambda: ["cargo", "build", "--release", "-p", "nova_cli"]
    )
    built_binary: Path = field(default_factory=lambda: Path("target/release/nova_cli"))

    # Workloads
    benchmarks_dir: Path = field(default_factory=lambda: Path("benchmarks"))
    workload_suffix: str = ".js"
    run_verb: str = "eval"


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


@dataclass
class ValidationError:
    """A single configuration validation error."""

    field: str
    message: str
    severity: str = "error"  # "error" or "warning"


def validate_config(
    config: RunConfig,
    revisions: list[str] | None = None,
) -> list[ValidationError]:
    """Validate *config* (and the requested *revisions*, if given).

    Returns a list of validation errors. Empty list means valid.
    """
    errors: list[ValidationError] = []

    if not config.build_command:
        errors.append(ValidationError("build_command", "Build command must not be empty."))
    if not config.artifact_prefix:
        errors.append(
            ValidationError(
                "artifact_prefix",
                "Artifact prefix must not be empty; artifacts would be "
                "indistinguishable from other files in the build directory.",
            )
        )
    if not config.run_verb:
        errors.append(ValidationError("run_verb", "Run verb must not be empty."))
    if not config.workload_suffix:
        errors.append(
            ValidationError(
                "workload_suffix",
                "No workload suffix set; every file in the benchmarks directory will be run.",
                severity="warning",
            )
        )
    if config.built_binary.is_absolute():
        errors.append(
            ValidationError(
                "built_binary", "built_binary must be relative to the repository directory."
            )
        )

    for rev in revisions or []:
        if not rev.strip():
            errors.append(ValidationError("revisions", "Revision identifiers must not be blank."))
        elif rev.startswith("-"):
            errors.append(
                ValidationError("revisions", f"Revision {rev!r} looks like an option.")
            )
        elif ".." in Path(rev).parts:
            errors.append(
                ValidationError(
                    "revisions", f"Revision {rev!r} would place its artifact outside build_dir."
                )
            )

    if revisions is not None and len(set(revisions)) != len(revisions):
        errors.append(
            ValidationError(
                "revisions",
                "Duplicate revisions given; each is benchmarked only once.",
                severity="warning",
            )
        )

    return errors


# ---------------------------------------------------------------------------
# Config file loading
# ---------------------------------------------------------------------------


def load_config(config_path: Path) -> dict[str, Any]:
    """Load a config file and return the parsed mapping.

    An empty file is treated as an empty mapping.

    Raises:
        FileNotFoundError: If *config_path* does not exist.
        ValueError: If the file is not a YAML mapping.
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Config must be a YAML mapping, got {type(data).__name__}")
    return data


def config_from_mapping(
    data: dict[str, Any],
    *,
    cli_overrides: dict[str, Any] | None = None,
) -> RunConfig:
    """Build a RunConfig from a parsed config mapping.

    CLI overrides whose value is not None take precedence over the
    mapping. ``build_command`` may be given as a list or as a single
    shell-style string.

    Raises:
        ValueError: On unknown keys or values of the wrong type.
    """
    known = {f.name for f in fields(RunConfig)}
    merged: dict[str, Any] = dict(data)
    for key, value in (cli_overrides or {}).items():
        if value is not None:
            merged[key] = value

    unknown = sorted(set(merged) - known)
    if unknown:
        raise ValueError(f"Unknown config key(s): {', '.join(unknown)}")

    kwargs: dict[str, Any] = {}
    for key, value in merged.items():
        if key in _PATH_FIELDS:
            if not isinstance(value, (str, Path)):
                raise ValueError(f"{key} must be a path, got {type(value).__name__}")
            kwargs[key] = Path(value)
        elif key == "build_command":
            kwargs[key] = _parse_command(value)
        elif key == "fetch":
            if not isinstance(value, bool):
                raise ValueError(f"fetch must be true or false, got {value!r}")
            kwargs[key] = value
        else:
            if not isinstance(value, str):
                raise ValueError(f"{key} must be a string, got {type(value).__name__}")
            kwargs[key] = value

    return RunConfig(**kwargs)


def _parse_command(value: Any) -> list[str]:
    """Accept a command as a list of strings or a shell-style string."""
    if isinstance(value, str):
        return shlex.split(value)
    if isinstance(value, list) and all(isinstance(v, str) for v in value):
        return list(value)
    raise ValueError("build_command must be a string or a list of strings")

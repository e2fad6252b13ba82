"""Command-line interface for revbench.

Provides the main CLI entry point with ``run``, ``workloads`` and
``builds`` subcommands.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import click

from revbench import __version__
from revbench.config import RunConfig, config_from_mapping, load_config, validate_config
from revbench.logging import get_logger, setup_logging

log = get_logger("cli")


def _config_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Options shared by every command that needs a RunConfig."""
    options = [
        click.option(
            "--config",
            "config_path",
            type=click.Path(exists=True, dir_okay=False, path_type=Path),
            default=None,
            help="YAML config file.",
        ),
        click.option("--repo-url", default=None, help="Repository to clone when building."),
        click.option(
            "--repo-dir",
            type=click.Path(file_okay=False, path_type=Path),
            default=None,
            help="Local checkout used for builds.",
        ),
        click.option(
            "--build-dir",
            type=click.Path(file_okay=False, path_type=Path),
            default=None,
            help="Directory holding cached build artifacts.",
        ),
        click.option(
            "--benchmarks-dir",
            type=click.Path(file_okay=False, path_type=Path),
            default=None,
            help="Directory containing benchmark workloads.",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _resolve_config(config_path: Path | None, **overrides: Any) -> RunConfig:
    data = load_config(config_path) if config_path is not None else {}
    return config_from_mapping(data, cli_overrides=overrides)


@click.group()
@click.version_option(version=__version__)
def main() -> None:
    """revbench — Compare benchmark timings across revisions of a binary."""


# ---------------------------------------------------------------------------
# run
# ---------------------------------------------------------------------------


@main.command("run")
@click.argument("revisions", nargs=-1)
@_config_options
@click.option(
    "--fetch/--no-fetch",
    default=None,
    help="Fetch from origin before building (default: fetch).",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "markdown", "json"]),
    default="text",
    show_default=True,
    help="Report format.",
)
@click.option("-v", "--verbose", is_flag=True, help="Show detailed output.")
@click.option("-q", "--quiet", is_flag=True, help="Only show warnings and errors.")
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Also write a DEBUG log to this file.",
)
def run_cmd(  # noqa: PLR0913
    revisions: tuple[str, ...],
    config_path: Path | None,
    repo_url: str | None,
    repo_dir: Path | None,
    build_dir: Path | None,
    benchmarks_dir: Path | None,
    fetch: bool | None,
    output_format: str,
    verbose: bool,
    quiet: bool,
    log_file: Path | None,
) -> None:
    """Benchmark REVISIONS and print a per-revision report.

    Revisions are built (or taken from the build directory) in the
    order given; the report always lists them in lexical order.

    \b
    Examples:
        revbench run 3f2a9c1 main
        revbench run v0.1.0 v0.2.0 --no-fetch --format markdown
    """
    from revbench.bench.build import CargoBuilder
    from revbench.bench.cache import ArtifactCache
    from revbench.bench.discovery import discover_workloads
    from revbench.bench.errors import BenchError
    from revbench.bench.executor import SubprocessExecutor
    from revbench.bench.report import (
        build_report,
        format_report_markdown,
        format_report_text,
        report_to_dict,
    )
    from revbench.bench.runner import BenchRunner

    if not revisions:
        raise click.UsageError("No revisions provided.")

    setup_logging(verbose=verbose, quiet=quiet, log_file=log_file)

    try:
        config = _resolve_config(
            config_path,
            repo_url=repo_url,
            repo_dir=repo_dir,
            build_dir=build_dir,
            benchmarks_dir=benchmarks_dir,
            fetch=fetch,
        )
        errors = validate_config(config, list(revisions))
        for w in (e for e in errors if e.severity == "warning"):
            log.warning("Config warning: %s: %s", w.field, w.message)
        fatal = [e for e in errors if e.severity == "error"]
        if fatal:
            messages = [f"  {e.field}: {e.message}" for e in fatal]
            raise ValueError("Invalid configuration:\n" + "\n".join(messages))

        workloads = discover_workloads(config.benchmarks_dir, config.workload_suffix)
        if not workloads:
            log.warning("No workloads found in %s", config.benchmarks_dir)

        cache = ArtifactCache(config.build_dir, CargoBuilder(config), prefix=config.artifact_prefix)
        runner = BenchRunner(cache, SubprocessExecutor(verb=config.run_verb))
        results = runner.run(list(revisions), workloads)
    except (BenchError, ValueError, FileNotFoundError) as exc:
        click.echo(f"Error: {exc}", err=True)
        raise SystemExit(1) from exc
    except KeyboardInterrupt:
        click.echo("\nBenchmark interrupted.", err=True)
        raise SystemExit(130)  # noqa: B904

    report = build_report(results)
    if output_format == "json":
        click.echo(json.dumps(report_to_dict(report), indent=2))
    elif output_format == "markdown":
        click.echo(format_report_markdown(report))
    else:
        click.echo(format_report_text(report))


# ---------------------------------------------------------------------------
# workloads
# ---------------------------------------------------------------------------


@main.command("workloads")
@_config_options
def workloads_cmd(
    config_path: Path | None,
    repo_url: str | None,
    repo_dir: Path | None,
    build_dir: Path | None,
    benchmarks_dir: Path | None,
) -> None:
    """List the benchmark workloads that ``run`` would execute."""
    from revbench.bench.discovery import discover_workloads

    try:
        config = _resolve_config(
            config_path,
            repo_url=repo_url,
            repo_dir=repo_dir,
            build_dir=build_dir,
            benchmarks_dir=benchmarks_dir,
        )
        found = discover_workloads(config.benchmarks_dir, config.workload_suffix)
    except (ValueError, FileNotFoundError) as exc:
        raise click.ClickException(str(exc)) from exc

    if not found:
        click.echo(f"No workloads in {config.benchmarks_dir}.")
        return
    for path in found:
        click.echo(str(path))


# ---------------------------------------------------------------------------
# builds
# ---------------------------------------------------------------------------


@main.command("builds")
@_config_options
def builds_cmd(
    config_path: Path | None,
    repo_url: str | None,
    repo_dir: Path | None,
    build_dir: Path | None,
    benchmarks_dir: Path | None,
) -> None:
    """List cached build artifacts."""
    from revbench.bench.build import CargoBuilder
    from revbench.bench.cache import ArtifactCache

    try:
        config = _resolve_config(
            config_path,
            repo_url=repo_url,
            repo_dir=repo_dir,
            build_dir=build_dir,
            benchmarks_dir=benchmarks_dir,
        )
    except (ValueError, FileNotFoundError) as exc:
        raise click.ClickException(str(exc)) from exc

    cache = ArtifactCache(config.build_dir, CargoBuilder(config), prefix=config.artifact_prefix)
    artifacts = cache.artifacts()
    if not artifacts:
        click.echo(f"No cached builds in {config.build_dir}.")
        return
    for artifact in artifacts:
        click.echo(f"{artifact.revision}  {artifact.path}")

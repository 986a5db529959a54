"""CLI entry points for agentsync."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click
import structlog

from agentsync.config import AgentSyncConfig
from agentsync.errors import AgentSyncError
from agentsync.models import CATEGORY_VOCABULARY, FRAMEWORK_VOCABULARY, FrameworkMapping


def _configure_logging(verbose: bool) -> None:
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.DEBUG if verbose else logging.WARNING
        ),
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
    )


def _get_config() -> AgentSyncConfig:
    return AgentSyncConfig()


def _resolve_root(config: AgentSyncConfig, root: Path | None) -> Path:
    return root.expanduser().resolve() if root else config.resolved_root()


def _load_mappings(config: AgentSyncConfig, mappings_file: Path | None) -> tuple[FrameworkMapping, ...]:
    from agentsync.mappings import load_mappings

    path = mappings_file or config.resolved_mappings_file()
    try:
        return load_mappings(path)
    except AgentSyncError as exc:
        raise click.ClickException(str(exc)) from exc


root_option = click.option(
    "--root",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Project root holding library/ and packages/ (default: AGENTSYNC_ROOT_DIR or .).",
)
mappings_option = click.option(
    "--mappings",
    "mappings_file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="YAML file with a 'frameworks' list overriding the built-in mapping table.",
)


@click.group()
@click.option("--verbose", is_flag=True, help="Show debug logs on stderr.")
def main(verbose: bool) -> None:
    """agentsync: sync and validate framework agent definitions."""
    _configure_logging(verbose)


@main.command()
@root_option
@mappings_option
@click.option("--validate", "-v", "verify", is_flag=True, help="Re-scan targets after syncing.")
def sync(root: Path | None, mappings_file: Path | None, verify: bool) -> None:
    """Sync agent files from library/ into each framework package."""
    from agentsync.sync import sync_all, verify_targets

    config = _get_config()
    project_root = _resolve_root(config, root)
    mappings = _load_mappings(config, mappings_file)

    click.echo("Syncing agent files to packages...\n")
    try:
        result = sync_all(mappings, project_root, config.document_extension)
    except AgentSyncError as exc:
        raise click.ClickException(f"Sync failed: {exc}") from exc

    for entry in result.entries:
        mapping = entry.mapping
        if entry.skipped:
            click.echo(f"Skipping {mapping.name} (source directory not found: {mapping.source})")
        elif not entry.files:
            click.echo(f"No agent files found in {mapping.source}")
        else:
            click.echo(f"{mapping.name}: Synced {entry.count} agent(s)")
            for name in entry.files:
                click.echo(f"   - {name}")
        click.echo()

    click.echo(f"Agent sync complete! Total: {result.total} agent(s) synced")

    if verify:
        click.echo("\nValidating sync...\n")
        for status in verify_targets(mappings, project_root, config.document_extension):
            if status.exists:
                click.echo(f"{status.mapping.name}: {status.count} agent(s) in target")
            else:
                click.echo(f"{status.mapping.name}: Target directory not found")


@main.command()
@click.argument("patterns", nargs=-1)
@root_option
@click.option("--json", "as_json", is_flag=True, help="Print the report as JSON.")
@click.pass_context
def validate(ctx: click.Context, patterns: tuple[str, ...], root: Path | None, as_json: bool) -> None:
    """Validate agent frontmatter and content.

    PATTERNS are globs relative to the root (default: library/**/*.md and
    packages/*/agents/**/*.md). Exits 1 if any error was found.
    """
    from agentsync.report import format_report
    from agentsync.validator import AgentValidator

    config = _get_config()
    project_root = _resolve_root(config, root)
    validator = AgentValidator(
        project_root,
        frameworks=FRAMEWORK_VOCABULARY.with_additions(config.extra_frameworks),
        min_body_chars=config.min_body_chars,
        required_sections=config.required_sections,
    )

    report = validator.validate_many(patterns or config.validate_patterns)

    if as_json:
        click.echo(json.dumps(report.to_dict(), indent=2))
    else:
        for pattern in report.unmatched_patterns:
            click.echo(f"No files found matching pattern: {pattern}")
        click.echo(format_report(report))

    if not report.passed:
        ctx.exit(1)


@main.command()
@mappings_option
def frameworks(mappings_file: Path | None) -> None:
    """Show the framework mapping table."""
    config = _get_config()
    for mapping in _load_mappings(config, mappings_file):
        click.echo(f"{mapping.name:<12} {mapping.source} -> {mapping.target}")


_CATEGORY_CHOICES = [*CATEGORY_VOCABULARY.sorted_values(), "uncategorized"]


@main.command("list")
@root_option
@click.option(
    "--category",
    type=click.Choice(_CATEGORY_CHOICES),
    default=None,
    help="Only list agents in this category.",
)
def list_cmd(root: Path | None, category: str | None) -> None:
    """List available agents grouped by category."""
    from agentsync.catalog import list_agents_by_category

    config = _get_config()
    project_root = _resolve_root(config, root)
    grouped = list_agents_by_category(project_root, config.validate_patterns)
    if category:
        grouped = {category: grouped[category]}
    if not any(grouped.values()):
        click.echo("No agents found.")
        return
    for name, entries in grouped.items():
        if not entries:
            continue
        click.echo(f"{name} ({len(entries)}):")
        for entry in entries:
            frameworks_label = ", ".join(entry.frameworks) or "-"
            click.echo(f"  {entry.name:<32} {frameworks_label}  ({entry.path})")
            if entry.description:
                click.echo(f"      {entry.description}")


@main.command()
@click.argument("name")
@root_option
@click.option(
    "--category",
    type=click.Choice(_CATEGORY_CHOICES),
    default=None,
    help="Only look in this category.",
)
def show(name: str, root: Path | None, category: str | None) -> None:
    """Print one agent's location and body."""
    from agentsync.catalog import load_agent

    config = _get_config()
    project_root = _resolve_root(config, root)
    try:
        doc = load_agent(project_root, config.validate_patterns, name, category)
    except AgentSyncError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(f"# {doc.name} ({doc.path})")
    click.echo(doc.body.strip())

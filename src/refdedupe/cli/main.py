"""Command-line interface for refdedupe.

Provides CLI commands for finding and handling duplicate references.
"""

import dataclasses
import importlib.metadata
import sys
import time
from pathlib import Path
from typing import TYPE_CHECKING

import click

from refdedupe.models import DuplicatePair

if TYPE_CHECKING:
    from refdedupe.actions import ReviewAction
    from refdedupe.engine import DetectionConfig

__all__ = ["cli"]

try:
    __version__ = importlib.metadata.version("refdedupe")
except importlib.metadata.PackageNotFoundError:
    __version__ = "0.3.0"  # Fallback for development


def _parse_weight(value: str) -> tuple[str, float]:
    name, sep, number = value.partition("=")
    if not sep or not name.strip():
        raise click.BadParameter(f"expected FIELD=VALUE, got {value!r}", param_hint="--weight")
    try:
        return name.strip(), float(number)
    except ValueError:
        raise click.BadParameter(
            f"weight for {name.strip()!r} is not a number: {number!r}", param_hint="--weight"
        ) from None


def _build_config(
    config_path: str | None,
    threshold: float | None,
    exact_match: bool | None,
    fuzzy_title: bool | None,
    require_same_type: bool | None,
    weights: tuple[str, ...],
) -> "DetectionConfig":
    from refdedupe.engine import DetectionConfig, load_config
    from refdedupe.engine.config import weights_from_pairs

    config = load_config(config_path) if config_path else DetectionConfig()

    overrides = {
        "threshold": threshold,
        "use_exact_match": exact_match,
        "use_fuzzy_title": fuzzy_title,
        "require_same_type": require_same_type,
    }
    overrides = {key: value for key, value in overrides.items() if value is not None}
    if overrides:
        config = dataclasses.replace(config, **overrides)

    if weights:
        updates = weights_from_pairs([_parse_weight(w) for w in weights])
        config = config.with_weights(**updates)

    return config


def _prompt_review(position: int, total: int, pair: DuplicatePair) -> "ReviewAction":
    from refdedupe.actions import ReviewAction, format_record_info

    click.echo("")
    click.secho(f"Duplicate {position}/{total}", bold=True)
    click.echo(pair.reason)
    click.echo("\n--- ITEM 1 ---")
    click.echo(format_record_info(pair.record_a))
    click.echo("\n--- ITEM 2 ---")
    click.echo(format_record_info(pair.record_b))
    click.echo(
        "\nActions:\n"
        "1. Tag both items\n"
        "2. Trash Item 2 (keep Item 1)\n"
        "3. Trash Item 1 (keep Item 2)\n"
        "4. Skip this pair\n"
        "5. Stop reviewing"
    )
    try:
        choice = click.prompt(
            "Enter choice (1-5)",
            type=click.Choice([a.value for a in ReviewAction]),
            default=ReviewAction.SKIP.value,
            show_choices=False,
        )
    except click.Abort:
        return ReviewAction.STOP
    return ReviewAction(choice)


@click.group()
@click.version_option(version=__version__, prog_name="refdedupe")
def cli() -> None:
    """Find likely duplicate records in bibliographic reference collections.

    Use 'refdedupe COMMAND --help' for command-specific help.
    """


@cli.command()
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--threshold",
    "-t",
    type=float,
    default=None,
    help="Minimum weighted similarity to report a pair (default: 0.6)",
)
@click.option(
    "--exact-match/--no-exact-match",
    default=None,
    help="Report exact URL/DOI matches regardless of threshold (default: on)",
)
@click.option(
    "--fuzzy-title/--no-fuzzy-title",
    default=None,
    help="Blend edit distance into title similarity (default: on)",
)
@click.option(
    "--require-same-type/--allow-mixed-types",
    default=None,
    help="Only report weighted matches between items of the same type",
)
@click.option(
    "--weight",
    "-w",
    "weights",
    multiple=True,
    metavar="FIELD=VALUE",
    help="Override a field weight, e.g. -w title=0.5 (repeatable)",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="JSON config file with threshold, flags and weights",
)
@click.option(
    "--action",
    "-a",
    type=click.Choice(["summary", "tag", "review"]),
    default="summary",
    show_default=True,
    help="What to do with the pairs found",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write the modified collection here (.json or .ris; required for tag/review)",
)
@click.option(
    "--report",
    "-r",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write all pairs and run counters to a JSON report",
)
@click.option(
    "--log",
    "log_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Append JSONL audit events to this file",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output",
)
def detect(
    input_path: str,
    threshold: float | None,
    exact_match: bool | None,
    fuzzy_title: bool | None,
    require_same_type: bool | None,
    weights: tuple[str, ...],
    config_path: str | None,
    action: str,
    output: str | None,
    report: str | None,
    log_path: str | None,
    verbose: bool,
) -> None:
    """Find duplicate candidates in INPUT_PATH.

    INPUT_PATH is a Zotero JSON export or an RIS file. Format is
    auto-detected from file content.

    Examples
    --------
        refdedupe detect library.json
        refdedupe detect refs.ris -t 0.8 --no-fuzzy-title --report pairs.json
        refdedupe detect library.json -a tag -o tagged.json
        refdedupe detect library.json -a review -o reviewed.json -w title=0.5
    """
    from refdedupe.actions import ItemLibrary, review_pairs, summarize_pairs, tag_all_pairs
    from refdedupe.api import write_report
    from refdedupe.audit import AuditLogger, generate_run_id
    from refdedupe.engine import run_detection
    from refdedupe.parse import ingest_file
    from refdedupe.scoring import active_fields

    if action != "summary" and not output:
        raise click.UsageError(f"--output is required with --action {action}")

    logger = None
    started = time.perf_counter()

    try:
        config = _build_config(
            config_path, threshold, exact_match, fuzzy_title, require_same_type, weights
        )

        if log_path:
            logger = AuditLogger(generate_run_id(), Path(log_path))
            logger.run_started(sys.argv, config.to_dict())

        if verbose:
            click.echo(f"Loading: {input_path}", err=True)
            click.echo(f"  Threshold: {config.threshold}", err=True)
            weight_vector = config.weights or {}
            active = ", ".join(
                f"{name}={weight_vector[name]:.3f}" for name in active_fields(weight_vector)
            )
            click.echo(f"  Weights: {active or '(none)'}", err=True)

        ingested = ingest_file(input_path)
        items = list(ingested.items)

        if verbose:
            click.echo(f"Comparing {len(items)} items...", err=True)

        def report_progress(percent: int) -> None:
            click.echo(f"  {percent}%", err=True)

        result = run_detection(
            items,
            config,
            progress=report_progress if verbose else None,
            logger=logger,
        )

        for skipped in result.skipped:
            click.secho(f"Skipped {skipped.message}", fg="yellow", err=True)

        if report:
            write_report(result, report, config)
            if verbose:
                click.echo(f"Report written to: {report}", err=True)

        if not result.pairs:
            click.secho(f"No duplicates found among {len(items)} items.", fg="green")
        else:
            click.secho(
                f"Found {len(result.pairs)} potential duplicate pairs among {len(items)} items.",
                fg="green",
            )

        if result.pairs and action == "summary":
            click.echo("")
            click.echo(summarize_pairs(result.pairs))

        elif result.pairs:
            # Notes, attachments and trashed items are written back untouched
            library = ItemLibrary(ingested.all_items)

            if action == "tag":
                tagged = tag_all_pairs(result.pairs, library)
                click.echo(
                    f"Tagged {tagged.items_tagged} items in {tagged.pairs} duplicate pairs "
                    f"with tag: {tagged.tag}"
                )
            else:
                summary = review_pairs(result.pairs, library, _prompt_review, logger=logger)
                click.echo("\nReview complete!")
                click.echo(f"  Pairs reviewed: {summary.pairs_reviewed}")
                click.echo(f"  Items tagged: {summary.items_tagged}")
                click.echo(f"  Items trashed: {summary.items_trashed}")
                click.echo(f"  Pairs skipped: {summary.pairs_skipped}")
                for message in summary.errors:
                    click.secho(f"  Error: {message}", fg="red", err=True)

            library.save(output)
            click.secho(f"✓ Wrote {len(library)} items to {output}", fg="green")

        if logger:
            logger.run_finished(
                "cancelled" if result.cancelled else "success",
                time.perf_counter() - started,
                records_processed=result.records_compared,
            )

    except Exception as e:
        if logger:
            logger.error(type(e).__name__, str(e))
            logger.run_finished("failed", time.perf_counter() - started)
        click.secho(f"✗ Error: {e}", fg="red", err=True)
        if verbose:
            import traceback

            click.echo(traceback.format_exc(), err=True)
        sys.exit(1)

    finally:
        if logger:
            logger.close()


@cli.command()
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="JSON config file to resolve",
)
@click.option(
    "--weight",
    "-w",
    "weights",
    multiple=True,
    metavar="FIELD=VALUE",
    help="Override a field weight (repeatable)",
)
def weights(config_path: str | None, weights: tuple[str, ...]) -> None:
    """Show the normalized field weights a detection run would use."""
    try:
        config = _build_config(config_path, None, None, None, None, weights)
    except Exception as e:
        click.secho(f"✗ Error: {e}", fg="red", err=True)
        sys.exit(1)

    for name, value in (config.weights or {}).items():
        click.echo(f"{name:<12} {value:.4f}")
    click.echo(f"{'threshold':<12} {config.threshold:.4f}")


if __name__ == "__main__":
    cli()

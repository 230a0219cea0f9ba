"""CLI interface for tidytree."""

from __future__ import annotations

import json
import logging
import sys
import time
from pathlib import Path

import click

from tidytree.core.category_loader import default_registry
from tidytree.core.duplicates import FILE_TYPES
from tidytree.core.engine import TidyEngine
from tidytree.core.errors import RootUnavailableError
from tidytree.models.entries import ScanProgress
from tidytree.models.results import CleanReport, DeletionOutcome
from tidytree.utils import bytes_to_human, format_elapsed


def _setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def _progress_printer(as_json: bool):
    """Progress callback writing a single updating status line to stderr."""
    if as_json:
        return None

    def on_progress(progress: ScanProgress) -> None:
        if progress.total:
            line = f"  {progress.status} ({progress.fraction:.0%})"
        else:
            line = f"  {progress.status}"
        click.echo(f"\r{line:70s}", nl=False, err=True)

    return on_progress


def _end_progress(as_json: bool) -> None:
    if not as_json:
        click.echo(f"\r{'':72s}\r", nl=False, err=True)


def _fail(message: str) -> None:
    click.echo(click.style(message, fg="red"), err=True)
    sys.exit(1)


def _outcome_dict(outcome: DeletionOutcome) -> dict:
    return {"path": outcome.path, "deleted": outcome.deleted, "reason": outcome.reason}


def _print_clean_report(report: CleanReport, noun: str) -> None:
    for outcome in report.outcomes:
        if not outcome.deleted:
            click.echo(f"  {click.style('✗', fg='red')} {outcome.path} — {outcome.reason}")
    click.echo(
        f"\nRemoved {report.deleted_count} {noun}(s), freed "
        f"{click.style(bytes_to_human(report.freed_bytes), fg='green', bold=True)}"
    )
    if report.errors:
        click.echo(f"{len(report.errors)} removal(s) failed.")
    click.echo()


@click.group()
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug)")
def main(verbose: int) -> None:
    """tidytree — find empty folders, duplicate files and junk in a directory tree."""
    _setup_logging(verbose)


# ── empty ────────────────────────────────────────────────────────────────

@main.command()
@click.argument("root", type=click.Path(file_okay=False))
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def empty(root: str, yes: bool, as_json: bool) -> None:
    """Remove every folder below ROOT that contains no files."""
    engine, path = TidyEngine(), Path(root)

    if not yes and not as_json:
        click.confirm(f"Remove all empty folders below {path}?", abort=True)

    start = time.monotonic()
    try:
        report = engine.prune(path, on_progress=_progress_printer(as_json))
    except RootUnavailableError as e:
        _fail(str(e))
        return
    _end_progress(as_json)

    if as_json:
        data = {
            "status": "cancelled" if report.cancelled else "done",
            "outcomes": [_outcome_dict(o) for o in report.outcomes],
            "skipped": [{"path": s.path, "reason": s.reason} for s in report.skipped],
        }
        click.echo(json.dumps(data, indent=2))
        return

    if not report.outcomes:
        click.echo("No empty folders found.")
    for outcome in report.outcomes:
        if outcome.deleted:
            click.echo(f"  {click.style('✓', fg='green')} {outcome.path}")
        else:
            click.echo(f"  {click.style('✗', fg='red')} {outcome.path} — {outcome.reason}")
    for skipped in report.skipped:
        click.echo(f"  {click.style('·', fg='bright_black')} {skipped.path or '.'} — skipped ({skipped.reason})")

    click.echo(
        f"\nRemoved {len(report.deleted)} folder(s), {len(report.failed)} failed "
        f"in {format_elapsed(time.monotonic() - start)}\n"
    )


# ── duplicates ───────────────────────────────────────────────────────────

@main.command()
@click.argument("root", type=click.Path(file_okay=False))
@click.option("--type", "-t", "file_type", default=None, type=click.Choice(FILE_TYPES), help="Only compare this kind of file")
@click.option("--delete", "delete", is_flag=True, help="Remove every copy except the first of each group")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def duplicates(root: str, file_type: str | None, delete: bool, yes: bool, as_json: bool) -> None:
    """Find files with identical content below ROOT."""
    engine, path = TidyEngine(), Path(root)
    try:
        scan = engine.find_duplicates(path, file_type, on_progress=_progress_printer(as_json))
    except RootUnavailableError as e:
        _fail(str(e))
        return
    _end_progress(as_json)

    if not delete:
        if as_json:
            data = {
                "files_scanned": scan.files_scanned,
                "total_wasted_bytes": scan.total_wasted_size,
                "groups": [
                    {
                        "digest": g.digest,
                        "size_bytes": g.per_file_size,
                        "wasted_bytes": g.total_wasted_size,
                        "files": [f.path for f in g.files],
                    }
                    for g in scan.groups
                ],
                "skipped": [{"path": s.path, "reason": s.reason} for s in scan.skipped],
            }
            click.echo(json.dumps(data, indent=2))
            return

        if not scan.groups:
            click.echo("No duplicate files found.")
            return
        for group in scan.groups:
            click.echo(
                f"\n  {click.style(group.digest[:12], fg='cyan', bold=True)}  "
                f"{len(group.files)} × {bytes_to_human(group.per_file_size)} "
                f"({click.style(bytes_to_human(group.total_wasted_size), fg='yellow')} wasted)"
            )
            for i, f in enumerate(group.files):
                marker = click.style("keep", fg="green") if i == 0 else click.style("copy", fg="bright_black")
                click.echo(f"    [{marker}] {f.path}")
        click.echo(
            f"\n{scan.duplicate_count} redundant copies in {len(scan.groups)} groups, "
            f"{click.style(bytes_to_human(scan.total_wasted_size), fg='green', bold=True)} reclaimable\n"
        )
        return

    selection = engine.suggest_duplicate_selection()
    if not selection:
        if as_json:
            click.echo(json.dumps({"status": "nothing_to_delete", "outcomes": []}))
        else:
            click.echo("No duplicate files found.")
        return

    if not yes and not as_json:
        click.confirm(
            f"Remove {len(selection)} duplicate file(s) ({bytes_to_human(scan.total_wasted_size)})?",
            abort=True,
        )

    report = engine.delete_duplicates(selection, on_progress=_progress_printer(as_json))
    _end_progress(as_json)
    if as_json:
        data = {
            "status": "deleted",
            "freed_bytes": report.freed_bytes,
            "outcomes": [_outcome_dict(o) for o in report.outcomes],
        }
        click.echo(json.dumps(data, indent=2))
        return
    _print_clean_report(report, "file")


# ── junk ─────────────────────────────────────────────────────────────────

@main.command()
@click.argument("root", type=click.Path(file_okay=False))
@click.option("--category", "-c", "categories", multiple=True, help="Only clean these categories (repeatable)")
@click.option("--clean", "do_clean", is_flag=True, help="Remove the files of the selected categories")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def junk(root: str, categories: tuple[str, ...], do_clean: bool, yes: bool, as_json: bool) -> None:
    """Find temp files, caches, old logs and other junk below ROOT."""
    engine, path = TidyEngine(), Path(root)
    unknown = [c for c in categories if c not in engine.registry]
    if unknown:
        _fail(f"Unknown category: {', '.join(unknown)} (see 'tidytree categories')")
        return

    try:
        scan = engine.scan_junk(path, on_progress=_progress_printer(as_json))
    except RootUnavailableError as e:
        _fail(str(e))
        return
    _end_progress(as_json)

    if categories:
        engine.selected_categories = set(categories)
    summaries = engine.junk_summaries()
    eligible = engine.eligible_junk()

    if not do_clean:
        if as_json:
            data = {
                "files_scanned": scan.files_scanned,
                "categories": [
                    {"id": s.id, "label": s.label, "count": s.count, "size_bytes": s.size} for s in summaries
                ],
                "files": [
                    {"path": f.path, "size_bytes": f.size, "categories": sorted(f.categories)} for f in scan.files
                ],
                "skipped": [{"path": s.path, "reason": s.reason} for s in scan.skipped],
            }
            click.echo(json.dumps(data, indent=2))
            return

        click.echo()
        for summary in summaries:
            if summary.count:
                selected = "✓" if summary.id in engine.selected_categories else " "
                click.echo(
                    f"  [{selected}] {click.style(summary.id, fg='cyan', bold=True):32s} {summary.label:28s} "
                    f"{click.style(bytes_to_human(summary.size), fg='green', bold=True):>20s} ({summary.count:,} files)"
                )
            else:
                click.echo(f"  {click.style('·', fg='bright_black')}   {summary.id:21s} nothing found")
        total = sum(f.size for f in eligible)
        click.echo(
            f"\n{len(eligible):,} of {scan.files_scanned:,} files selected, "
            f"{click.style(bytes_to_human(total), fg='green', bold=True)} reclaimable\n"
        )
        return

    if not eligible:
        if as_json:
            click.echo(json.dumps({"status": "nothing_to_clean", "outcomes": []}))
        else:
            click.echo("Nothing to clean.")
        return

    if not yes and not as_json:
        total = sum(f.size for f in eligible)
        click.confirm(f"Remove {len(eligible)} junk file(s) ({bytes_to_human(total)})?", abort=True)

    report = engine.clean_junk(on_progress=_progress_printer(as_json))
    _end_progress(as_json)
    if as_json:
        data = {
            "status": "cleaned",
            "freed_bytes": report.freed_bytes,
            "outcomes": [_outcome_dict(o) for o in report.outcomes],
        }
        click.echo(json.dumps(data, indent=2))
        return
    _print_clean_report(report, "file")


# ── categories ───────────────────────────────────────────────────────────

@main.command("categories")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def categories_cmd(as_json: bool) -> None:
    """List the built-in junk categories."""
    registry = default_registry()
    if as_json:
        data = [{"id": c.id, "label": c.label, "description": c.description} for c in registry]
        click.echo(json.dumps(data, indent=2))
        return

    for category in registry:
        click.echo(f"  {click.style(category.id, fg='cyan', bold=True):32s} {category.label}")
        click.echo(f"    {category.description}")

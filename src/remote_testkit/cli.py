from typing import List, Optional
import json
import pathlib
import typer
from rich.console import Console
from .config import load_config, AppConfig, ReportType
from .coverage.map import create_coverage_map
from .coverage.report import create_report
from .logging import setup_logging
from .runners.runner import EventRunner

app = typer.Typer(add_completion=False, help="Remote testkit - console reporting for remote test sessions")

REPORT_TYPES = ("text", "text-summary", "json")

def _check_report_type(value: Optional[str]) -> Optional[str]:
    if value is not None and value not in REPORT_TYPES:
        raise typer.BadParameter(f"must be one of {', '.join(REPORT_TYPES)}")
    return value

@app.command()
def replay(
    events: str = typer.Argument(..., help="JSON-lines event log recorded from the executor"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to config YAML"),
    junit: Optional[str] = typer.Option(None, "--junit", help="Write JUnit XML to this path"),
    hide_passed: bool = typer.Option(False, "--hide-passed", help="Do not list passing tests"),
    hide_skipped: bool = typer.Option(False, "--hide-skipped", help="Do not list skipped tests"),
    serve_only: bool = typer.Option(False, "--serve-only", help="No sessions expected; silence orphan diagnostics"),
    report_type: Optional[str] = typer.Option(None, "--report-type", callback=_check_report_type,
                                              help="Coverage report: text, text-summary or json"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Logging level"),
):
    cfg: AppConfig = load_config(config)
    if junit: cfg.junit = junit
    if hide_passed: cfg.reporter.hide_passed = True
    if hide_skipped: cfg.reporter.hide_skipped = True
    if serve_only: cfg.serve_only = True
    if report_type: cfg.reporter.report_type = report_type
    log = setup_logging(log_level or cfg.log_level)

    if not pathlib.Path(events).is_file():
        typer.echo(f"No such event log: {events}", err=True)
        raise typer.Exit(code=2)
    ok = EventRunner.from_config(cfg).run(events)
    log.debug("Replay of %s finished (%s)", events, "passed" if ok else "failed")
    raise typer.Exit(code=0 if ok else 1)

@app.command()
def coverage(
    files: List[str] = typer.Argument(..., help="istanbul coverage JSON files to merge"),
    report_type: str = typer.Option("text", "--type", "-t", callback=_check_report_type,
                                    help="Report: text, text-summary or json"),
    out: Optional[str] = typer.Option(None, "--out", "-o", help="Output file for the json report"),
    plot: Optional[str] = typer.Option(None, "--plot", help="Write a per-file line coverage chart (PNG)"),
):
    cov = create_coverage_map()
    for f in files:
        try:
            cov.merge(json.loads(pathlib.Path(f).read_text()))
        except (OSError, ValueError) as e:
            typer.echo(f"Cannot read coverage from {f}: {e}", err=True)
            raise typer.Exit(code=2)
    report: ReportType = report_type  # type: ignore[assignment]
    create_report(cov, report, Console(soft_wrap=True, highlight=False), filename=out)
    if plot:
        from .utils.plots import coverage_plot
        coverage_plot(cov, plot)
        typer.echo(f"Saved: {plot}")

def main():
    app()

if __name__ == "__main__":
    main()

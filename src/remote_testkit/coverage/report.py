from __future__ import annotations
import json
import pathlib
from typing import Any, Dict, List, Optional, Union
from rich.console import Console
from rich.table import Table
from rich.text import Text
from .map import CoverageMap, CoverageSummary, Totals, create_coverage_map
from ..config import ReportType, Watermarks

DEFAULT_JSON_FILE = "coverage-final.json"

def _level_style(pct: float, marks) -> str:
    low, high = marks
    if pct < low:
        return "red"
    if pct >= high:
        return "green"
    return "yellow"

def _compact_lines(lines: List[int]) -> str:
    # 3,4,5,9 -> 3-5,9
    parts: List[str] = []
    start = prev = None
    for n in lines:
        if prev is not None and n == prev + 1:
            prev = n
            continue
        if start is not None:
            parts.append(str(start) if start == prev else f"{start}-{prev}")
        start = prev = n
    if start is not None:
        parts.append(str(start) if start == prev else f"{start}-{prev}")
    return ",".join(parts)

def _pct_cell(t: Totals, marks) -> Text:
    return Text(f"{t.pct:g}", style=_level_style(t.pct, marks))

def _row(table: Table, label: str, summary: CoverageSummary, wm: Watermarks, uncovered: str) -> None:
    style = _level_style(summary.lines.pct, wm.lines)
    table.add_row(
        Text(label, style=style),
        _pct_cell(summary.statements, wm.statements),
        _pct_cell(summary.branches, wm.branches),
        _pct_cell(summary.functions, wm.functions),
        _pct_cell(summary.lines, wm.lines),
        Text(uncovered, style=style),
    )

def text_report(cov: CoverageMap, console: Console, watermarks: Optional[Watermarks] = None) -> None:
    wm = watermarks or Watermarks()
    table = Table(show_edge=False)
    table.add_column("File")
    for heading in ("% Stmts", "% Branch", "% Funcs", "% Lines"):
        table.add_column(heading, justify="right")
    table.add_column("Uncovered Line #s")
    _row(table, "All files", cov.summary(), wm, "")
    for path in cov.files():
        fc = cov.file_coverage_for(path)
        _row(table, path, fc.summary(), wm, _compact_lines(fc.uncovered_lines()))
    console.print(table)

def text_summary_report(cov: CoverageMap, console: Console, watermarks: Optional[Watermarks] = None) -> None:
    wm = watermarks or Watermarks()
    summary = cov.summary()
    console.print(Text("=============================== Coverage summary ==============================="))
    for label, metric in (("Statements", "statements"), ("Branches", "branches"), ("Functions", "functions"), ("Lines", "lines")):
        t: Totals = getattr(summary, metric)
        console.print(Text(f"{label:<12}: {t.pct:g}% ( {t.covered}/{t.total} )", style=_level_style(t.pct, getattr(wm, metric))))
    console.print(Text("=" * 80))

def json_report(cov: CoverageMap, filename: Optional[str] = None) -> pathlib.Path:
    out = pathlib.Path(filename or DEFAULT_JSON_FILE)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(json.dumps(cov.to_json(), indent=2))
    return out

def create_report(data: Union[CoverageMap, Dict[str, Any]], report_type: ReportType, console: Console,
                  filename: Optional[str] = None, watermarks: Optional[Watermarks] = None) -> None:
    cov = data if isinstance(data, CoverageMap) else create_coverage_map(data)
    if report_type == "text":
        text_report(cov, console, watermarks)
    elif report_type == "text-summary":
        text_summary_report(cov, console, watermarks)
    elif report_type == "json":
        json_report(cov, filename)
    else:
        raise ValueError(f"unknown coverage report type: {report_type}")

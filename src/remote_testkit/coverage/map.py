"""Mergeable coverage data in the istanbul ``coverage-final.json`` layout.

A map is keyed by source path; each file holds statement, function and branch
location maps plus their hit counters. Merging sums the counters, so the
aggregate does not depend on the order sessions report in.
"""
from __future__ import annotations
import copy
import math
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Union

METRICS = ("statements", "branches", "functions", "lines")

@dataclass
class Totals:
    total: int = 0
    covered: int = 0

    @property
    def pct(self) -> float:
        if self.total == 0:
            return 100.0
        return math.floor(self.covered * 10000 / self.total) / 100

    def add(self, other: "Totals") -> None:
        self.total += other.total
        self.covered += other.covered

@dataclass
class CoverageSummary:
    statements: Totals
    branches: Totals
    functions: Totals
    lines: Totals

    @classmethod
    def empty(cls) -> "CoverageSummary":
        return cls(Totals(), Totals(), Totals(), Totals())

    def merge(self, other: "CoverageSummary") -> None:
        for m in METRICS:
            getattr(self, m).add(getattr(other, m))

class FileCoverage:
    def __init__(self, data: Union[str, Dict[str, Any]]):
        if isinstance(data, str):
            data = {"path": data}
        self.data: Dict[str, Any] = {
            "path": data["path"],
            "statementMap": copy.deepcopy(data.get("statementMap") or {}),
            "fnMap": copy.deepcopy(data.get("fnMap") or {}),
            "branchMap": copy.deepcopy(data.get("branchMap") or {}),
            "s": dict(data.get("s") or {}),
            "f": dict(data.get("f") or {}),
            "b": {k: list(v) for k, v in (data.get("b") or {}).items()},
        }

    @property
    def path(self) -> str:
        return self.data["path"]

    def merge(self, other: "FileCoverage") -> None:
        if other.path != self.path:
            raise ValueError(f"cannot merge coverage for {other.path!r} into {self.path!r}")
        for key, counters in (("statementMap", "s"), ("fnMap", "f")):
            self.data[key].update({k: v for k, v in other.data[key].items() if k not in self.data[key]})
            for k, hits in other.data[counters].items():
                self.data[counters][k] = self.data[counters].get(k, 0) + hits
        for k, loc in other.data["branchMap"].items():
            self.data["branchMap"].setdefault(k, copy.deepcopy(loc))
        for k, hits in other.data["b"].items():
            mine = self.data["b"].get(k)
            if mine is None:
                self.data["b"][k] = list(hits)
                continue
            if len(mine) < len(hits):
                mine.extend([0] * (len(hits) - len(mine)))
            for i, h in enumerate(hits):
                mine[i] += h

    def line_coverage(self) -> Dict[int, int]:
        lines: Dict[int, int] = {}
        for k, hits in self.data["s"].items():
            loc = self.data["statementMap"].get(k)
            if not loc:
                continue
            line = loc["start"]["line"]
            if line not in lines or lines[line] < hits:
                lines[line] = hits
        return lines

    def uncovered_lines(self) -> List[int]:
        return sorted(line for line, hits in self.line_coverage().items() if hits == 0)

    def summary(self) -> CoverageSummary:
        lines = self.line_coverage()
        s, f = self.data["s"].values(), self.data["f"].values()
        branch_hits = [h for counts in self.data["b"].values() for h in counts]
        return CoverageSummary(
            statements=Totals(len(s), sum(1 for h in s if h > 0)),
            branches=Totals(len(branch_hits), sum(1 for h in branch_hits if h > 0)),
            functions=Totals(len(f), sum(1 for h in f if h > 0)),
            lines=Totals(len(lines), sum(1 for h in lines.values() if h > 0)),
        )

    def to_json(self) -> Dict[str, Any]:
        return copy.deepcopy(self.data)

class CoverageMap:
    def __init__(self, data: Optional[Union["CoverageMap", Dict[str, Any]]] = None):
        self._files: Dict[str, FileCoverage] = {}
        if data is not None:
            self.merge(data)

    def merge(self, other: Union["CoverageMap", Dict[str, Any]]) -> None:
        items: Iterable[FileCoverage]
        if isinstance(other, CoverageMap):
            items = other._files.values()
        else:
            if not isinstance(other, dict):
                raise ValueError(f"coverage data must be an object keyed by file path, not {type(other).__name__}")
            for path, fc in other.items():
                if not isinstance(fc, dict):
                    raise ValueError(f"coverage record for {path!r} must be an object, not {type(fc).__name__}")
            # build every record first so bad data leaves the map untouched
            items = [FileCoverage(dict(fc, path=fc.get("path") or path)) for path, fc in other.items()]
        for fc in items:
            mine = self._files.get(fc.path)
            if mine is None:
                self._files[fc.path] = FileCoverage(fc.data)
            else:
                mine.merge(fc)

    def files(self) -> List[str]:
        return sorted(self._files)

    def file_coverage_for(self, path: str) -> FileCoverage:
        try:
            return self._files[path]
        except KeyError:
            raise KeyError(f"no coverage for {path}") from None

    def summary(self) -> CoverageSummary:
        total = CoverageSummary.empty()
        for fc in self._files.values():
            total.merge(fc.summary())
        return total

    def to_json(self) -> Dict[str, Any]:
        return {path: self._files[path].to_json() for path in self.files()}

    def __len__(self) -> int:
        return len(self._files)

def create_coverage_map(data: Optional[Union[CoverageMap, Dict[str, Any]]] = None) -> CoverageMap:
    return CoverageMap(data)

import pytest
from conftest import file_coverage

from remote_testkit.coverage.map import CoverageMap, FileCoverage, Totals, create_coverage_map


def test_totals_pct_rules():
    assert Totals(0, 0).pct == 100.0
    assert Totals(3, 1).pct == 33.33
    assert Totals(3, 2).pct == 66.66
    assert Totals(4, 4).pct == 100.0


def test_line_coverage_takes_best_statement_per_line():
    data = file_coverage("a.js", [0, 0])
    # second statement sits on line 1 as well
    data["statementMap"]["1"]["start"]["line"] = 1
    data["s"]["1"] = 4
    fc = FileCoverage(data)
    assert fc.line_coverage() == {1: 4}
    assert fc.uncovered_lines() == []


def test_file_summary():
    fc = FileCoverage(file_coverage("a.js", [1, 0, 2, 0], fn_hits=[1, 0], branch_hits=[[1, 0]]))
    s = fc.summary()
    assert (s.statements.total, s.statements.covered) == (4, 2)
    assert (s.lines.total, s.lines.covered) == (4, 2)
    assert (s.functions.total, s.functions.covered) == (2, 1)
    assert (s.branches.total, s.branches.covered) == (2, 1)
    assert fc.uncovered_lines() == [2, 4]


def test_merge_sums_counters():
    cov = create_coverage_map({"a.js": file_coverage("a.js", [1, 0], fn_hits=[0], branch_hits=[[0, 1]])})
    cov.merge({"a.js": file_coverage("a.js", [2, 1], fn_hits=[3], branch_hits=[[1, 1]])})
    fc = cov.file_coverage_for("a.js")
    assert fc.data["s"] == {"0": 3, "1": 1}
    assert fc.data["f"] == {"0": 3}
    assert fc.data["b"] == {"0": [1, 2]}


def test_merge_is_order_independent():
    a = {"a.js": file_coverage("a.js", [1, 0, 0]), "b.js": file_coverage("b.js", [0])}
    b = {"a.js": file_coverage("a.js", [0, 0, 5]), "c.js": file_coverage("c.js", [2, 2])}
    ab, ba = CoverageMap(), CoverageMap()
    ab.merge(a)
    ab.merge(b)
    ba.merge(b)
    ba.merge(a)
    assert ab.files() == ba.files() == ["a.js", "b.js", "c.js"]
    assert ab.to_json() == ba.to_json()


def test_merge_does_not_alias_source_data():
    source = CoverageMap({"a.js": file_coverage("a.js", [1])})
    target = CoverageMap()
    target.merge(source)
    target.merge(source)
    assert source.file_coverage_for("a.js").data["s"] == {"0": 1}
    assert target.file_coverage_for("a.js").data["s"] == {"0": 2}


def test_merge_adds_unknown_statements():
    cov = CoverageMap({"a.js": file_coverage("a.js", [1])})
    cov.merge({"a.js": file_coverage("a.js", [0, 1])})
    assert cov.file_coverage_for("a.js").data["s"] == {"0": 1, "1": 1}


def test_file_merge_rejects_other_paths():
    with pytest.raises(ValueError):
        FileCoverage(file_coverage("a.js", [1])).merge(FileCoverage(file_coverage("b.js", [1])))


def test_missing_file_lookup():
    with pytest.raises(KeyError):
        CoverageMap().file_coverage_for("nope.js")


def test_path_defaults_to_key():
    data = file_coverage("a.js", [1])
    del data["path"]
    cov = CoverageMap({"a.js": data})
    assert cov.files() == ["a.js"]
    assert len(cov) == 1


def test_map_summary_spans_files():
    cov = CoverageMap({"a.js": file_coverage("a.js", [1, 0]), "b.js": file_coverage("b.js", [1, 1])})
    s = cov.summary()
    assert (s.lines.total, s.lines.covered) == (4, 3)
    assert s.lines.pct == 75.0


def test_merge_rejects_non_object_records():
    cov = CoverageMap({"a.js": file_coverage("a.js", [1])})
    with pytest.raises(ValueError, match="'b.js' must be an object"):
        cov.merge({"a.js": file_coverage("a.js", [1]), "b.js": 5})
    # nothing from the rejected payload was applied
    assert cov.file_coverage_for("a.js").data["s"] == {"0": 1}
    assert cov.files() == ["a.js"]


def test_merge_rejects_non_object_payload():
    with pytest.raises(ValueError, match="keyed by file path"):
        CoverageMap().merge([1, 2])

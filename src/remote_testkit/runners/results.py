from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

@dataclass
class ErrorInfo:
    name: str = "Error"
    message: str = ""
    stack: Optional[str] = None

    @classmethod
    def from_data(cls, data: Any) -> Optional["ErrorInfo"]:
        if data is None or isinstance(data, ErrorInfo):
            return data
        if isinstance(data, str):
            return cls(message=data)
        return cls(name=data.get("name") or "Error", message=data.get("message") or "", stack=data.get("stack"))

Error = Union[ErrorInfo, BaseException]

@dataclass
class Test:
    __test__ = False

    id: str
    name: str = ""
    session_id: str = ""
    error: Optional[Error] = None
    skipped: Optional[str] = None
    time_elapsed: float = 0.0  # ms
    has_parent: bool = True

@dataclass
class Suite:
    id: str
    name: str = ""
    session_id: str = ""
    has_parent: bool = False
    error: Optional[Error] = None
    tests: List[Union["Suite", Test]] = field(default_factory=list)
    # counts as reported by the executor; derived from the tree when absent
    reported_tests: Optional[int] = None
    reported_failed: Optional[int] = None
    reported_skipped: Optional[int] = None

    @property
    def num_tests(self) -> int:
        if self.reported_tests is not None: return self.reported_tests
        return sum(t.num_tests if isinstance(t, Suite) else 1 for t in self.tests)
    @property
    def num_failed_tests(self) -> int:
        if self.reported_failed is not None: return self.reported_failed
        return sum(t.num_failed_tests if isinstance(t, Suite) else int(t.error is not None) for t in self.tests)
    @property
    def num_skipped_tests(self) -> int:
        if self.reported_skipped is not None: return self.reported_skipped
        return sum(t.num_skipped_tests if isinstance(t, Suite) else int(t.error is None and bool(t.skipped)) for t in self.tests)

    def update(self, other: "Suite") -> None:
        """Take over state reported for this suite at a later point in the run."""
        self.name = other.name or self.name
        self.session_id = other.session_id or self.session_id
        self.has_parent = other.has_parent
        self.error = other.error
        self.tests = other.tests
        self.reported_tests = other.reported_tests
        self.reported_failed = other.reported_failed
        self.reported_skipped = other.reported_skipped

def has_error(node: Union[Suite, Test]) -> bool:
    """True when the node or anything below it carries an error."""
    if node.error is not None:
        return True
    if isinstance(node, Suite):
        return any(has_error(child) for child in node.tests)
    return False

def parse_test(data: Dict[str, Any]) -> Test:
    skipped = data.get("skipped")
    if skipped is True:
        skipped = "skipped"
    return Test(
        id=data["id"],
        name=data.get("name") or data["id"],
        session_id=data.get("sessionId") or "",
        error=ErrorInfo.from_data(data.get("error")),
        skipped=skipped or None,
        time_elapsed=float(data.get("timeElapsed") or 0),
    )

def parse_suite(data: Dict[str, Any]) -> Suite:
    return Suite(
        id=data["id"],
        name=data.get("name") or data["id"],
        session_id=data.get("sessionId") or "",
        has_parent=bool(data.get("hasParent", False)),
        error=ErrorInfo.from_data(data.get("error")),
        tests=[parse_node(t) for t in data.get("tests") or []],
        reported_tests=data.get("numTests"),
        reported_failed=data.get("numFailedTests"),
        reported_skipped=data.get("numSkippedTests"),
    )

def parse_node(data: Dict[str, Any]) -> Union[Suite, Test]:
    # child suites are the entries that carry their own test list
    if "tests" in data:
        return parse_suite(dict(data, hasParent=True))
    return parse_test(data)

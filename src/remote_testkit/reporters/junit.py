from __future__ import annotations
from typing import Any, Callable, Dict, List, Optional, Union
import xml.etree.ElementTree as ET
import pathlib
from .base import Reporter, format_seconds
from ..config import ReporterConfig
from ..events import EventKind
from ..runners.results import Suite, Test

class JUnitReporter(Reporter):
    def __init__(self, path: str, config: Optional[ReporterConfig] = None):
        super().__init__(config)
        self.path = path
        self.suites: List[Suite] = []

    def handlers(self) -> Dict[EventKind, Callable[..., Any]]:
        return {EventKind.SUITE_END: self.suite_end, EventKind.RUN_END: self.run_end}

    def suite_end(self, suite: Suite) -> None:
        if not suite.has_parent:
            self.suites.append(suite)

    def _add(self, parent: ET.Element, node: Union[Suite, Test]) -> None:
        if isinstance(node, Suite):
            el = ET.SubElement(parent, "testsuite", name=node.name, tests=str(node.num_tests),
                               failures=str(node.num_failed_tests), skipped=str(node.num_skipped_tests))
            if node.error is not None:
                err = ET.SubElement(el, "error", message=str(getattr(node.error, "message", node.error)))
                err.text = self.format_error(node.error)
            for child in node.tests:
                self._add(el, child)
            return
        tc = ET.SubElement(parent, "testcase", name=node.name, classname=node.id.rsplit(" - ", 1)[0],
                           time=format_seconds(node.time_elapsed))
        if node.error is not None:
            failure = ET.SubElement(tc, "failure", message=str(getattr(node.error, "message", node.error)))
            failure.text = self.format_error(node.error)
        elif node.skipped:
            ET.SubElement(tc, "skipped", message=node.skipped)

    def build(self) -> ET.Element:
        root = ET.Element("testsuites")
        for suite in self.suites:
            self._add(root, suite)
        return root

    def run_end(self) -> None:
        pathlib.Path(self.path).parent.mkdir(parents=True, exist_ok=True)
        ET.ElementTree(self.build()).write(self.path, encoding="utf-8", xml_declaration=True)

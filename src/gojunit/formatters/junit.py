"""JUnit XML output for go test executions."""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from typing import BinaryIO, Optional

from gojunit.config import ReportConfig
from gojunit.models import Execution
from gojunit.suites import JUnitTestSuites, generate

XML_HEADER = '<?xml version="1.0" encoding="UTF-8"?>\n'

# Anything outside the XML 1.0 Char production, e.g. ANSI escapes or NUL.
_INVALID_XML_CHARS = re.compile("[^\t\n\r\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")


class JUnitWriteError(Exception):
    """Raised when the JUnit document cannot be serialized or written."""


def xml_safe(text: str) -> str:
    """Replace characters XML cannot carry with U+FFFD."""
    return _INVALID_XML_CHARS.sub("\ufffd", text)


def to_element(suites: JUnitTestSuites) -> ET.Element:
    """Build the ``<testsuites>`` element tree for ``suites``."""
    testsuites = ET.Element("testsuites")
    for s in suites.suites:
        testsuite = ET.SubElement(testsuites, "testsuite", {
            "tests": str(s.tests),
            "failures": str(s.failures),
            "time": s.time,
            "name": xml_safe(s.name),
        })
        if s.properties:
            properties = ET.SubElement(testsuite, "properties")
            for p in s.properties:
                ET.SubElement(properties, "property", {
                    "name": xml_safe(p.name),
                    "value": xml_safe(p.value),
                })

        for c in s.test_cases:
            testcase = ET.SubElement(testsuite, "testcase", {
                "classname": xml_safe(c.classname),
                "name": xml_safe(c.name),
                "time": c.time,
            })
            if c.skipped is not None:
                ET.SubElement(testcase, "skipped", {"message": xml_safe(c.skipped.message)})
            if c.failure is not None:
                failure = ET.SubElement(testcase, "failure", {"message": xml_safe(c.failure.message)})
                failure.text = xml_safe(c.failure.contents)
    return testsuites


def _marshal(suites: JUnitTestSuites) -> str:
    root = to_element(suites)
    ET.indent(root, space="\t")
    return ET.tostring(root, encoding="unicode")


def format_junit(
    execution: Execution,
    strip: int = 0,
    prefix: str = "",
    config: Optional[ReportConfig] = None,
) -> str:
    """Format an execution as a JUnit XML string, declaration included."""
    return XML_HEADER + _marshal(generate(execution, strip, prefix, config))


def write(
    out: BinaryIO,
    execution: Execution,
    strip: int = 0,
    prefix: str = "",
    config: Optional[ReportConfig] = None,
) -> None:
    """Write the JUnit XML document for ``execution`` to ``out``.

    The declaration and the document are written separately, so the
    declaration may already be in ``out`` when a write error is raised.

    Raises:
        JUnitWriteError: If the tree cannot be serialized or ``out``
            rejects a write.
    """
    suites = generate(execution, strip, prefix, config)
    try:
        doc = _marshal(suites)
        out.write(XML_HEADER.encode("utf-8"))
        out.write(doc.encode("utf-8"))
    except (OSError, TypeError, ValueError) as e:
        raise JUnitWriteError(f"failed to write JUnit XML: {e}") from e

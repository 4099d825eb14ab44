"""JUnit suite and case records built from an Execution."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import timedelta
from typing import List, Optional, Union

from gojunit.config import ReportConfig
from gojunit.models import Execution, Package, TestCase
from gojunit.naming import munge_package_name
from gojunit.toolchain import go_version

logger = logging.getLogger(__name__)

DRIVER_FAILURE_TEST_NAME = "TestMain"
FAILURE_MESSAGE = "Failed"
VERSION_PROPERTY = "go.version"


@dataclass
class JUnitSkipMessage:
    """Why a test case was skipped."""
    message: str


@dataclass
class JUnitFailure:
    """Failure details; ``contents`` is the captured test output."""
    message: str
    contents: str = ""


@dataclass
class JUnitProperty:
    name: str
    value: str


@dataclass
class JUnitTestCase:
    """A single test case with at most one outcome annotation."""
    classname: str
    name: str
    time: str
    skipped: Optional[JUnitSkipMessage] = None
    failure: Optional[JUnitFailure] = None


@dataclass
class JUnitTestSuite:
    """One suite per Go package."""
    name: str
    tests: int
    failures: int
    time: str
    properties: List[JUnitProperty] = field(default_factory=list)
    test_cases: List[JUnitTestCase] = field(default_factory=list)


@dataclass
class JUnitTestSuites:
    suites: List[JUnitTestSuite] = field(default_factory=list)


def format_duration_as_seconds(d: Union[float, timedelta]) -> str:
    if isinstance(d, timedelta):
        d = d.total_seconds()
    return f"{d:.6f}"


def package_properties(version: str) -> List[JUnitProperty]:
    return [JUnitProperty(name=VERSION_PROPERTY, value=version)]


def new_test_case(tc: TestCase, strip: int, prefix: str) -> JUnitTestCase:
    return JUnitTestCase(
        classname=munge_package_name(tc.package, strip, prefix),
        name=tc.test,
        time=format_duration_as_seconds(tc.elapsed),
    )


def package_test_cases(pkg: Package, strip: int = 0, prefix: str = "") -> List[JUnitTestCase]:
    """Case records for one package.

    Order: driver failure (if any), failed, skipped, passed. Each group
    keeps the order of the model.
    """
    cases: List[JUnitTestCase] = []

    if pkg.driver_failed:
        jtc = new_test_case(TestCase(package=pkg.name, test=DRIVER_FAILURE_TEST_NAME), strip, prefix)
        jtc.failure = JUnitFailure(message=FAILURE_MESSAGE, contents=pkg.output_for(""))
        cases.append(jtc)

    for tc in pkg.failed:
        jtc = new_test_case(tc, strip, prefix)
        jtc.failure = JUnitFailure(message=FAILURE_MESSAGE, contents=pkg.output_for(tc.test))
        cases.append(jtc)

    for tc in pkg.skipped:
        jtc = new_test_case(tc, strip, prefix)
        jtc.skipped = JUnitSkipMessage(message=pkg.output_for(tc.test))
        cases.append(jtc)

    for tc in pkg.passed:
        cases.append(new_test_case(tc, strip, prefix))
    return cases


def generate(
    execution: Execution,
    strip: int = 0,
    prefix: str = "",
    config: Optional[ReportConfig] = None,
) -> JUnitTestSuites:
    """Build one JUnit suite per package in ``execution``.

    Args:
        execution: The test run to report on.
        strip: Leading import path segments to drop from names.
        prefix: Path prepended to names after stripping.
        config: Overrides for the suite name and go version. Read from the
            environment when omitted.
    """
    if config is None:
        config = ReportConfig.from_env()
    version = go_version(config)

    suites = JUnitTestSuites()
    for pkgname in execution.package_names():
        pkg = execution.package(pkgname)
        if config.suite_name:
            name = config.suite_name
        else:
            name = munge_package_name(pkgname, strip, prefix)

        failures = len(pkg.failed)
        if pkg.driver_failed:
            failures += 1

        suite = JUnitTestSuite(
            name=name,
            tests=pkg.total,
            failures=failures,
            time=format_duration_as_seconds(pkg.elapsed),
            properties=package_properties(version),
            test_cases=package_test_cases(pkg, strip, prefix),
        )
        logger.debug("junit suite %s: %d tests, %d failures", name, suite.tests, suite.failures)
        suites.suites.append(suite)
    return suites

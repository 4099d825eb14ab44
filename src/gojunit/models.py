"""Execution model consumed by the JUnit report writer.

The model is built by whatever scanned the ``go test -json`` output; the
report code only reads it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List


@dataclass
class TestCase:
    """A single test and how long it ran, in seconds."""
    __test__ = False  # not a pytest class

    package: str
    test: str
    elapsed: float = 0.0


@dataclass
class Package:
    """Results for one Go package, partitioned by outcome."""
    name: str
    passed: List[TestCase] = field(default_factory=list)
    failed: List[TestCase] = field(default_factory=list)
    skipped: List[TestCase] = field(default_factory=list)
    output: Dict[str, str] = field(default_factory=dict)
    elapsed: float = 0.0
    driver_failed: bool = False

    @property
    def total(self) -> int:
        """Number of test case records the package produces.

        A driver failure (the test binary never ran to completion) counts
        as one extra failed case.
        """
        count = len(self.passed) + len(self.failed) + len(self.skipped)
        if self.driver_failed:
            count += 1
        return count

    def output_for(self, test: str) -> str:
        """Captured output for ``test``; ``""`` returns whole-package output."""
        return self.output.get(test, "")


@dataclass
class Execution:
    """All packages seen in one ``go test`` run."""
    packages: Dict[str, Package] = field(default_factory=dict)

    def package_names(self) -> List[str]:
        return sorted(self.packages)

    def package(self, name: str) -> Package:
        return self.packages[name]

    @property
    def total(self) -> int:
        return sum(p.total for p in self.packages.values())

    @property
    def failed_count(self) -> int:
        return sum(
            len(p.failed) + (1 if p.driver_failed else 0)
            for p in self.packages.values()
        )

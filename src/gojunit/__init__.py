"""gojunit — JUnit XML reports for go test executions."""

__version__ = "0.1.0"

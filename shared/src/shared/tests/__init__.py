"""
Shared testing utilities for Sondeur components.

- LaborantTest: Base class for all tests
- Result models and JSON output format

All tests inherit from LaborantTest.
"""

from shared.tests.results import (
    SCHEMA_VERSION,
    IndividualTestResult,
    TestFileResult,
    TestStatus,
    format_output,
    parse_test_output,
)
from shared.tests.test_base import LaborantTest

__all__ = [
    "LaborantTest",
    "TestStatus",
    "IndividualTestResult",
    "TestFileResult",
    "SCHEMA_VERSION",
    "format_output",
    "parse_test_output",
]

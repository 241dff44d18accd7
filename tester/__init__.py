"""
 _            _
| |_ ___  ___| |_ ___ _ __
| __/ _ \/ __| __/ _ \ '__|
| ||  __/\__ \ ||  __/ |
 \__\___||___/\__\___|_|
"""

# expose the main classes
from .harness import Tester, builtin_probe
from .expectation import Expectation
from .config import HarnessConfig
from .reporter import Reporter

# expose supporting data classes
from .types import (
    TestGroup,
    TestCase,
    TestResult,
    RunReport,
    UNDEFINED
)

from .exceptions import TesterError, ExpectationError, UsageError
from .equality import ValueKind, value_kind, strict_equal, loose_equal, differences, deep_equal

# define what `import *` does
__all__ = [
    "Tester",
    "builtin_probe",
    "Expectation",
    "HarnessConfig",
    "Reporter",
    "TestGroup",
    "TestCase",
    "TestResult",
    "RunReport",
    "UNDEFINED",
    "TesterError",
    "ExpectationError",
    "UsageError",
    "ValueKind",
    "value_kind",
    "strict_equal",
    "loose_equal",
    "differences",
    "deep_equal",
]

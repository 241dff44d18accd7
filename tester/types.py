from typing import Callable, Iterator, Any, Optional, Dict, List, Tuple

import numpy as np
import pandas as pd

TestBody = Callable[[], Any]
HostProbe = Callable[[], bool]


class _Undefined:
    """stands in for a value that was never there."""
    _instance: Optional['_Undefined'] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str: return "undefined"

    def __str__(self) -> str: return "undefined"

    def __bool__(self) -> bool: return False


UNDEFINED = _Undefined()


class TestCase:
    """a single named, executable check"""
    __test__ = False

    def __init__(self, description: str, fn: TestBody):
        self.description = description
        self.fn = fn

    def __repr__(self) -> str:
        return f"TestCase(description={self.description!r})"


class TestGroup:
    """a named collection of test cases and nested sub-groups"""
    __test__ = False

    def __init__(self, description: str, parent: Optional['TestGroup'] = None):
        self.description = description
        self.parent = parent  # traversal only
        self.groups: List['TestGroup'] = []
        self.tests: List[TestCase] = []
        self.banner = False  # divider registered by print_header

    @property
    def is_root(self) -> bool: return self.parent is None

    @property
    def path(self) -> List[str]:
        """descriptions from the outermost registered group down to this one"""
        names = []
        node = self
        while node is not None and not node.is_root:
            names.append(node.description)
            node = node.parent
        return list(reversed(names))

    def count_tests(self) -> int:
        return len(self.tests) + sum(g.count_tests() for g in self.groups)

    def walk(self, depth: int = 0) -> Iterator[Tuple['TestGroup', int]]:
        """pre-order (group, depth) pairs, the order the runner reports in"""
        yield self, depth
        for child in self.groups:
            yield from child.walk(depth + 1)

    def __repr__(self) -> str:
        return f"TestGroup(description={self.description!r}, groups={len(self.groups)}, tests={len(self.tests)})"


class TestResult:
    """outcome of running one test case"""
    __test__ = False

    def __init__(self, path: List[str], description: str, passed: bool,
                 error: Optional[str], duration_ms: float, level: int):
        self.path = path
        self.description = description
        self.passed = passed
        self.error = error
        self.duration_ms = duration_ms
        self.level = level

    def as_dict(self) -> Dict[str, Any]:
        return {
            'group': ' > '.join(self.path),
            'description': self.description,
            'passed': self.passed,
            'error': self.error,
            'duration_ms': self.duration_ms,
            'level': self.level,
        }

    def __repr__(self) -> str:
        state = 'pass' if self.passed else 'fail'
        return f"TestResult(description={self.description!r}, {state})"


class RunReport:
    """ordered results of a run"""
    __test__ = False

    def __init__(self, results: Optional[List[TestResult]] = None):
        self.results: List[TestResult] = results if results is not None else []

    def add(self, result: TestResult) -> None:
        self.results.append(result)

    @property
    def total(self) -> int: return len(self.results)

    @property
    def passed(self) -> int: return sum(1 for r in self.results if r.passed)

    @property
    def failed(self) -> int: return self.total - self.passed

    @property
    def ok(self) -> bool: return self.failed == 0

    @property
    def duration_ms(self) -> float:
        if not self.results: return 0.0
        return float(np.sum([r.duration_ms for r in self.results]))

    def outcomes(self) -> List[bool]:
        return [r.passed for r in self.results]

    def df(self) -> pd.DataFrame:
        """results as a pandas dataframe, one row per executed test"""
        columns = ['group', 'description', 'passed', 'error', 'duration_ms', 'level']
        return pd.DataFrame([r.as_dict() for r in self.results], columns=columns)

    def __repr__(self) -> str:
        return f"RunReport(total={self.total}, passed={self.passed}, failed={self.failed})"

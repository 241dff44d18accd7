"""
decorator-style registration on a shared, module-level tester.

    from tester import suite

    @suite.test("adds numbers")
    def test_add():
        suite.expect(1 + 1).to_be(2)

    if __name__ == "__main__":
        suite.run(title="arithmetic")
"""
from functools import wraps
from typing import Any, Callable, Optional

from .config import HarnessConfig
from .exceptions import ExpectationError
from .expectation import Expectation
from .harness import Tester
from .types import RunReport, TestGroup

default_tester = Tester.setup(config=HarnessConfig.from_env())


def test(description: str) -> Callable:
    """decorator to register a function as a test case."""

    def decorator(func: Callable) -> Callable:
        default_tester.it(description, func)

        @wraps(func)
        def wrapper(*args, **kwargs):
            return func(*args, **kwargs)

        return wrapper

    return decorator


def group(description: str) -> Callable:
    """decorator that registers a group; the decorated function is its body."""

    def decorator(func: Callable) -> Optional[TestGroup]:
        return default_tester.describe(description, func)

    return decorator


def assert_that(condition: Any, message: str = "assertion failed") -> None:
    """assertion that raises the harness's catchable error type."""
    if not condition:
        raise ExpectationError(message)


def expect(actual: Any) -> Expectation:
    return default_tester.expect(actual)


def describe(description: str, fn: Callable[[], Any]) -> Optional[TestGroup]:
    return default_tester.describe(description, fn)


context = describe


def it(description: str, fn: Callable[[], Any]):
    return default_tester.it(description, fn)


def run(title: str = "test run") -> RunReport:
    """executes all registered tests, prints a report and a summary."""
    default_tester.reporter.banner(title)
    report = default_tester.run_group(default_tester.root_group)
    default_tester.reporter.summary(report)

    # clear tests after run to allow for multiple, separate suite runs in a single script
    default_tester.reset()
    return report

from typing import Any, Optional

from .equality import differences, is_object, loose_equal, strict_equal
from .exceptions import ExpectationError, UsageError
from .types import UNDEFINED

_NO_EXPECTED = object()


class Expectation:
    """fluent wrapper around a value under test."""

    def __init__(self, actual: Any, negated: bool = False):
        self.actual = actual
        self.negated = negated

    @property
    def not_(self) -> 'Expectation':
        """a sibling expectation with the opposite polarity"""
        return Expectation(self.actual, not self.negated)

    def _assert(self, condition: bool, verb: str, expected: Any = _NO_EXPECTED,
                message: Optional[str] = None, details: str = '') -> None:
        if bool(condition) != self.negated:
            return
        subject = str(self.actual) if message is None else message
        polarity = 'not ' if self.negated else ''
        text = f"Expected {subject} {polarity}to {verb}"
        if expected is not _NO_EXPECTED:
            text += f" {expected}"
        raise ExpectationError(text + details)

    # --- equality ---

    def to_be(self, expected: Any) -> None:
        self._assert(strict_equal(self.actual, expected), 'be', expected)

    def to_equal(self, expected: Any) -> None:
        self._assert(loose_equal(self.actual, expected), 'equal', expected)

    def to_equal_object(self, expected: Any) -> None:
        """deep comparison; reports every differing key"""
        if not is_object(self.actual) or not is_object(expected):
            raise UsageError('Actual and expected must be objects')
        found = differences(self.actual, expected)
        details = ''.join(f"\n{d}" for d in found)
        self._assert(not found, 'equal', message='objects', details=details)

    def to_contain(self, item: Any) -> None:
        if not hasattr(type(self.actual), '__contains__'):
            raise UsageError('Actual must be an array or string')
        try:
            contained = item in self.actual
        except (TypeError, ValueError):
            if not isinstance(self.actual, (str, bytes, bytearray)):
                raise
            # text only contains text of the same kind
            contained = False
        self._assert(contained, 'contain', item)

    # --- truthiness and identity ---

    def to_be_truthy(self) -> None:
        self._assert(bool(self.actual), 'be truthy')

    def to_be_falsy(self) -> None:
        self._assert(not self.actual, 'be falsy')

    def to_be_null(self) -> None:
        self._assert(self.actual is None, 'be null')

    to_be_none = to_be_null

    def to_be_undefined(self) -> None:
        self._assert(self.actual is UNDEFINED, 'be undefined')

    # --- ordering ---

    def _compare(self, op, expected: Any) -> bool:
        try:
            return bool(op(self.actual, expected))
        except TypeError:
            raise UsageError(f"Cannot compare {self.actual} with {expected}") from None

    def to_be_greater_than(self, expected: Any) -> None:
        self._assert(self._compare(lambda a, b: a > b, expected), 'be greater than', expected)

    def to_be_less_than(self, expected: Any) -> None:
        self._assert(self._compare(lambda a, b: a < b, expected), 'be less than', expected)

    # --- behaviour ---

    def to_throw_error(self, text: Optional[str] = None) -> None:
        """
        calls the actual value and expects it to raise.

        only the message check follows negation: a call that does not raise
        fails either way.
        """
        if not callable(self.actual):
            raise UsageError('Actual must be a function')
        try:
            self.actual()
        except Exception as error:
            if text is not None:
                self._assert(str(error) == text, 'throw error', repr(text), message=f"error {str(error)!r}")
            return
        raise ExpectationError(f"Expected {self.actual} to throw an error")

    def to_respond_to(self, name: str) -> None:
        self._assert(callable(getattr(self.actual, name, None)), 'respond to', name)

    def to_be_instance_of(self, label: str) -> None:
        # compares the string form, not the type
        self._assert(str(self.actual) == label, 'be instance of', label)

    def __repr__(self) -> str:
        return f"Expectation(actual={self.actual!r}, negated={self.negated})"

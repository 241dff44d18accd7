import sys
from typing import TextIO, Optional

from .types import RunReport

PASS_MARK = '✔️'
FAIL_MARK = '❌'


class _c:
    """a tiny, silent class for holding color codes."""
    ok = '\033[92m'
    fail = '\033[91m'
    warn = '\033[93m'
    info = '\033[94m'
    grey = '\033[90m'
    reset = '\033[0m'


class Reporter:
    """writes indented, line-oriented results to an output and an error stream"""

    def __init__(self, out: Optional[TextIO] = None, err: Optional[TextIO] = None,
                 indent: str = '  ', color: bool = False):
        self.out = out if out is not None else sys.stdout
        self.err = err if err is not None else sys.stderr
        self.indent = indent
        self.color = color

    def _paint(self, code: str, text: str) -> str:
        return f"{code}{text}{_c.reset}" if self.color else text

    def _line(self, stream: TextIO, level: int, text: str) -> None:
        stream.write(self.indent * max(level, 0) + text + '\n')

    def heading(self, text: str, level: int) -> None:
        for line in text.split('\n'):
            self._line(self.out, level, line)

    def success(self, description: str, level: int) -> None:
        self._line(self.out, level, f"{self._paint(_c.ok, PASS_MARK)}  {description}")

    def failure(self, description: str, message: str, level: int) -> None:
        self._line(self.err, level, f"{self._paint(_c.fail, FAIL_MARK)}  {description}")
        for line in message.split('\n'):
            self._line(self.err, level + 1, self._paint(_c.grey, line))

    def banner(self, title: str) -> None:
        self.out.write(f"\n{self._paint(_c.info, f'--- starting: {title} ---')}\n")

    def summary(self, report: RunReport) -> None:
        summary_color = _c.ok if report.ok else _c.fail
        self.out.write(f"\n{self._paint(summary_color, '--- summary ---')}\n")
        self.out.write(f"  ran {report.total} tests in {self._paint(_c.warn, f'{report.duration_ms:.2f}ms')}\n")
        self.out.write(f"  {self._paint(_c.ok, f'passed: {report.passed}')}, "
                       f"{self._paint(_c.fail, f'failed: {report.failed}')}\n")
        self.out.write(f"{self._paint(summary_color, '---------------')}\n")

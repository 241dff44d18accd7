import builtins
import logging
import time
from typing import Any, MutableMapping, Optional, TextIO

from .config import HarnessConfig
from .exceptions import TesterError
from .expectation import Expectation
from .reporter import Reporter
from .types import HostProbe, RunReport, TestBody, TestCase, TestGroup, TestResult

logger = logging.getLogger(__name__)


def builtin_probe(name: str) -> HostProbe:
    """probe that reports whether the host has installed a global called `name`"""
    return lambda: hasattr(builtins, name)


class Tester:
    """
    registers nested groups and test cases, then runs them.

    registration is eager: `describe` calls its body straight away with the
    new group as the current one. `run` walks the finished tree depth-first
    and reports each test as it goes.
    """
    __test__ = False

    def __init__(self, config: Optional[HarnessConfig] = None,
                 out: Optional[TextIO] = None, err: Optional[TextIO] = None,
                 host_probe: Optional[HostProbe] = None):
        self.config = config if config is not None else HarnessConfig()
        self.reporter = Reporter(out, err, indent=self.config.indent, color=self.config.color)
        self._host_probe = host_probe if host_probe is not None else builtin_probe(self.config.host_global)
        self._running_in_host = self.config.simulate_host
        self.root_group = TestGroup('root')
        self.current_group = self.root_group
        logger.debug(f"tester created with config: {self.config.as_dict()}")

    @classmethod
    def setup(cls, namespace: Optional[MutableMapping[str, Any]] = None,
              config: Optional[HarnessConfig] = None, **kwargs: Any) -> 'Tester':
        """
        build a tester for the standard (non-host) runtime.

        when a namespace such as `globals()` is given, the registration
        functions are bound into it so test scripts can call `describe`,
        `it` and `expect` directly.
        """
        tester = cls(config, **kwargs)
        tester.run_in_host(tester.config.simulate_host)
        if namespace is not None:
            namespace.update({
                'describe': tester.describe,
                'context': tester.context,
                'it': tester.it,
                'expect': tester.expect,
                'run': tester.run,
                'print_header': tester.print_header,
                'run_in_host': tester.run_in_host,
                'tester': tester,
            })
        return tester

    # --- environment ---

    @property
    def is_in_host(self) -> bool:
        return bool(self._host_probe())

    @property
    def running_in_host(self) -> bool:
        return self._running_in_host

    def run_in_host(self, flag: bool = True) -> None:
        self._running_in_host = flag

    def environment_mismatch(self) -> bool:
        return self.is_in_host != self.running_in_host

    # --- registration ---

    def describe(self, description: str, fn: TestBody) -> Optional[TestGroup]:
        if self.environment_mismatch():
            logger.info(f"skipping group {description!r}: host is {'present' if self.is_in_host else 'absent'} "
                        f"but tester is set to run {'in' if self.running_in_host else 'outside'} it")
            return None

        new_group = TestGroup(description, self.current_group)
        self.current_group.groups.append(new_group)
        previous_group = self.current_group
        self.current_group = new_group
        logger.debug(f"registering group {new_group.path}")
        try:
            fn()
        finally:
            self.current_group = previous_group
        return new_group

    def context(self, description: str, fn: TestBody) -> Optional[TestGroup]:
        return self.describe(description, fn)

    def it(self, description: str, fn: TestBody) -> TestCase:
        case = TestCase(description, fn)
        self.current_group.tests.append(case)
        return case

    def expect(self, actual: Any) -> Expectation:
        return Expectation(actual)

    def print_header(self, message: str) -> Optional[TestGroup]:
        """register a banner as an empty group so it shows up as a divider"""
        rule = '=' * (len(message) + 8)
        banner = f"{rule}\n    {message}\n{rule}"
        group = self.describe(banner, lambda: None)
        if group is not None:
            group.banner = True
        return group

    def reset(self) -> None:
        """forget everything registered so far"""
        self.root_group = TestGroup('root')
        self.current_group = self.root_group

    # --- running ---

    def _heading(self, group: TestGroup, level: int) -> None:
        if level == 1 and self.config.label_top_groups and not group.banner:
            self.reporter.heading(f'Describe "{group.description}"', 0)
        else:
            self.reporter.heading(group.description, level - 1)

    def _run_test(self, group: TestGroup, case: TestCase, level: int) -> TestResult:
        started = time.perf_counter()
        try:
            case.fn()
        except Exception as error:
            duration = (time.perf_counter() - started) * 1000
            if not isinstance(error, (TesterError, AssertionError)):
                logger.warning(f"test {case.description!r} raised {type(error).__name__}: {error}")
            message = str(error) or type(error).__name__
            self.reporter.failure(case.description, message, level)
            return TestResult(group.path, case.description, False, message, duration, level)

        duration = (time.perf_counter() - started) * 1000
        self.reporter.success(case.description, level)
        return TestResult(group.path, case.description, True, None, duration, level)

    def run_group(self, group: TestGroup, level: int = 0,
                  report: Optional[RunReport] = None) -> RunReport:
        report = report if report is not None else RunReport()
        if group is not self.root_group:
            self._heading(group, level)

        for case in group.tests:
            report.add(self._run_test(group, case, level))

        for subgroup in group.groups:
            self.run_group(subgroup, level + 1, report)
        return report

    def run(self) -> RunReport:
        logger.debug(f"running {self.root_group.count_tests()} tests")
        report = self.run_group(self.root_group)
        logger.debug(f"finished: {report}")
        if self.config.show_summary:
            self.reporter.summary(report)
        return report

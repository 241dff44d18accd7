import builtins
import io

from tester import suite, Tester, HarnessConfig, TestGroup, RunReport, ExpectationError, builtin_probe

assert_that = suite.assert_that


def make_tester(in_host: bool = False, **config):
    """a tester writing to string buffers, with the host probe pinned"""
    out, err = io.StringIO(), io.StringIO()
    tester = Tester(HarnessConfig(**config), out=out, err=err, host_probe=lambda: in_host)
    return tester, out, err


def passing():
    pass


def failing():
    raise ExpectationError("Expected 1 to be 2")


def silent_error():
    raise ValueError()


def lines(stream):
    return stream.getvalue().splitlines()


# tree construction tests

@suite.test("describe builds a nested tree in insertion order")
def test_describe_builds_tree():
    tester, _, _ = make_tester()

    def body_a():
        tester.it("t1", passing)
        tester.describe("B", lambda: tester.it("t2", passing))
        tester.context("C", passing)

    group_a = tester.describe("A", body_a)
    root = tester.root_group
    assert_that(root.groups == [group_a], "A should be the only top-level group")
    assert_that([g.description for g in group_a.groups] == ["B", "C"], "subgroups in order")
    assert_that([t.description for t in group_a.tests] == ["t1"], "A holds t1")
    assert_that(group_a.groups[0].tests[0].description == "t2", "B holds t2")
    assert_that(group_a.parent is root and group_a.groups[0].parent is group_a, "parents link upwards")
    assert_that(group_a.groups[0].path == ["A", "B"], "path lists non-root ancestors")
    assert_that(root.count_tests() == 2, "two tests registered")
    assert_that([(g.description, d) for g, d in root.walk()] == [("root", 0), ("A", 1), ("B", 2), ("C", 2)],
                "walk is pre-order")
    assert_that(tester.current_group is root, "current group restored")


@suite.test("it registers on the root when no group is active")
def test_it_at_root():
    tester, out, _ = make_tester()
    tester.it("lonely", passing)
    assert_that(len(tester.root_group.tests) == 1, "test attached to root")
    tester.run()
    assert_that(lines(out) == ["✔️  lonely"], f"unexpected output: {lines(out)}")


@suite.test("an error while registering propagates and restores the current group")
def test_registration_error_propagates():
    tester, _, _ = make_tester()

    def broken():
        tester.it("before", passing)
        raise RuntimeError("bad registration")

    try:
        tester.describe("broken", broken)
        raised = None
    except RuntimeError as error:
        raised = error
    assert_that(raised is not None and str(raised) == "bad registration", "error should propagate")
    assert_that(tester.current_group is tester.root_group, "current group restored after the error")


@suite.test("reset drops everything registered")
def test_reset():
    tester, _, _ = make_tester()
    tester.describe("A", lambda: tester.it("t", passing))
    old_root = tester.root_group
    tester.reset()
    assert_that(tester.root_group is not old_root, "fresh root")
    assert_that(tester.root_group.count_tests() == 0 and not tester.root_group.groups, "empty tree")
    assert_that(tester.current_group is tester.root_group, "current group is the new root")


# environment tests

@suite.test("describe is a no-op when the host flag claims a missing host")
def test_environment_mismatch_host_absent():
    tester, out, err = make_tester(in_host=False)
    tester.run_in_host(True)
    reached = []

    def body():
        reached.append(True)
        tester.it("never", passing)

    assert_that(tester.environment_mismatch(), "flag and probe disagree")
    assert_that(tester.describe("hidden", body) is None, "nothing registered")
    assert_that(reached == [], "body never invoked")
    assert_that(not tester.root_group.groups and not tester.root_group.tests, "tree stays empty")
    report = tester.run()
    assert_that(out.getvalue() == "" and err.getvalue() == "", "run shows no trace of the group")
    assert_that(report.total == 0, "nothing ran")


@suite.test("describe is a no-op when the host is present but not expected")
def test_environment_mismatch_host_present():
    tester, _, _ = make_tester(in_host=True)
    assert_that(tester.is_in_host and not tester.running_in_host, "probe true, flag false")
    assert_that(tester.describe("hidden", passing) is None, "suppressed")
    tester.run_in_host()
    assert_that(not tester.environment_mismatch(), "run_in_host defaults to true")
    assert_that(tester.describe("shown", passing) is not None, "registered once matched")


@suite.test("simulate_host config seeds the host flag")
def test_simulate_host_config():
    tester, _, _ = make_tester(in_host=True, simulate_host=True)
    assert_that(tester.running_in_host, "flag taken from config")
    assert_that(tester.describe("shown", passing) is not None, "probe and flag agree")


@suite.test("print_header registers a banner group and obeys suppression")
def test_print_header():
    tester, out, _ = make_tester()
    header = tester.print_header("Section")
    assert_that(header is not None and header.tests == [] and header.groups == [], "empty group")
    assert_that("    Section" in header.description.split("\n"), "message sits between two rules")
    tester.run()
    output = lines(out)
    assert_that(output[0] == "=" * 15 and output[1] == "    Section" and output[2] == "=" * 15,
                f"unexpected banner: {output}")

    hidden, _, _ = make_tester(in_host=False)
    hidden.run_in_host(True)
    assert_that(hidden.print_header("Section") is None, "suppressed like describe")


@suite.test("print_header banners keep their shape when top-level groups are labelled")
def test_print_header_with_labels():
    tester, out, _ = make_tester(label_top_groups=True)
    tester.print_header("inventory")
    tester.describe("Inventory", lambda: tester.it("counts", passing))
    tester.run()
    rule = "=" * 17
    assert_that(lines(out) == [rule, "    inventory", rule, 'Describe "Inventory"', "  ✔️  counts"],
                f"unexpected output: {lines(out)}")
    assert_that(tester.root_group.groups[0].banner and not tester.root_group.groups[1].banner,
                "only the header group is a banner")


@suite.test("builtin_probe looks for the host global in builtins")
def test_builtin_probe():
    probe = builtin_probe("TesterHostMarker")
    assert_that(not probe(), "absent before install")
    builtins.TesterHostMarker = object()
    try:
        assert_that(probe(), "present after install")
        tester = Tester(HarnessConfig(host_global="TesterHostMarker"), out=io.StringIO(), err=io.StringIO())
        assert_that(tester.is_in_host and tester.environment_mismatch(), "default probe uses the config name")
    finally:
        del builtins.TesterHostMarker


# runner tests

@suite.test("report is depth-first with one extra indent per level")
def test_run_order_and_indentation():
    tester, out, _ = make_tester()

    def body_a():
        tester.it("t1", passing)
        tester.describe("B", lambda: tester.it("t2", passing))

    tester.describe("A", body_a)
    tester.run()
    assert_that(lines(out) == ["A", "  ✔️  t1", "  B", "    ✔️  t2"], f"unexpected output: {lines(out)}")


@suite.test("label_top_groups prefixes top-level headings")
def test_label_top_groups():
    tester, out, _ = make_tester(label_top_groups=True)
    tester.describe("A", lambda: tester.describe("B", lambda: tester.it("t", passing)))
    tester.run()
    assert_that(lines(out) == ['Describe "A"', "  B", "    ✔️  t"], f"unexpected output: {lines(out)}")


@suite.test("failures go to the error stream with the message one level deeper")
def test_failure_output():
    tester, out, err = make_tester()
    tester.describe("A", lambda: tester.it("bad", failing))
    tester.run()
    assert_that(lines(out) == ["A"], f"unexpected output: {lines(out)}")
    assert_that(lines(err) == ["  ❌  bad", "    Expected 1 to be 2"], f"unexpected errors: {lines(err)}")


@suite.test("a failing test does not stop its siblings")
def test_failure_isolation():
    tester, out, err = make_tester()

    def body():
        tester.it("one", passing)
        tester.it("two", failing)
        tester.it("three", lambda: tester.expect(1).to_be(1))

    tester.describe("suite", body)
    report = tester.run()
    assert_that(report.outcomes() == [True, False, True], f"unexpected outcomes: {report.outcomes()}")
    assert_that(report.passed == 2 and report.failed == 1 and not report.ok, "counts")
    assert_that(lines(out) == ["suite", "  ✔️  one", "  ✔️  three"], f"unexpected output: {lines(out)}")
    assert_that(lines(err)[0] == "  ❌  two", f"unexpected errors: {lines(err)}")


@suite.test("unexpected errors are reported like assertion failures")
def test_unexpected_errors():
    tester, _, err = make_tester()
    tester.it("key", lambda: {}['missing'])
    tester.it("empty", silent_error)
    report = tester.run()
    assert_that(report.failed == 2, "both fail")
    assert_that(lines(err) == ["❌  key", "  'missing'", "❌  empty", "  ValueError"], f"unexpected errors: {lines(err)}")


@suite.test("multi-line messages are indented line by line")
def test_multiline_failure():
    tester, _, err = make_tester()
    tester.describe("A", lambda: tester.it("objects", lambda: tester.expect({'a': 1}).to_equal_object({'a': 2})))
    tester.run()
    assert_that(lines(err) == ["  ❌  objects", "    Expected objects to equal", "    a: 1 !== 2"],
                f"unexpected errors: {lines(err)}")


@suite.test("run returns a report that converts to a dataframe")
def test_report_dataframe():
    tester, _, _ = make_tester()
    def body():
        tester.it("ok", passing)
        tester.it("bad", failing)

    tester.describe("A", body)
    report = tester.run()
    assert_that(isinstance(report, RunReport), "run returns a report")
    frame = report.df()
    assert_that(frame.shape == (2, 6), f"unexpected shape: {frame.shape}")
    assert_that(frame['passed'].tolist() == [True, False], "one row per test, in order")
    assert_that(frame['group'].tolist() == ["A", "A"], "group path column")
    assert_that(report.duration_ms >= 0, "durations are summed")


@suite.test("show_summary prints counts after the run")
def test_summary():
    tester, out, _ = make_tester(show_summary=True)
    tester.it("ok", passing)
    tester.it("bad", failing)
    tester.run()
    text = out.getvalue()
    assert_that("ran 2 tests in" in text, f"summary missing: {text}")
    assert_that("passed: 1, failed: 1" in text, f"counts missing: {text}")


@suite.test("color wraps marks in ansi codes")
def test_color_output():
    tester, out, _ = make_tester(color=True, show_summary=True)
    tester.it("ok", passing)
    tester.run()
    assert_that('\033[92m' in out.getvalue(), "green pass mark")
    assert_that('\033[93m' in out.getvalue(), "timing highlighted in the summary")


# setup tests

@suite.test("setup binds the registration api into a namespace")
def test_setup_namespace():
    namespace = {}
    out = io.StringIO()
    tester = Tester.setup(namespace, out=out, err=io.StringIO(), host_probe=lambda: False)
    assert_that(namespace['tester'] is tester, "tester exposed")
    assert_that(not tester.running_in_host, "setup targets the standard runtime")
    for name in ('describe', 'context', 'it', 'expect', 'run', 'print_header', 'run_in_host'):
        assert_that(callable(namespace[name]), f"{name} should be bound")

    namespace['describe']("A", lambda: namespace['it']("t", lambda: namespace['expect'](2).to_be_greater_than(1)))
    report = namespace['run']()
    assert_that(report.outcomes() == [True], "bound functions drive the same tester")
    assert_that(isinstance(tester.root_group.groups[0], TestGroup), "group registered on the tester")


if __name__ == "__main__":
    suite.run(title="tester harness test suite")

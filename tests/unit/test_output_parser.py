# tests/unit/test_output_parser.py

"""Tests for the `go test -v` output parser."""

from gotestadapter.testing.output import parse_test_output

VERBOSE_OUTPUT = """\
=== RUN   TestAlpha
--- PASS: TestAlpha (0.00s)
=== RUN   TestBeta
=== RUN   TestBeta/case_one
    beta_test.go:14: want 3, got 4
=== RUN   TestBeta/case_two
--- FAIL: TestBeta (0.01s)
    --- FAIL: TestBeta/case_one (0.00s)
    --- PASS: TestBeta/case_two (0.00s)
=== RUN   TestGamma
    gamma_test.go:8: needs network
--- SKIP: TestGamma (0.00s)
FAIL
exit status 1
FAIL\texample.com/pkg\t0.012s
""".splitlines()


class TestParseTestOutput:
    def test_top_level_statuses(self):
        report = parse_test_output(VERBOSE_OUTPUT)

        assert report.statuses == {"TestAlpha": "PASS", "TestBeta": "FAIL", "TestGamma": "SKIP"}

    def test_output_grouped_by_top_level_test(self):
        report = parse_test_output(VERBOSE_OUTPUT)

        beta = report.output_of("TestBeta")
        assert "beta_test.go:14: want 3, got 4" in beta
        assert "--- FAIL: TestBeta/case_one (0.00s)" in beta
        assert "needs network" not in beta
        assert "needs network" in report.output_of("TestGamma")

    def test_no_tests_to_run(self):
        report = parse_test_output(["testing: warning: no tests to run", "PASS", "ok  \texample.com/pkg\t0.002s"])

        assert report.no_tests_to_run is True
        assert report.status_of("TestAlpha") is None
        assert report.output_of("TestAlpha") == ""

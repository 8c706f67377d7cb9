import stat
import sys
from pathlib import Path

import pytest

from gotestadapter.config import RunnerConfig
from gotestadapter.events import TestState
from gotestadapter.runtime.cancellation import CancellationToken
from gotestadapter.testing.protocols import TestRunResult
from gotestadapter.tree import TestNode

FAKE_GO_SCRIPT = r"""#!/bin/sh
# Stands in for `go test -v -run ^(Name)$ <dir>`.
if [ -n "$FAKE_GO_LOG" ]; then
    echo "$PWD|$*" >> "$FAKE_GO_LOG"
fi
if [ -n "$FAKE_GO_PID" ]; then
    echo $$ > "$FAKE_GO_PID"
fi
name=$(echo "$4" | sed -e 's/^\^(//' -e 's/)\$$//')
echo "=== RUN   $name"
case "$name" in
    *Fail*)
        echo "    thing_test.go:12: expected 1, got 2"
        echo "--- FAIL: $name (0.00s)"
        echo "FAIL"
        exit 1
        ;;
    *Skip*)
        echo "    thing_test.go:20: not today"
        echo "--- SKIP: $name (0.00s)"
        echo "PASS"
        exit 0
        ;;
    *Broken*)
        echo "# example.com/pkg [build failed]" >&2
        echo "./thing_test.go:3:1: syntax error" >&2
        exit 2
        ;;
    *Sleep*)
        exec sleep 30
        ;;
    *HugeLine*)
        head -c 3000000 /dev/zero | tr "\\0" x
        echo
        echo "--- PASS: $name (0.01s)"
        echo "PASS"
        exit 0
        ;;
    *HugeHang*)
        head -c 3000000 /dev/zero | tr "\\0" x
        exec sleep 30
        ;;
    *)
        echo "--- PASS: $name (0.01s)"
        echo "PASS"
        exit 0
        ;;
esac
"""

requires_posix = pytest.mark.skipif(sys.platform == "win32", reason="fake go runner is a shell script")


def write_go_file(path: Path, functions: list[str], package: str = "pkg") -> Path:
    """Writes a Go source file declaring one empty function per name."""
    path.parent.mkdir(parents=True, exist_ok=True)
    body = [f"package {package}", "", 'import "testing"', ""]
    for name in functions:
        body.append(f"func {name}(t *testing.T) {{\n}}\n")
    path.write_text("\n".join(body), encoding="utf-8")
    return path


@pytest.fixture
def go_workspace(tmp_path: Path) -> Path:
    """
    A small workspace:

        pkg/foo_test.go     TestAlpha, TestBeta, helperFunc
        pkg/foo.go          (not a test file)
        suite/my_test.go    TestMySuite, TestB, TestA
        empty/dir/          (no files)
        docs/readme.md
    """
    root = tmp_path / "workspace"
    write_go_file(root / "pkg" / "foo_test.go", ["TestBeta", "helperFunc", "TestAlpha"])
    write_go_file(root / "pkg" / "foo.go", ["TestNotInATestFile"])
    write_go_file(root / "suite" / "my_test.go", ["TestMySuite", "TestB", "TestA"], package="suite")
    (root / "empty" / "dir").mkdir(parents=True)
    (root / "docs").mkdir()
    (root / "docs" / "readme.md").write_text("# docs\n")
    return root


@pytest.fixture
def fake_go(tmp_path: Path) -> Path:
    """An executable shell script that behaves like `go test -v` for one test."""
    script = tmp_path / "bin" / "go"
    script.parent.mkdir()
    script.write_text(FAKE_GO_SCRIPT)
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return script


@pytest.fixture
def fake_go_config(fake_go: Path) -> RunnerConfig:
    return RunnerConfig(go_path=fake_go, timeout_seconds=10)


class RecordingRunner:
    """TestRunner double: records executed tests and returns canned outcomes by label."""

    def __init__(self, outcomes: dict[str, TestState] | None = None):
        self.outcomes = outcomes or {}
        self.executed: list[str] = []

    async def execute(self, test: TestNode, token: CancellationToken | None = None) -> TestRunResult:
        self.executed.append(test.id)
        outcome = self.outcomes.get(test.label, TestState.PASSED)
        message = None if outcome is TestState.PASSED else f"{test.label} did not pass"
        return TestRunResult(outcome=outcome, exit_code=0 if outcome is TestState.PASSED else 1, message=message)


@pytest.fixture
def recording_runner() -> RecordingRunner:
    return RecordingRunner()

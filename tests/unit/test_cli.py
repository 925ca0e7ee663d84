"""Tests for the functester CLI."""

from __future__ import annotations

import json
import sys
import textwrap
import uuid

import pytest
from typer.testing import CliRunner

from functester import __version__
from functester.cli import app
from functester.cli.display import format_duration
from functester.cli.loading import load_harnesses
from functester.exceptions import HarnessConfigError

# Disable ANSI colours for consistent test output
runner = CliRunner(env={"NO_COLOR": "1"})

HARNESS_MODULE = textwrap.dedent(
    """
    from functester import CustomCase, ReturnValueHarness, VoidHarness
    from tests.fakes import A, AGE, B, check_age, classify, lenient_check_age

    passing = ReturnValueHarness(check_age, [AGE], {"0": "TOO_YOUNG_OR_INVALID"}, "OK")
    failing = VoidHarness(lenient_check_age, [AGE])
    both = [passing, failing]

    unmapped = ReturnValueHarness(classify, [A, B], {"0,1": "BOTH_BAD"}, "OK")

    def factory():
        return (passing,)

    def broken_factory():
        raise RuntimeError("factory down")

    not_a_harness = 42
    """
)


@pytest.fixture
def harness_file(tmp_path):
    """Write the sample harness module under a unique module name."""
    path = tmp_path / f"harnesses_{uuid.uuid4().hex}.py"
    path.write_text(HARNESS_MODULE)
    return path


class TestVersion:
    def test_version_flag(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert f"functester v{__version__}" in result.stdout


class TestPlanCommand:
    def test_plan_lists_cases(self, harness_file):
        result = runner.invoke(app, ["plan", f"{harness_file}:passing"])
        assert result.exit_code == 0
        assert "check_age (5 cases)" in result.stdout

    def test_plan_bad_target(self):
        result = runner.invoke(app, ["plan", "no_colon_here"])
        assert result.exit_code == 2
        assert "MODULE:ATTR" in result.stdout

    def test_plan_missing_attribute(self, harness_file):
        result = runner.invoke(app, ["plan", f"{harness_file}:nothing"])
        assert result.exit_code == 2

    def test_verbose_plan_logs_synthesis_and_warnings(self, harness_file):
        result = runner.invoke(app, ["-v", "plan", f"{harness_file}:unmapped"])
        assert result.exit_code == 0
        assert "no '0' entry" in result.output
        assert "Synthesized 10 case(s)" in result.output

    def test_quiet_plan_hides_debug(self, harness_file):
        result = runner.invoke(app, ["-q", "plan", f"{harness_file}:unmapped"])
        assert result.exit_code == 0
        assert "no '0' entry" in result.output
        assert "Synthesized" not in result.output

    def test_json_logs(self, harness_file):
        result = runner.invoke(app, ["--json", "-v", "plan", f"{harness_file}:unmapped"])
        assert result.exit_code == 0
        assert '"record"' in result.output

    def test_plan_broken_file_exits_2(self, tmp_path):
        broken = tmp_path / "broken_plan.py"
        broken.write_text("this is not python\n")
        result = runner.invoke(app, ["plan", f"{broken}:harness"])
        assert result.exit_code == 2


class TestRunCommand:
    def test_run_passing_harness(self, harness_file):
        result = runner.invoke(app, ["run", f"{harness_file}:passing"])
        assert result.exit_code == 0
        assert "5 passed" in result.stdout

    def test_run_failing_harness_exits_1(self, harness_file):
        result = runner.invoke(app, ["run", f"{harness_file}:failing"])
        assert result.exit_code == 1
        assert "1 failed" in result.stdout

    def test_run_list_target(self, harness_file):
        result = runner.invoke(app, ["run", f"{harness_file}:both"])
        assert result.exit_code == 1
        assert "check_age" in result.stdout
        assert "lenient_check_age" in result.stdout

    def test_run_quiet_with_stop_on_failure(self, harness_file):
        result = runner.invoke(
            app, ["--quiet", "run", f"{harness_file}:failing", "--stop-on-failure"]
        )
        assert result.exit_code == 1

    def test_run_bad_config(self, harness_file, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("verbosity: loud\n")
        result = runner.invoke(app, ["run", f"{harness_file}:passing", "-c", str(config_file)])
        assert result.exit_code == 2
        assert "Error" in result.stdout

    def test_run_unknown_module(self):
        result = runner.invoke(app, ["run", "functester_no_such_module:harness"])
        assert result.exit_code == 2

    def test_run_broken_file_exits_2(self, tmp_path):
        broken = tmp_path / "broken_run.py"
        broken.write_text("this is not python\n")
        result = runner.invoke(app, ["run", f"{broken}:harness"])
        assert result.exit_code == 2
        assert "Cannot import" in result.stdout

    def test_run_failing_factory_exits_2(self, harness_file):
        result = runner.invoke(app, ["run", f"{harness_file}:broken_factory"])
        assert result.exit_code == 2


class TestLoadHarnesses:
    def test_single(self, harness_file):
        assert len(load_harnesses(f"{harness_file}:passing")) == 1

    def test_factory(self, harness_file):
        (harness,) = load_harnesses(f"{harness_file}:factory")
        assert harness.name == "check_age"

    def test_dotted_module(self):
        # tests.fakes exposes no harness, so the attribute type is rejected
        with pytest.raises(HarnessConfigError, match="expected a TestHarness"):
            load_harnesses("tests.fakes:AGE")

    def test_wrong_type(self, harness_file):
        with pytest.raises(HarnessConfigError, match="expected a TestHarness"):
            load_harnesses(f"{harness_file}:not_a_harness")

    def test_missing_file(self, tmp_path):
        with pytest.raises(HarnessConfigError, match="No such file"):
            load_harnesses(f"{tmp_path / 'absent.py'}:harness")

    def test_module_error_is_wrapped(self, tmp_path):
        broken = tmp_path / "raises_on_import.py"
        broken.write_text("raise RuntimeError('import-time failure')\n")
        with pytest.raises(HarnessConfigError, match="import-time failure"):
            load_harnesses(f"{broken}:harness")
        assert not any("raises_on_import" in name for name in sys.modules)

    def test_factory_error_is_wrapped(self, harness_file):
        with pytest.raises(HarnessConfigError, match="factory down"):
            load_harnesses(f"{harness_file}:broken_factory")

    def test_file_named_like_stdlib_module_does_not_shadow_it(self, tmp_path):
        shadow = tmp_path / "json.py"
        shadow.write_text(HARNESS_MODULE)
        (harness,) = load_harnesses(f"{shadow}:passing")
        assert harness.name == "check_age"
        assert sys.modules["json"] is json


@pytest.mark.parametrize(
    ("ms", "expected"),
    [(0.5, "0.5ms"), (12.0, "12.0ms"), (1500.0, "1.50s")],
)
def test_format_duration(ms, expected):
    assert format_duration(ms) == expected

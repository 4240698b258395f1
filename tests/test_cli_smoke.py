import subprocess
import sys


def run_cli(args):
    return subprocess.run(
        [sys.executable, "-m", "orbit_analytics.cli"] + args,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
    )


def test_cli_help():
    result = run_cli(["--help"])
    assert result.returncode == 0


def test_cli_version():
    result = run_cli(["--version"])
    assert result.returncode == 0
    assert "ORbit Analytics v" in result.stdout


def test_cli_holidays():
    result = run_cli(["--holidays", "2026"])
    assert result.returncode == 0
    assert "2026-07-04  Independence Day  (observed 2026-07-03)" in result.stdout


def test_cli_requires_input():
    result = run_cli([])
    assert result.returncode == 2


def test_cli_report(report_payload_file, config_file, tmp_path):
    result = run_cli([str(report_payload_file), "--config", str(config_file)])

    assert result.returncode == 0, result.stderr
    assert "Report generated" in result.stdout
    assert list((tmp_path / "runs").glob("*/report.md"))

"""Integration tests for the build, validate and types commands"""

import json

import pytest
from typer.testing import CliRunner

from faqhub.cli.cli import app


@pytest.fixture(name="project")
def project_fixture(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    faq = tmp_path / "_cache" / "faq" / "scope"
    faq.mkdir(parents=True)
    (faq / "is-x-covered.md").write_text("---\nstatus: draft\n---\n# Is X covered?\n\nYes.\n", encoding="utf-8")
    return tmp_path


@pytest.fixture(name="runner")
def runner_fixture():
    return CliRunner()


def test_build_cmd_writes_content_json(project, runner):
    """build writes the assembled structure and reports per-type counts."""
    result = runner.invoke(app, ["build", "--project-root", str(project), "--out-dir", str(project / "out")])

    assert result.exit_code == 0, result.output
    assert "faq: 1 files, 1 parsed, 1 valid, 0 invalid" in result.output
    data = json.loads((project / "out" / "content.json").read_text(encoding="utf-8"))
    assert data["faq"]["scope/is-x-covered"]["question"] == "Is X covered?"
    assert (project / "_tmp" / "faq.json").exists()


def test_validate_cmd_all_valid(project, runner):
    result = runner.invoke(app, ["validate", "--project-root", str(project)])
    assert result.exit_code == 0, result.output
    assert "All items valid." in result.output
    assert not (project / "_tmp").exists()


def test_validate_cmd_reports_invalid(project, runner):
    (project / "_cache" / "faq" / "scope" / "bad.md").write_text("---\nstatus: draft\n---\nNo heading\n", encoding="utf-8")
    result = runner.invoke(app, ["validate", "--project-root", str(project)])
    assert result.exit_code == 1
    assert "1 invalid item(s)" in result.output


def test_types_cmd_lists_defaults(project, runner):
    result = runner.invoke(app, ["types", "--project-root", str(project)])
    assert result.exit_code == 0, result.output
    names = [line.split("\t")[0] for line in result.output.splitlines()]
    assert names == ["faq", "guidance", "list"]


def test_bad_config_exits_with_error(project, runner):
    (project / "config.yaml").write_text("key: [unclosed\n")
    result = runner.invoke(app, ["types"])
    assert result.exit_code == 1

"""Tests for the asgard command line."""

from __future__ import annotations

import json
import shutil
import subprocess

import pytest
from click.testing import CliRunner

from asgard.cli import main
from asgard.settings import Settings
from asgard.storage import ClickStore

pytestmark = pytest.mark.usefixtures("isolate_xdg")


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def ran(monkeypatch):
    """Capture subprocess launches instead of running scripts."""
    calls: list[list[str]] = []

    def fake_run(argv, cwd=None):
        calls.append(argv)
        return subprocess.CompletedProcess(argv, 0)

    monkeypatch.setattr("asgard.host.subprocess.run", fake_run)
    return calls


@pytest.fixture
def folder(make_tree):
    root = make_tree("deploy.py", "backup.py", "tools/cleanup.py", "tools/deploy-dev.py")
    Settings().set("scripts.folder", str(root))
    return root


class TestFolderCommand:
    def test_show_unset(self, runner):
        result = runner.invoke(main, ["folder"])
        assert result.exit_code == 0
        assert "No script folder set" in result.output

    def test_set_and_show(self, runner, make_tree):
        root = make_tree("a.py")
        result = runner.invoke(main, ["folder", str(root)])
        assert result.exit_code == 0

        result = runner.invoke(main, ["folder"])
        assert result.output.strip() == str(root.resolve())

    def test_set_missing(self, runner, tmp_path):
        result = runner.invoke(main, ["folder", str(tmp_path / "missing")])
        assert result.exit_code == 1
        assert Settings().get("scripts.folder") is None

    def test_choose(self, runner, make_tree):
        root = make_tree("a.py")
        result = runner.invoke(main, ["folder", "--choose"], input=f"{root}\n")
        assert result.exit_code == 0
        assert Settings().get("scripts.folder") == str(root.resolve())

    def test_choose_cancelled(self, runner):
        result = runner.invoke(main, ["folder", "--choose"], input="\n")
        assert result.exit_code == 0
        assert "No folder selected" in result.output


class TestListCommand:
    def test_requires_folder(self, runner):
        result = runner.invoke(main, ["list"])
        assert result.exit_code == 1

    def test_favorites_listed_first(self, runner, folder):
        ClickStore().save({"deploy": 4})
        result = runner.invoke(main, ["list"])

        assert result.exit_code == 0
        out = result.output
        assert "Favorites" in out
        assert "★ deploy" in out
        assert out.index("★ deploy") < out.index("backup")

    def test_json(self, runner, folder):
        ClickStore().save({"deploy": 4, "backup": 1})
        result = runner.invoke(main, ["list", "--json"])

        data = json.loads(result.output)
        assert [e["name"] for e in data["favorites"]] == ["deploy"]
        assert [e["name"] for e in data["standard"]] == ["backup", "cleanup", "deploy-dev"]
        assert data["standard"][0]["clicks"] == 1

    def test_query(self, runner, folder):
        result = runner.invoke(main, ["list", "DEPLOY", "--json"])
        data = json.loads(result.output)
        assert [e["name"] for e in data["standard"]] == ["deploy", "deploy-dev"]

    def test_query_without_match(self, runner, folder):
        result = runner.invoke(main, ["list", "zzz"])
        assert "No scripts match 'zzz'" in result.output

    def test_deleted_folder_exits_with_error(self, runner, folder):
        shutil.rmtree(folder)
        result = runner.invoke(main, ["list"])

        assert result.exit_code == 1
        assert "Script folder not found" in result.output

    def test_corrupt_clicks_hint(self, runner, folder):
        path = ClickStore().path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("{nope")

        result = runner.invoke(main, ["list"])
        assert "asgard reset" in result.output


class TestRunCommand:
    def test_run_by_name(self, runner, folder, ran):
        result = runner.invoke(main, ["run", "cleanup"])

        assert result.exit_code == 0
        assert ran[0][-1] == str(folder / "tools" / "cleanup.py")
        assert ClickStore().load() == {"cleanup": 1}

    def test_run_by_path(self, runner, folder, ran):
        result = runner.invoke(main, ["run", str(folder / "backup.py")])
        assert result.exit_code == 0
        assert ClickStore().load() == {"backup": 1}

    def test_ambiguous_name(self, runner, folder, make_tree, ran):
        make_tree("tools/backup.py")
        result = runner.invoke(main, ["run", "backup"])

        assert result.exit_code == 1
        assert "ambiguous" in result.output
        assert ran == []

    def test_unknown_name(self, runner, folder, ran):
        result = runner.invoke(main, ["run", "nothing"])
        assert result.exit_code == 1
        assert ran == []

    def test_corrupt_clicks_reported_once(self, runner, folder, ran):
        path = ClickStore().path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("{nope")

        result = runner.invoke(main, ["run", str(folder / "backup.py")])

        assert result.exit_code == 0
        assert result.output.count("asgard reset") == 1
        assert len(ran) == 1
        assert path.read_text() == "{nope"

    def test_launch_promotes_script(self, runner, folder, ran):
        for _ in range(2):
            runner.invoke(main, ["run", "backup"])
        data = json.loads(runner.invoke(main, ["list", "--json"]).output)
        assert [e["name"] for e in data["favorites"]] == ["backup"]


class TestOtherCommands:
    def test_marker(self, runner, folder):
        assert runner.invoke(main, ["marker"]).output.strip() == "★"
        runner.invoke(main, ["marker", "+"])
        ClickStore().save({"deploy": 1})

        result = runner.invoke(main, ["list"])
        assert "+ deploy" in result.output

    def test_stats_json(self, runner):
        ClickStore().save({"a": 1, "b": 9})
        data = json.loads(runner.invoke(main, ["stats", "--json"]).output)

        assert data["clicks"] == {"b": 9, "a": 1}
        assert data["threshold"] == 9
        assert data["percentile"] == 0.25

    def test_stats_text(self, runner):
        result = runner.invoke(main, ["stats"])
        assert result.exit_code == 0
        assert "no launches yet" in result.output

    def test_reset(self, runner):
        ClickStore().save({"a": 3})
        result = runner.invoke(main, ["reset", "--yes"])

        assert result.exit_code == 0
        assert ClickStore().load() == {}

    def test_reset_aborted(self, runner):
        ClickStore().save({"a": 3})
        result = runner.invoke(main, ["reset"], input="n\n")

        assert "Aborted" in result.output
        assert ClickStore().load() == {"a": 3}

"""
Tests for the statecell CLI.
"""

import json

from typer.testing import CliRunner

from statecell import __version__
from statecell.cli.main import app

runner = CliRunner()


def test_version():
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert __version__ in result.stdout


def test_run_json_output():
    result = runner.invoke(app, ["run", "INCREMENT", "INCREMENT", "ADD-TWO", "NOOP", "--json"])

    assert result.exit_code == 0, result.stdout
    out = json.loads(result.stdout)
    assert out["success"] is True
    assert out["dispatched"] == 4
    # Unchanged-state dispatches still notify
    assert out["notifications"] == 4
    assert out["state"]["counter"]["count"] == 2
    assert out["state"]["add"]["count"] == 2
    assert len(out["state_hash"]) == 64


def test_run_increment_later_with_advance():
    result = runner.invoke(app, ["run", "INCREMENT_LATER", "--delay", "5", "--advance", "5", "--json"])

    assert result.exit_code == 0, result.stdout
    out = json.loads(result.stdout)
    assert out["state"]["counter"]["count"] == 1
    assert out["timers_fired"] == 1
    assert out["timers_pending"] == 0
    # The procedure itself never reaches the transition function
    assert out["notifications"] == 1


def test_run_increment_later_without_advance_stays_pending():
    result = runner.invoke(app, ["run", "INCREMENT_LATER", "--json"])

    out = json.loads(result.stdout)
    assert out["state"]["counter"]["count"] == 0
    assert out["timers_pending"] == 1


def test_run_rich_output():
    result = runner.invoke(app, ["run", "INCREMENT"])

    assert result.exit_code == 0
    assert "Dispatched 1 command(s)" in result.stdout
    assert "Final State" in result.stdout


def test_run_rejects_bad_log_format():
    result = runner.invoke(app, ["--log-format", "xml", "run", "INCREMENT"])

    assert result.exit_code != 0


def test_replay_json(tmp_path):
    path = tmp_path / "cmds.jsonl"
    path.write_text(
        "\n".join(json.dumps({"tag": t}) for t in ["INCREMENT", "INCREMENT", "ADD-FOUR", "DECREMENT"]),
        encoding="utf-8",
    )

    result = runner.invoke(app, ["replay", "--commands", str(path), "--json", "--show-state"])

    assert result.exit_code == 0, result.stdout
    out = json.loads(result.stdout)
    assert out["commands_replayed"] == 4
    assert out["state"]["counter"]["count"] == 1
    assert out["state"]["add"]["count"] == 4


def test_replay_hash_matches_run(tmp_path):
    """Replaying the same tags yields the same state hash as dispatching them."""
    tags = ["INCREMENT", "ADD-TWO", "RESET", "INCREMENT"]
    path = tmp_path / "cmds.jsonl"
    path.write_text("\n".join(json.dumps({"tag": t}) for t in tags), encoding="utf-8")

    replayed = json.loads(runner.invoke(app, ["replay", "-c", str(path), "--json"]).stdout)
    dispatched = json.loads(runner.invoke(app, ["run", *tags, "--json"]).stdout)

    assert replayed["state_hash"] == dispatched["state_hash"]


def test_replay_until(tmp_path):
    path = tmp_path / "cmds.jsonl"
    path.write_text("\n".join(json.dumps({"tag": "INCREMENT"}) for _ in range(5)), encoding="utf-8")

    out = json.loads(runner.invoke(app, ["replay", "-c", str(path), "-u", "1", "--json", "-s"]).stdout)

    assert out["commands_replayed"] == 2
    assert out["state"]["counter"]["count"] == 2


def test_replay_missing_file(tmp_path):
    result = runner.invoke(app, ["replay", "--commands", str(tmp_path / "missing.jsonl"), "--json"])

    assert result.exit_code == 2
    assert json.loads(result.stdout)["error"] == "Command file not found"


def test_replay_bad_file(tmp_path):
    path = tmp_path / "cmds.jsonl"
    path.write_text("{broken\n", encoding="utf-8")

    result = runner.invoke(app, ["replay", "--commands", str(path)])

    assert result.exit_code == 2
    assert "Error" in result.stdout

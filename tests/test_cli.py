from __future__ import annotations

import logging
from pathlib import Path

import pytest

from envied import cli
from envied.config import Settings
from envied.errors import SettingsError

DECLARATIONS = """
classes:
  - class: Env
    useConstantCase: true
    fields:
      - name: apiKey
        obfuscate: true
      - name: timeout
        type: int
        defaultValue: 30
      - name: missingOne
        type: str?
        optional: true
"""


@pytest.fixture()
def project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.delenv("ENVIED_PROJECT_ROOT", raising=False)
    monkeypatch.delenv("ENVIED_LOG_LEVEL", raising=False)
    (tmp_path / ".env").write_text("API_KEY=s3cr3t\n", encoding="utf-8")
    (tmp_path / "env.yaml").write_text(DECLARATIONS, encoding="utf-8")
    return tmp_path


def test_generate_to_stdout(project, capsys, exec_source):
    cli.main(["generate", str(project / "env.yaml"), "--root", str(project)])
    output = capsys.readouterr().out
    assert "s3cr3t" not in output
    env = exec_source(output)["_Env"]
    assert env.apiKey == "s3cr3t"
    assert env.timeout == 30
    assert env.missingOne is None


def test_generate_to_file(project):
    target = project / "generated" / "env_gen.py"
    cli.main(
        ["generate", str(project / "env.yaml"), "-o", str(target), "--root", str(project)]
    )
    assert target.read_text(encoding="utf-8").startswith("# Generated by envied.")


def test_root_defaults_to_env_setting(project, monkeypatch, capsys):
    monkeypatch.setenv("ENVIED_PROJECT_ROOT", str(project))
    cli.main(["generate", str(project / "env.yaml")])
    assert "class _Env:" in capsys.readouterr().out


def test_keys_lists_resolution_without_values(project, capsys):
    cli.main(["keys", str(project / "env.yaml"), "--root", str(project)])
    output = capsys.readouterr().out
    assert output.splitlines() == [
        "Env.apiKey\tAPI_KEY\tpresent",
        "Env.timeout\tTIMEOUT\tmissing",
        "Env.missingOne\tMISSING_ONE\tmissing",
    ]
    assert "s3cr3t" not in output


def test_errors_exit_with_status_one(project, capsys):
    (project / ".env").write_text("", encoding="utf-8")
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["generate", str(project / "env.yaml"), "--root", str(project)])
    assert excinfo.value.code == 1
    assert "error: Environment variable 'API_KEY' not found" in capsys.readouterr().err


def test_missing_declaration_file(project, capsys):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["generate", str(project / "nope.yaml")])
    assert excinfo.value.code == 1
    assert "error:" in capsys.readouterr().err


def test_settings_load(monkeypatch, tmp_path):
    monkeypatch.setenv("ENVIED_PROJECT_ROOT", str(tmp_path))
    monkeypatch.setenv("ENVIED_LOG_LEVEL", "debug")
    settings = Settings.load()
    assert settings.project_root == tmp_path.resolve()
    assert settings.log_level == "DEBUG"


def test_non_utf8_env_file_reports_error(project, capsys):
    (project / ".env").write_bytes(b"API_KEY=caf\xe9\n")
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["generate", str(project / "env.yaml"), "--root", str(project)])
    assert excinfo.value.code == 1
    assert "error: Environment file" in capsys.readouterr().err


def test_invalid_log_level_reports_error(project, monkeypatch, capsys):
    monkeypatch.setenv("ENVIED_LOG_LEVEL", "loud")
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["generate", str(project / "env.yaml"), "--root", str(project)])
    assert excinfo.value.code == 1
    assert "error: Unknown log level" in capsys.readouterr().err


@pytest.mark.parametrize(
    "env_level, extra_args, expected",
    [
        (None, [], "WARNING"),
        ("info", [], "INFO"),
        ("error", ["-v"], logging.DEBUG),
    ],
)
def test_log_level_from_settings_and_verbose(
    project, monkeypatch, capsys, env_level, extra_args, expected
):
    if env_level is not None:
        monkeypatch.setenv("ENVIED_LOG_LEVEL", env_level)
    calls = []
    monkeypatch.setattr(cli.logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
    cli.main([*extra_args, "keys", str(project / "env.yaml"), "--root", str(project)])
    assert calls[0]["level"] == expected


def test_settings_reject_unknown_log_level(monkeypatch):
    monkeypatch.setenv("ENVIED_LOG_LEVEL", "loud")
    with pytest.raises(SettingsError):
        Settings.load()

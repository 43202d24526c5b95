import json
import sys
from pathlib import Path

import pytest
import yaml

from yabai_config import __main__ as cli


@pytest.fixture(autouse=True)
def no_user_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setattr(cli, "DEFAULT_CONFIG_PATH", tmp_path / "missing.yaml")


def run(monkeypatch: pytest.MonkeyPatch, *args: str) -> None:
    monkeypatch.setattr(sys, "argv", ["yabai-config", *args])
    cli.main()


def test_parse_and_generate_directives(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture,
    caplog: pytest.LogCaptureFixture,
    tmp_path: Path,
    yabairc: str,
) -> None:
    (src := tmp_path / "yabairc").write_text(yabairc)
    run(monkeypatch, "parse", "-y", str(src))
    captured = capsys.readouterr()
    model = yaml.safe_load(captured.out)
    assert model["settings"]["window_gap"] == 10
    assert "missing action parameter" in caplog.text

    (model_file := tmp_path / "model.yaml").write_text(captured.out)
    run(monkeypatch, "generate", str(model_file))
    assert "yabai -m config window_gap 10\n" in capsys.readouterr().out


def test_parse_bindings_as_json(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture, tmp_path: Path, skhdrc: str
) -> None:
    (src := tmp_path / "skhdrc").write_text(skhdrc)
    run(monkeypatch, "parse", "-s", str(src), "--json")
    data = json.loads(capsys.readouterr().out)
    assert len(data["bindings"]) == 5

    (model_file := tmp_path / "bindings.json").write_text(json.dumps(data))
    run(monkeypatch, "generate", "-b", str(model_file))
    assert "shift + alt - j : yabai -m window --swap south\n" in capsys.readouterr().out


def test_validate_exit_code(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture, tmp_path: Path) -> None:
    (src := tmp_path / "skhdrc").write_text("alt - h : echo ok\nalt - j\n")
    with pytest.raises(SystemExit) as exc:
        run(monkeypatch, "validate", "-s", str(src))
    assert exc.value.code == 1
    assert 'Line 2: Missing command separator ":"' in capsys.readouterr().out


def test_conflicts(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture, tmp_path: Path) -> None:
    (src := tmp_path / "skhdrc").write_text("alt - h : echo a\nAlt - H : echo b\n# [DISABLED] alt - h : echo c\n")
    with pytest.raises(SystemExit):
        run(monkeypatch, "conflicts", str(src))
    out = capsys.readouterr().out
    assert '"echo a" conflicts with "echo b"' in out
    assert "echo c" not in out


def test_preset_and_config(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture, tmp_path: Path) -> None:
    (cfg := tmp_path / "config.yaml").write_text("generate_config:\n  binding_title: my hotkeys\n")
    run(monkeypatch, "-c", str(cfg), "generate", "-p", "minimal")
    assert capsys.readouterr().out.startswith("# my hotkeys\n")

    run(monkeypatch, "-c", str(cfg), "dump-config")
    dumped = yaml.safe_load(capsys.readouterr().out)
    assert dumped["generate_config"]["binding_title"] == "my hotkeys"
    assert dumped["parse_config"]["program"] == "yabai"


@pytest.mark.parametrize(
    "content,message",
    [
        ("{not json", "Could not decode directive config"),
        ("settings:\n  window_gap: wide\n", "Input does not describe a valid directive config"),
    ],
)
def test_generate_reports_bad_models(
    content: str,
    message: str,
    monkeypatch: pytest.MonkeyPatch,
    caplog: pytest.LogCaptureFixture,
    tmp_path: Path,
) -> None:
    (model_file := tmp_path / "model.yaml").write_text(content)
    with pytest.raises(SystemExit) as exc:
        run(monkeypatch, "generate", str(model_file))
    assert exc.value.code == 1
    assert message in caplog.text

from pathlib import Path

from netbook.config import Settings


def test_defaults(tmp_path):
    settings = Settings(data_dir=tmp_path)
    assert settings.request_timeout == 30.0
    assert settings.history_max_entries == 100
    assert settings.history_path == tmp_path / "history.json"
    assert settings.variables_path == tmp_path / "variables.json"
    assert settings.log_file == tmp_path / "netbook.log"


def test_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv("NETBOOK_TIMEOUT", "5")
    monkeypatch.setenv("NETBOOK_HISTORY_MAX", "20")
    monkeypatch.setenv("NETBOOK_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("NETBOOK_REQUEST_LOG", str(tmp_path / "req.log"))
    monkeypatch.setenv("EDITOR", "nano")
    monkeypatch.setenv("DEBUG", "true")

    settings = Settings.from_env()

    assert settings.request_timeout == 5.0
    assert settings.history_max_entries == 20
    assert settings.data_dir == Path(tmp_path)
    assert settings.request_log_file == tmp_path / "req.log"
    assert settings.editor == "nano"
    assert settings.debug is True


def test_editor_falls_back_to_visual_then_vi(monkeypatch):
    monkeypatch.delenv("EDITOR", raising=False)
    monkeypatch.setenv("VISUAL", "code -w")
    assert Settings.from_env().editor == "code -w"

    monkeypatch.delenv("VISUAL")
    assert Settings.from_env().editor == "vi"

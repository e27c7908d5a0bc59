from __future__ import annotations
import pytest
from pathlib import Path
from csvtable.config.loader import ConfigError, Settings, load_config


def _write(temp_workdir: Path, text: str) -> Path:
    cfg = temp_workdir / "config" / "csvtable.yml"
    cfg.write_text(text, encoding="utf-8")
    return cfg


def test_defaults_without_file():
    cfg = load_config(None)
    assert cfg == Settings()
    assert cfg.max_file_bytes == 400_000
    assert cfg.content_type == "text/csv"
    assert cfg.encoding == "utf-8-sig"
    assert cfg.log_level == "INFO"


def test_load_config_success(temp_workdir: Path):
    path = _write(temp_workdir, "max_file_bytes: 1000\nlog_level: DEBUG\n")
    cfg = load_config(path)
    assert cfg.max_file_bytes == 1000
    assert cfg.log_level == "DEBUG"
    assert cfg.content_type == "text/csv"


def test_empty_file_means_defaults(temp_workdir: Path):
    assert load_config(_write(temp_workdir, "")) == Settings()


def test_load_config_missing_file(temp_workdir: Path):
    with pytest.raises(ConfigError) as e:
        load_config(temp_workdir / "config" / "not_exists.yml")
    assert "config file not found" in str(e.value)


def test_load_config_invalid_yaml(temp_workdir: Path):
    with pytest.raises(ConfigError) as e:
        load_config(_write(temp_workdir, "max_file_bytes: [1,\n"))
    assert "invalid yaml" in str(e.value)


def test_load_config_extra_field(temp_workdir: Path):
    with pytest.raises(ConfigError) as e:
        load_config(_write(temp_workdir, "extra_field: not_allowed\n"))
    assert "config validation failed" in str(e.value)


def test_load_config_wrong_type(temp_workdir: Path):
    with pytest.raises(ConfigError) as e:
        load_config(_write(temp_workdir, "max_file_bytes: big\n"))
    assert "config validation failed" in str(e.value)


def test_load_config_bad_log_level(temp_workdir: Path):
    with pytest.raises(ConfigError):
        load_config(_write(temp_workdir, "log_level: LOUD\n"))


def test_env_overrides_file(temp_workdir: Path, monkeypatch):
    path = _write(temp_workdir, "max_file_bytes: 1000\n")
    monkeypatch.setenv("CSVTABLE_MAX_FILE_BYTES", "2000")
    monkeypatch.setenv("CSVTABLE_CONTENT_TYPE", "application/csv")
    cfg = load_config(path)
    assert cfg.max_file_bytes == 2000
    assert cfg.content_type == "application/csv"


def test_env_non_integer_max(monkeypatch):
    monkeypatch.setenv("CSVTABLE_MAX_FILE_BYTES", "lots")
    with pytest.raises(ConfigError) as e:
        load_config(None)
    assert "must be an integer" in str(e.value)


def test_env_unknown_encoding(monkeypatch):
    monkeypatch.setenv("CSVTABLE_ENCODING", "no-such-codec")
    with pytest.raises(ConfigError) as e:
        load_config(None)
    assert "unknown encoding" in str(e.value)


def test_dotenv_file_is_loaded_when_requested(temp_workdir: Path, monkeypatch):
    # registered with monkeypatch so the value written by load_dotenv is undone on teardown
    monkeypatch.setenv("CSVTABLE_MAX_FILE_BYTES", "400000")
    (temp_workdir / ".env").write_text("CSVTABLE_MAX_FILE_BYTES=123\n", encoding="utf-8")
    assert load_config(None).max_file_bytes == 400_000
    cfg = load_config(None, load_env=True)
    assert cfg.max_file_bytes == 123

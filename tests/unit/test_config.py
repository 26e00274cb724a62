"""Tests for configuration loading."""

from accessgate.config import load_config
from accessgate.security import application_security


def test_load_config_from_env(tmp_path, monkeypatch):
    config_path = tmp_path / "accessgate.yaml"
    config_path.write_text(
        """
engine:
  gate_timeout: 2.5
  default_allow: false
log_level: DEBUG
gates:
  - name: closed
    verdicts:
      read: denied
    properties:
      access.context: application
"""
    )
    monkeypatch.setenv("ACCESSGATE_CONFIG", str(config_path))

    config = load_config()
    assert config.engine.gate_timeout == 2.5
    assert config.engine.default_allow is False
    assert config.log_level == "DEBUG"
    assert config.gates[0].name == "closed"
    assert config.gates[0].properties["access.context"] == "application"


def test_defaults_without_file(tmp_path, monkeypatch):
    monkeypatch.delenv("ACCESSGATE_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)

    config = load_config()
    assert config.engine.gate_timeout == 5.0
    assert config.engine.default_allow is True
    assert config.gates == []


def test_env_overrides(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("ACCESSGATE_GATE_TIMEOUT", "0")
    monkeypatch.setenv("ACCESSGATE_LOG_LEVEL", "warning")

    config = load_config()
    assert config.engine.gate_timeout is None
    assert config.log_level == "WARNING"


def test_unparsable_env_timeout_keeps_default(tmp_path, monkeypatch, caplog):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("ACCESSGATE_GATE_TIMEOUT", "soon")

    config = load_config()
    assert config.engine.gate_timeout == 5.0
    assert "ACCESSGATE_GATE_TIMEOUT" in caplog.text


def test_security_uses_loaded_config(tmp_path, monkeypatch, registry):
    config_path = tmp_path / "accessgate.yaml"
    config_path.write_text("engine:\n  default_allow: false\n")
    monkeypatch.setenv("ACCESSGATE_CONFIG", str(config_path))

    security = application_security(registry)
    assert security.engine.default_result.value == "denied"

from __future__ import annotations

import logging
import os
from pathlib import Path

import pytest

from action_audit.core.config import AuditSettings, load_settings
from action_audit.core.exceptions import SettingsError

from helpers.io_utils import write_yaml


def test_bundled_defaults(tmp_path: Path) -> None:
    settings = load_settings(tmp_path, environ={})

    assert settings == AuditSettings()
    assert settings.log_tag is None
    assert settings.logger_name == "action_audit.audit"
    assert settings.level_number == logging.INFO
    assert settings.entry_points is True


def test_project_file_overrides_defaults(tmp_path: Path) -> None:
    write_yaml(
        tmp_path / "config" / "action_audit.yml",
        {"audit": {"log_tag": "AUDIT", "plugin_roots": ["vendor/billing"], "level": "warning"}},
    )

    settings = load_settings(tmp_path, environ={})

    assert settings.log_tag == "AUDIT"
    assert settings.plugin_roots == (Path("vendor/billing"),)
    assert settings.level == "WARNING"
    assert settings.log_format == "{controller}/{action} - {message}"


def test_env_overrides_project_file_and_overrides_win(tmp_path: Path) -> None:
    write_yaml(tmp_path / "config" / "action_audit.yml", {"audit": {"log_tag": "FILE", "source_name": "events"}})
    environ = {
        "ACTION_AUDIT_LOG_TAG": "ENV",
        "ACTION_AUDIT_ENTRY_POINTS": "false",
        "ACTION_AUDIT_PLUGIN_ROOTS": os.pathsep.join(["a", "b"]),
        "UNRELATED": "x",
    }

    settings = load_settings(tmp_path, environ=environ)
    assert settings.log_tag == "ENV"
    assert settings.source_name == "events"
    assert settings.entry_points is False
    assert settings.plugin_roots == (Path("a"), Path("b"))

    settings = load_settings(tmp_path, environ=environ, overrides={"log_tag": "CALLER"})
    assert settings.log_tag == "CALLER"


def test_reads_process_environment_by_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ACTION_AUDIT_LOG_FORMAT", "AUDIT: {controller}#{action}: {message}")
    settings = load_settings()
    assert settings.formatter()("admin/users", "create", "ok") == "AUDIT: admin/users#create: ok"


def test_commented_out_section_keeps_defaults(tmp_path: Path) -> None:
    path = tmp_path / "config" / "action_audit.yml"
    path.parent.mkdir(parents=True)
    path.write_text("audit:\n  # log_tag: AUDIT\n", encoding="utf-8")

    assert load_settings(tmp_path, environ={}) == AuditSettings()


def test_yaml_extension_is_accepted(tmp_path: Path) -> None:
    write_yaml(tmp_path / "config" / "action_audit.yaml", {"audit": {"log_tag": "YAML"}})
    assert load_settings(tmp_path, environ={}).log_tag == "YAML"


@pytest.mark.parametrize(
    "content",
    ["- a list\n", "audit: [unclosed\n"],
)
def test_unreadable_project_file_raises(tmp_path: Path, content: str) -> None:
    path = tmp_path / "config" / "action_audit.yml"
    path.parent.mkdir(parents=True)
    path.write_text(content, encoding="utf-8")

    with pytest.raises(SettingsError):
        load_settings(tmp_path, environ={})


@pytest.mark.parametrize(
    "overrides",
    [
        {"level": "LOUD"},
        {"entry_points": "maybe"},
        {"plugin_roots": 5},
        {"log_format": "{0} {message}"},
        {"log_format": "{message.missing_attribute}"},
    ],
)
def test_invalid_values_raise_settings_error(overrides: dict) -> None:
    with pytest.raises(SettingsError):
        load_settings(overrides=overrides, environ={})


def test_section_must_be_a_mapping() -> None:
    with pytest.raises(SettingsError):
        AuditSettings.from_mapping(["not", "a", "mapping"])  # type: ignore[arg-type]


def test_formatter_keeps_unknown_fields() -> None:
    settings = AuditSettings(log_format="[{request_id}] {controller}/{action}: {message}")
    assert settings.formatter()("sessions", "create", "hi") == "[{request_id}] sessions/create: hi"


def test_blank_tag_means_no_tag() -> None:
    assert load_settings(overrides={"log_tag": "  "}, environ={}).log_tag is None


def test_with_overrides_and_to_dict() -> None:
    settings = AuditSettings().with_overrides(log_tag="AUDIT", plugin_roots=(Path("vendor"),))

    assert settings.to_dict() == {
        "log_tag": "AUDIT",
        "log_format": "{controller}/{action} - {message}",
        "logger_name": "action_audit.audit",
        "level": "INFO",
        "source_name": "audit",
        "plugin_roots": ["vendor"],
        "entry_points": True,
    }

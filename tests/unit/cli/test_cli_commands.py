from __future__ import annotations

import json
from pathlib import Path

import pytest

from action_audit.cli._dispatcher import discover_commands, main as action_audit_main

from helpers.io_utils import write_messages, write_yaml


@pytest.fixture
def project(isolated_project_env: Path) -> Path:
    write_messages(
        isolated_project_env,
        {
            "manage": {"accounts": {"create": "Created account %{id}", "destroy": "Deleted %{id}"}},
            "sessions": {"destroy": "User logged out"},
        },
    )
    return isolated_project_env


def _run(capsys: pytest.CaptureFixture[str], *argv: str) -> tuple[int, str, str]:
    rc = action_audit_main(list(argv))
    out, err = capsys.readouterr()
    return rc, out, err


def test_commands_are_discovered() -> None:
    assert set(discover_commands()) == {"init", "lookup", "render", "show", "validate"}


def test_no_command_prints_help(capsys: pytest.CaptureFixture[str]) -> None:
    rc, out, _ = _run(capsys)
    assert rc == 0
    assert "action-audit" in out


def test_lookup(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    rc, out, _ = _run(capsys, "lookup", "manage/accounts", "create")
    assert rc == 0
    assert out.strip() == "Created account %{id}"

    rc, out, _ = _run(capsys, "lookup", "manage/accounts", "update", "--json")
    assert rc == 1
    assert json.loads(out) == {"path": "manage/accounts", "key": "update", "found": False, "template": None}


def test_lookup_with_explicit_repo_root_and_extra_source(
    tmp_path: Path, project: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    extra = write_yaml(tmp_path / "override.yml", {"sessions": {"destroy": "Signed out %{email}"}})

    rc, out, _ = _run(
        capsys, "lookup", "sessions", "destroy", "--repo-root", str(project), "--source", str(extra)
    )

    assert rc == 0
    assert out.strip() == "Signed out %{email}"


def test_render(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    rc, out, _ = _run(capsys, "render", "manage/accounts", "create", "-p", "id=123", "-p", "name=Acme")
    assert rc == 0
    assert out.strip() == "Created account 123"

    rc, out, _ = _run(capsys, "render", "manage/accounts", "create")
    assert out.strip() == "Created account %{id} (interpolation error: key{id} not found)"


def test_render_line_uses_settings(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    write_yaml(project / "config" / "action_audit.yml", {"audit": {"log_tag": "AUDIT"}})

    rc, out, _ = _run(capsys, "render", "sessions", "destroy", "--line", "--json")

    assert rc == 0
    assert json.loads(out)["output"] == "[AUDIT] sessions/destroy - User logged out"


def test_render_rejects_malformed_params(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    rc, _, err = _run(capsys, "render", "sessions", "destroy", "-p", "oops")
    assert rc == 2
    assert "name=value" in err


def test_render_missing_template(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    rc, out, _ = _run(capsys, "render", "sessions", "create")
    assert rc == 1
    assert "No template for sessions create" in out


def test_show_yaml_json_and_flat(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    rc, out, _ = _run(capsys, "show", "manage/accounts")
    assert rc == 0
    assert "create: Created account %{id}" in out

    rc, out, _ = _run(capsys, "show", "--json")
    assert json.loads(out)["sessions"] == {"destroy": "User logged out"}

    rc, out, _ = _run(capsys, "show", "manage", "--format", "flat")
    assert out.splitlines() == [
        "manage/accounts#create: Created account %{id}",
        "manage/accounts#destroy: Deleted %{id}",
    ]

    rc, out, _ = _run(capsys, "show", "nowhere")
    assert rc == 1


def test_validate_reports_placeholders(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    rc, out, _ = _run(capsys, "validate", "--json")

    assert rc == 0
    payload = json.loads(out)
    assert payload["valid"] is True
    (entry,) = payload["sources"]
    assert entry["status"] == "ok"
    assert entry["templates"]["manage/accounts#create"] == ["id"]
    assert entry["templates"]["sessions#destroy"] == []


def test_validate_flags_invalid_sources(tmp_path: Path, project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    bad = tmp_path / "bad.yml"
    bad.write_text("sessions:\n  destroy:\n    - not\n    - a template\n", encoding="utf-8")

    rc, out, _ = _run(capsys, "validate", "--source", str(bad))

    assert rc == 1
    assert f"{bad}: invalid" in out
    assert "manage/accounts#create: id" in out


def test_init_seeds_starter_files(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    rc, out, _ = _run(capsys, "init", str(tmp_path), "--json")
    assert rc == 0
    payload = json.loads(out)
    assert payload["status"] == "success"
    assert len(payload["created"]) == 2
    assert (tmp_path / "config" / "audit.yml").is_file()
    assert (tmp_path / "config" / "action_audit.yml").is_file()

    rc, out, _ = _run(capsys, "init", str(tmp_path), "--json")
    assert json.loads(out)["skipped"] and not json.loads(out)["created"]

    rc, out, _ = _run(capsys, "init", str(tmp_path), "--force", "--json")
    assert len(json.loads(out)["created"]) == 2


def test_seeded_project_loads_cleanly(isolated_project_env: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _run(capsys, "init", str(isolated_project_env))

    rc, out, _ = _run(capsys, "validate", "--json")

    assert rc == 0
    assert json.loads(out)["sources"][0]["status"] == "ok"


def test_settings_errors_exit_with_code_1(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    write_yaml(project / "config" / "action_audit.yml", {"audit": {"level": "LOUD"}})

    rc, _, err = _run(capsys, "lookup", "sessions", "destroy")

    assert rc == 1
    assert "Unknown log level" in err

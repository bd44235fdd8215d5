from __future__ import annotations

from action_audit.core.utils.merge import deep_merge


def test_deep_merge_recurses_into_dicts() -> None:
    base = {"audit": {"log_tag": None, "level": "INFO"}}
    override = {"audit": {"log_tag": "AUDIT"}}

    assert deep_merge(base, override) == {"audit": {"log_tag": "AUDIT", "level": "INFO"}}


def test_deep_merge_replaces_lists_and_scalars() -> None:
    base = {"audit": {"plugin_roots": ["a", "b"]}, "x": {"y": 1}}
    override = {"audit": {"plugin_roots": ["c"]}, "x": "flat"}

    assert deep_merge(base, override) == {"audit": {"plugin_roots": ["c"]}, "x": "flat"}


def test_deep_merge_does_not_mutate_inputs() -> None:
    base = {"audit": {"level": "INFO"}}
    override = {"audit": {"level": "DEBUG"}}

    deep_merge(base, override)

    assert base == {"audit": {"level": "INFO"}}
    assert override == {"audit": {"level": "DEBUG"}}


def test_deep_merge_with_empty_override() -> None:
    assert deep_merge({"a": 1}, {}) == {"a": 1}

import os
import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'action_audit' and tests/ as 'helpers'
for p in (SRC_ROOT, TESTS_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))


from action_audit.core.audit import reset_stdlib_logging_for_tests

from helpers.cache_utils import reset_action_audit_caches


@pytest.fixture(autouse=True)
def _isolate_action_audit(monkeypatch):
    """Fresh caches, no inherited ACTION_AUDIT_* variables, default logging."""
    for key in list(os.environ):
        if key.startswith("ACTION_AUDIT_"):
            monkeypatch.delenv(key, raising=False)
    reset_action_audit_caches()
    reset_stdlib_logging_for_tests()
    yield
    reset_stdlib_logging_for_tests()
    reset_action_audit_caches()


@pytest.fixture
def isolated_project_env(tmp_path, monkeypatch):
    """Empty application root used as the working directory.

    Entry-point discovery is disabled so installed distributions cannot
    contribute messages to the test.
    """
    monkeypatch.setenv("ACTION_AUDIT_ENTRY_POINTS", "false")
    monkeypatch.chdir(tmp_path)
    (tmp_path / "config").mkdir()
    return tmp_path

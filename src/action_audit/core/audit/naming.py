"""Controller name → message path conversion.

    "Manage::AccountsController"  -> "manage/accounts"
    "Admin.UsersController"       -> "admin/users"
    "HTTPStatusController"        -> "http_status"
"""
from __future__ import annotations

import re
from typing import Any

_ACRONYM_RX = re.compile(r"([A-Z]+)([A-Z][a-z])")
_CAMEL_RX = re.compile(r"([a-z\d])([A-Z])")
_SUFFIX = "_controller"


def underscore(name: str) -> str:
    """``"Manage::AccountsController"`` -> ``"manage/accounts_controller"``."""
    path = name.replace("::", "/").replace(".", "/")
    path = _ACRONYM_RX.sub(r"\1_\2", path)
    path = _CAMEL_RX.sub(r"\1_\2", path)
    return path.replace("-", "_").lower()


def controller_path_for(controller: Any) -> str:
    """Message path for a controller name, class or instance."""
    if isinstance(controller, str):
        name = controller
    elif isinstance(controller, type):
        name = controller.__qualname__
    else:
        name = type(controller).__qualname__

    *parents, leaf = underscore(name).split("/")
    if leaf.endswith(_SUFFIX):
        leaf = leaf[: -len(_SUFFIX)]
    return "/".join([*parents, leaf])


__all__ = ["controller_path_for", "underscore"]

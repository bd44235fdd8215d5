from __future__ import annotations

import pytest

from action_audit.core.audit import controller_path_for, underscore


class BillingInvoicesController:
    pass


@pytest.mark.parametrize(
    "name, expected",
    [
        ("Manage::AccountsController", "manage/accounts"),
        ("manage.AccountsController", "manage/accounts"),
        ("Admin::UsersController", "admin/users"),
        ("SessionsController", "sessions"),
        ("HTTPStatusController", "http_status"),
        ("Api::V2::OrderItemsController", "api/v2/order_items"),
        ("Dashboard", "dashboard"),
    ],
)
def test_controller_path_for_names(name: str, expected: str) -> None:
    assert controller_path_for(name) == expected


def test_controller_path_for_classes_and_instances() -> None:
    assert controller_path_for(BillingInvoicesController) == "billing_invoices"
    assert controller_path_for(BillingInvoicesController()) == "billing_invoices"


def test_underscore_keeps_controller_suffix() -> None:
    assert underscore("Manage::AccountsController") == "manage/accounts_controller"

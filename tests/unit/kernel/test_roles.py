"""Unit tests for kernel roles."""

from __future__ import annotations

import pytest

from shop_notify.kernel.roles import ELEVATED_ROLES, Role, is_elevated


class TestRoleParse:
    def test_parses_value(self) -> None:
        assert Role.parse("admin") is Role.ADMIN

    def test_parse_is_case_and_space_insensitive(self) -> None:
        assert Role.parse("  Super_Admin ") is Role.SUPER_ADMIN

    def test_passes_role_through(self) -> None:
        assert Role.parse(Role.SUPPORT) is Role.SUPPORT

    @pytest.mark.parametrize("value", [None, "", "owner", "ADMIN!"])
    def test_unknown_is_none(self, value: str | None) -> None:
        assert Role.parse(value) is None

    def test_str_enum_compares_to_value(self) -> None:
        assert Role.MANAGER == "manager"


class TestElevatedRoles:
    def test_members(self) -> None:
        assert ELEVATED_ROLES == {Role.ADMIN, Role.SUPER_ADMIN, Role.MANAGER, Role.SUPPORT}

    def test_customer_not_elevated(self) -> None:
        assert Role.CUSTOMER not in ELEVATED_ROLES
        assert is_elevated("customer") is False

    @pytest.mark.parametrize("value", ["admin", "super_admin", "manager", "support", Role.ADMIN])
    def test_elevated(self, value: str) -> None:
        assert is_elevated(value) is True

    def test_unknown_and_missing_not_elevated(self) -> None:
        assert is_elevated(None) is False
        assert is_elevated("root") is False

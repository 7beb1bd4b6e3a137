"""Tests for the KIND_ALIAS_MAP and resolve_kind_alias in models.py."""
from __future__ import annotations

import pytest

from models import KIND_ALIAS_MAP, KIND_SPECS, ComponentKind, resolve_kind_alias


# ─────────────────────────────────────────────────────────
# resolve_kind_alias unit tests
# ─────────────────────────────────────────────────────────


class TestResolveKindAlias:
    def test_display_names(self):
        for kind in ComponentKind:
            assert resolve_kind_alias(kind.display_name) is kind

    def test_enum_member_names(self):
        assert resolve_kind_alias("TEXT_FIELD") is ComponentKind.TEXT_FIELD
        assert resolve_kind_alias("check_box") is ComponentKind.CHECK_BOX

    def test_swing_button(self):
        assert resolve_kind_alias("JButton") is ComponentKind.BUTTON

    def test_swing_text_area(self):
        assert resolve_kind_alias("JTextArea") is ComponentKind.TEXT_AREA

    def test_qt_line_edit(self):
        assert resolve_kind_alias("QLineEdit") is ComponentKind.TEXT_FIELD

    def test_qt_group_box_is_panel(self):
        assert resolve_kind_alias("QGroupBox") is ComponentKind.PANEL
        assert resolve_kind_alias("QFrame") is ComponentKind.PANEL

    def test_surrounding_whitespace_ignored(self):
        assert resolve_kind_alias("  Label \n") is ComponentKind.LABEL

    def test_unknown_returns_none(self):
        assert resolve_kind_alias("unknown_type_xyz") is None

    def test_unknown_returns_fallback(self):
        assert resolve_kind_alias("slider", ComponentKind.LABEL) is ComponentKind.LABEL

    def test_non_string_returns_fallback(self):
        assert resolve_kind_alias(None) is None
        assert resolve_kind_alias(42, ComponentKind.BUTTON) is ComponentKind.BUTTON


# ─────────────────────────────────────────────────────────
# KIND_ALIAS_MAP integrity tests
# ─────────────────────────────────────────────────────────


class TestAliasMapIntegrity:
    def test_keys_are_lowercase(self):
        for key in KIND_ALIAS_MAP:
            assert key == key.lower(), f"alias {key!r} must be lower-case"

    def test_values_are_kinds(self):
        for key, kind in KIND_ALIAS_MAP.items():
            assert isinstance(kind, ComponentKind), f"{key} maps to {kind!r}"

    def test_every_kind_reachable(self):
        assert set(KIND_ALIAS_MAP.values()) == set(ComponentKind)

    @pytest.mark.parametrize("kind", list(ComponentKind))
    def test_qt_class_resolves_back(self, kind):
        assert resolve_kind_alias(KIND_SPECS[kind].qt_class) is kind

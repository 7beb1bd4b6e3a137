"""Tests for codegen/generator.py: PyQt6 source generation."""
from __future__ import annotations

import ast

import pytest

from models import ComponentKind, PlacedComponent
from codegen.generator import class_name_for, generate_code, variable_name


def _init_body(code: str) -> str:
    """The text of init_components, for focused assertions."""
    start = code.index("def init_components(self):")
    end = code.index("def setup_window(self):")
    return code[start:end]


# ─────────────────────────────────────────────────────────
# Naming
# ─────────────────────────────────────────────────────────


class TestNaming:
    def test_variable_names_use_prefix_and_one_based_index(self):
        comps = [
            PlacedComponent.create(ComponentKind.BUTTON, 0, 0),
            PlacedComponent.create(ComponentKind.TEXT_FIELD, 0, 0),
            PlacedComponent.create(ComponentKind.BUTTON, 0, 0),
        ]
        assert [variable_name(c, i) for i, c in enumerate(comps)] == ["button1", "textfield2", "button3"]

    @pytest.mark.parametrize("screen_name,expected", [
        ("Main Screen", "MainScreen"),
        ("login-dialog", "LoginDialog"),
        ("2nd page", "Screen2ndPage"),
        ("", "GeneratedForm"),
        ("!!!", "GeneratedForm"),
    ])
    def test_class_name_for(self, screen_name, expected):
        assert class_name_for(screen_name) == expected


# ─────────────────────────────────────────────────────────
# Generated module
# ─────────────────────────────────────────────────────────


class TestGenerateCode:
    def test_empty_screen_is_valid_python(self):
        code = generate_code([])
        ast.parse(code)
        assert "pass" in _init_body(code)

    def test_all_kinds_is_valid_python(self):
        comps = [PlacedComponent.create(kind, i * 10, i * 10) for i, kind in enumerate(ComponentKind)]
        code = generate_code(comps, "AllKinds", "All Kinds", 640, 480)
        ast.parse(code)
        assert "class AllKinds(QWidget):" in code
        assert "self.setWindowTitle('All Kinds')" in code
        assert "self.resize(640, 480)" in code
        assert 'if __name__ == "__main__":' in code

    def test_imports_only_used_classes(self):
        comps = [PlacedComponent.create(ComponentKind.BUTTON, 0, 0)]
        code = generate_code(comps)
        header = code[:code.index("class ")]
        assert "QPushButton," in header
        assert "QLabel" not in header
        assert "QApplication," in header and "QWidget," in header

    def test_geometry_and_text(self):
        comp = PlacedComponent.create(ComponentKind.BUTTON, 50, 60)
        comp.text = "OK"
        body = _init_body(generate_code([comp]))
        assert "self.button1 = QPushButton(self)" in body
        assert "self.button1.setText('OK')" in body
        assert "self.button1.setGeometry(50, 60, 100, 30)" in body

    def test_defaults_emit_nothing_extra(self):
        comp = PlacedComponent.create(ComponentKind.LABEL, 0, 0)
        body = _init_body(generate_code([comp]))
        for call in ("setEnabled", "setVisible", "setStyleSheet", "setReadOnly", "setChecked"):
            assert call not in body

    def test_disabled_and_hidden(self):
        comp = PlacedComponent.create(ComponentKind.LABEL, 0, 0)
        comp.enabled = False
        comp.visible = False
        body = _init_body(generate_code([comp]))
        assert "self.label1.setEnabled(False)" in body
        assert "self.label1.setVisible(False)" in body

    def test_read_only_text_field_with_columns(self):
        comp = PlacedComponent.create(ComponentKind.TEXT_FIELD, 0, 0)
        comp.editable = False
        comp.columns = 25
        body = _init_body(generate_code([comp]))
        assert "self.textfield1 = QLineEdit(self)" in body
        assert "self.textfield1.setReadOnly(True)" in body
        assert "averageCharWidth() * 25" in body

    def test_default_columns_not_emitted(self):
        comp = PlacedComponent.create(ComponentKind.TEXT_FIELD, 0, 0)
        assert "setMinimumWidth" not in generate_code([comp])

    def test_checked_check_box(self):
        comp = PlacedComponent.create(ComponentKind.CHECK_BOX, 0, 0)
        comp.selected = True
        assert "self.checkbox1.setChecked(True)" in generate_code([comp])

    def test_selected_ignored_for_other_kinds(self):
        comp = PlacedComponent.create(ComponentKind.BUTTON, 0, 0)
        comp.selected = True
        assert "setChecked" not in generate_code([comp])

    def test_custom_background(self):
        comp = PlacedComponent.create(ComponentKind.BUTTON, 0, 0)
        comp.background_color = (255, 0, 0)
        assert 'self.button1.setStyleSheet("background-color: rgb(255, 0, 0);")' in generate_code([comp])

    def test_recolored_panel_background(self):
        comp = PlacedComponent.create(ComponentKind.PANEL, 0, 0)
        assert "setStyleSheet" not in generate_code([comp])
        comp.background_color = (192, 192, 192)
        assert 'self.panel1.setStyleSheet("background-color: rgb(192, 192, 192);")' in generate_code([comp])

    def test_panel_is_group_box_with_title(self):
        comp = PlacedComponent.create(ComponentKind.PANEL, 0, 0)
        body = _init_body(generate_code([comp]))
        assert "self.panel1 = QGroupBox(self)" in body
        assert "self.panel1.setTitle('Panel')" in body
        assert "self.panel1.setAutoFillBackground(True)" in body

    def test_combo_and_list_items(self):
        comps = [
            PlacedComponent.create(ComponentKind.COMBO_BOX, 0, 0),
            PlacedComponent.create(ComponentKind.LIST, 0, 40),
        ]
        body = _init_body(generate_code(comps))
        assert "self.combobox1.addItems(['Option 1', 'Option 2', 'Option 3'])" in body
        assert "self.list2.addItems(['Item 1', 'Item 2', 'Item 3', 'Item 4'])" in body

    def test_text_area_wraps_at_twenty_columns(self):
        comp = PlacedComponent.create(ComponentKind.TEXT_AREA, 0, 0)
        body = _init_body(generate_code([comp]))
        assert "self.textarea1.setLineWrapColumnOrWidth(20)" in body
        assert "self.textarea1.setPlainText('TextArea')" in body

    def test_text_is_escaped(self):
        comp = PlacedComponent.create(ComponentKind.LABEL, 0, 0)
        comp.text = "It's \"quoted\"\nnext line"
        code = generate_code([comp])
        ast.parse(code)

    def test_paint_order_preserved(self):
        comps = [
            PlacedComponent.create(ComponentKind.PANEL, 0, 0),
            PlacedComponent.create(ComponentKind.BUTTON, 10, 10),
        ]
        code = generate_code(comps)
        assert code.index("self.panel1 =") < code.index("self.button2 =")

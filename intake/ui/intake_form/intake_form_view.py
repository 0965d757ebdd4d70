from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date
from typing import Any

from PySide6.QtCore import QDate, Signal
from PySide6.QtWidgets import (
    QButtonGroup,
    QCheckBox,
    QDateEdit,
    QFormLayout,
    QGridLayout,
    QGroupBox,
    QLabel,
    QLineEdit,
    QRadioButton,
    QSpinBox,
    QTextEdit,
    QVBoxLayout,
    QWidget,
)

from intake.application.state.form_state_store import PACK_YEARS_INPUTS, FormStateStore
from intake.domain import field_registry
from intake.domain.field_registry import FieldKind, FieldSpec
from intake.domain.models.intake_form import EPWORTH_FIELDS
from intake.infrastructure.reporting.report_sections import format_field_value

logger = logging.getLogger(__name__)

_EMPTY_DATE = QDate(1900, 1, 1)
_CHOICE_COLUMNS = 3
_DEFAULT_INT_MAX = 999


class IntakeFormView(QWidget):
    """Single scrolling questionnaire generated from the field registry."""

    field_changed = Signal(str)

    def __init__(self, store: FormStateStore, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.store = store
        self._editors: dict[str, QWidget] = {}
        self._layouts: dict[str, QFormLayout] = {}
        self._choice_groups: dict[str, QButtonGroup] = {}
        self._tag_checks: dict[str, dict[str, QCheckBox]] = {}
        self._slot_edits: dict[str, list[QLineEdit]] = {}
        self._loading = False
        self._build_ui()
        self.load_from_store()

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)
        root.setSpacing(10)
        for section in field_registry.iter_sections():
            box = QGroupBox(section.title)
            box.setObjectName(f"section_{section.key}")
            form = QFormLayout(box)
            form.setRowWrapPolicy(QFormLayout.RowWrapPolicy.WrapLongRows)
            for spec in section.fields:
                editor = self._create_editor(spec)
                editor.setObjectName(spec.name)
                self._editors[spec.name] = editor
                self._layouts[spec.name] = form
                if spec.kind == FieldKind.BOOLEAN:
                    form.addRow(editor)
                else:
                    label = f"    • {spec.label}" if spec.is_conditional else spec.label
                    form.addRow(label, editor)
            root.addWidget(box)
        root.addStretch()

    def editor(self, field_name: str) -> QWidget:
        return self._editors[field_name]

    def _create_editor(self, spec: FieldSpec) -> QWidget:
        builders: dict[FieldKind, Callable[[FieldSpec], QWidget]] = {
            FieldKind.SHORT_TEXT: self._line_edit,
            FieldKind.LONG_TEXT: self._text_edit,
            FieldKind.DATE: self._date_edit,
            FieldKind.CHOICE: self._choice,
            FieldKind.INTEGER: self._spin_box,
            FieldKind.BOOLEAN: self._check_box,
            FieldKind.SLOTS: self._slots,
            FieldKind.TAGS: self._tags,
            FieldKind.COMPUTED: self._computed_label,
        }
        return builders[spec.kind](spec)

    def _line_edit(self, spec: FieldSpec) -> QWidget:
        edit = QLineEdit()
        edit.textChanged.connect(lambda text, name=spec.name: self._set(name, text))
        return edit

    def _text_edit(self, spec: FieldSpec) -> QWidget:
        edit = QTextEdit()
        edit.setAcceptRichText(False)
        edit.setFixedHeight(60)
        edit.textChanged.connect(lambda name=spec.name, widget=edit: self._set(name, widget.toPlainText()))
        return edit

    def _date_edit(self, spec: FieldSpec) -> QWidget:
        edit = QDateEdit()
        edit.setDisplayFormat("dd/MM/yyyy")
        edit.setCalendarPopup(True)
        edit.setMinimumDate(_EMPTY_DATE)
        edit.setSpecialValueText(" ")
        edit.dateChanged.connect(lambda value, name=spec.name: self._on_date_changed(name, value))
        return edit

    def _choice(self, spec: FieldSpec) -> QWidget:
        container = QWidget()
        grid = QGridLayout(container)
        grid.setContentsMargins(0, 0, 0, 0)
        group = QButtonGroup(container)
        for index, option in enumerate(spec.options):
            button = QRadioButton(option)
            group.addButton(button, index)
            grid.addWidget(button, index // _CHOICE_COLUMNS, index % _CHOICE_COLUMNS)
        group.idClicked.connect(lambda index, s=spec: self._set(s.name, s.options[index]))
        self._choice_groups[spec.name] = group
        return container

    def _spin_box(self, spec: FieldSpec) -> QWidget:
        spin = QSpinBox()
        spin.setRange(spec.min_value or 0, spec.max_value if spec.max_value is not None else _DEFAULT_INT_MAX)
        spin.valueChanged.connect(lambda value, name=spec.name: self._set(name, int(value)))
        return spin

    def _check_box(self, spec: FieldSpec) -> QWidget:
        check = QCheckBox(spec.label)
        check.toggled.connect(lambda checked, name=spec.name: self._set(name, bool(checked)))
        return check

    def _slots(self, spec: FieldSpec) -> QWidget:
        container = QWidget()
        layout = QVBoxLayout(container)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(4)
        edits: list[QLineEdit] = []
        for index in range(spec.slots):
            edit = QLineEdit()
            edit.setPlaceholderText(f"{spec.label} {index + 1}")
            edit.textChanged.connect(
                lambda text, name=spec.name, position=index: self._set_slot(name, position, text)
            )
            layout.addWidget(edit)
            edits.append(edit)
        self._slot_edits[spec.name] = edits
        return container

    def _tags(self, spec: FieldSpec) -> QWidget:
        container = QWidget()
        grid = QGridLayout(container)
        grid.setContentsMargins(0, 0, 0, 0)
        checks: dict[str, QCheckBox] = {}
        for index, option in enumerate(spec.options):
            check = QCheckBox(option)
            check.toggled.connect(
                lambda checked, name=spec.name, tag=option: self._toggle_tag(name, tag, checked)
            )
            grid.addWidget(check, index // _CHOICE_COLUMNS, index % _CHOICE_COLUMNS)
            checks[option] = check
        self._tag_checks[spec.name] = checks
        return container

    def _computed_label(self, spec: FieldSpec) -> QWidget:
        label = QLabel()
        label.setStyleSheet("font-weight: 600;")
        return label

    def _on_date_changed(self, field_name: str, value: QDate) -> None:
        iso = "" if value == _EMPTY_DATE else value.toString("yyyy-MM-dd")
        if self._loading:
            return
        if field_name == "birth_date":
            self.store.update_birth_date(iso)
            self._after_change("age")
            self.field_changed.emit(field_name)
            return
        self._set(field_name, iso)

    def _set(self, field_name: str, value: Any) -> None:
        if self._loading:
            return
        self.store.update(field_name, value)
        self._after_change(field_name)
        self.field_changed.emit(field_name)

    def _set_slot(self, field_name: str, index: int, text: str) -> None:
        if self._loading:
            return
        self.store.update_array_element(field_name, index, text)
        self.field_changed.emit(field_name)

    def _toggle_tag(self, field_name: str, tag: str, checked: bool) -> None:
        if self._loading:
            return
        self.store.toggle_tag(field_name, tag, checked)
        self.field_changed.emit(field_name)

    def _after_change(self, field_name: str) -> None:
        if field_name in EPWORTH_FIELDS:
            self.store.compute_sleepiness_total()
        if field_name in PACK_YEARS_INPUTS:
            self.store.compute_pack_years()
        self.refresh_computed()
        if field_registry.dependents(field_name):
            self.refresh_visibility()

    def refresh_computed(self) -> None:
        for spec in field_registry.iter_fields():
            if spec.kind != FieldKind.COMPUTED:
                continue
            label = self._editors[spec.name]
            if isinstance(label, QLabel):
                label.setText(format_field_value(spec, self.store.get(spec.name)))

    def refresh_visibility(self) -> None:
        for spec in field_registry.iter_fields():
            if spec.is_conditional:
                self._layouts[spec.name].setRowVisible(self._editors[spec.name], self.store.is_visible(spec.name))

    def load_from_store(self) -> None:
        """Push every record value into its editor without echoing back to the store."""
        self._loading = True
        try:
            for spec in field_registry.iter_fields():
                self._show_value(spec, self.store.get(spec.name))
        finally:
            self._loading = False
        self.refresh_computed()
        self.refresh_visibility()

    def _show_value(self, spec: FieldSpec, value: Any) -> None:
        editor = self._editors[spec.name]
        if isinstance(editor, QLineEdit):
            editor.setText(str(value or ""))
        elif isinstance(editor, QTextEdit):
            editor.setPlainText(str(value or ""))
        elif isinstance(editor, QDateEdit):
            editor.setDate(_to_qdate(value))
        elif isinstance(editor, QSpinBox):
            editor.setValue(int(value or 0))
        elif isinstance(editor, QCheckBox):
            editor.setChecked(bool(value))
        elif spec.kind == FieldKind.CHOICE:
            group = self._choice_groups[spec.name]
            group.setExclusive(False)
            for button in group.buttons():
                button.setChecked(button.text() == value)
            group.setExclusive(True)
        elif spec.kind == FieldKind.SLOTS:
            for edit, item in zip(self._slot_edits[spec.name], value, strict=False):
                edit.setText(str(item or ""))
        elif spec.kind == FieldKind.TAGS:
            selected = set(value or ())
            for tag, check in self._tag_checks[spec.name].items():
                check.setChecked(tag in selected)


def _to_qdate(value: Any) -> QDate:
    text = str(value or "").strip()
    if not text:
        return _EMPTY_DATE
    try:
        parsed = date.fromisoformat(text[:10])
    except ValueError:
        logger.warning("Ignoring malformed date value %r", text)
        return _EMPTY_DATE
    return QDate(parsed.year, parsed.month, parsed.day)

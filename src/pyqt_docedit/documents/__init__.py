"""
Document editing engine.

Value kinds, edit buffers, change detection, import/export reconciliation
and the edit session that ties them to the store and clipboard.
"""

from __future__ import annotations

import importlib
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .value_kinds import ValueKindBase, ValueKind, classify_value
    from .edit_buffer import EditBuffer
    from .change_detector import ChangeDetector, DiffResult
    from .reconciler import DocumentReconciler, ImportResult
    from .session import EditSession, SessionState, SaveStatus, SaveOutcome

_EXPORTS = {
    "ValueKindBase": ("pyqt_docedit.documents.value_kinds", "ValueKindBase"),
    "ValueKind": ("pyqt_docedit.documents.value_kinds", "ValueKind"),
    "NullKind": ("pyqt_docedit.documents.value_kinds", "NullKind"),
    "BooleanKind": ("pyqt_docedit.documents.value_kinds", "BooleanKind"),
    "NumberKind": ("pyqt_docedit.documents.value_kinds", "NumberKind"),
    "StructuredKind": ("pyqt_docedit.documents.value_kinds", "StructuredKind"),
    "TextKind": ("pyqt_docedit.documents.value_kinds", "TextKind"),
    "classify_value": ("pyqt_docedit.documents.value_kinds", "classify_value"),
    "EditBuffer": ("pyqt_docedit.documents.edit_buffer", "EditBuffer"),
    "ChangeDetector": ("pyqt_docedit.documents.change_detector", "ChangeDetector"),
    "DiffResult": ("pyqt_docedit.documents.change_detector", "DiffResult"),
    "DocumentReconciler": ("pyqt_docedit.documents.reconciler", "DocumentReconciler"),
    "ImportResult": ("pyqt_docedit.documents.reconciler", "ImportResult"),
    "EditSession": ("pyqt_docedit.documents.session", "EditSession"),
    "SessionState": ("pyqt_docedit.documents.session", "SessionState"),
    "SaveStatus": ("pyqt_docedit.documents.session", "SaveStatus"),
    "SaveOutcome": ("pyqt_docedit.documents.session", "SaveOutcome"),
}


def __getattr__(name: str):
    if name in _EXPORTS:
        module_name, attr = _EXPORTS[name]
        module = importlib.import_module(module_name)
        value = getattr(module, attr)
        globals()[name] = value
        return value
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = list(_EXPORTS.keys())

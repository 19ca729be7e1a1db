import math

from PyQt5 import QtWidgets, QtGui, QtCore

from PALM.src.drivers.field_source import FieldSource, parse_answer


class CalibrationDialog(QtWidgets.QDialog):
    def __init__(self, fields, title="", decimals=3, parent=None):
        super().__init__(parent)
        self.setWindowTitle(title)
        self.decimals = decimals
        self.defaults = []
        self.edits = []

        layout = QtWidgets.QVBoxLayout(self)
        form = QtWidgets.QFormLayout()
        form.setLabelAlignment(QtCore.Qt.AlignRight)
        layout.addLayout(form)

        for label, default in fields:
            self._add_float(form, label, default)

        buttons = QtWidgets.QDialogButtonBox(
            QtWidgets.QDialogButtonBox.Ok | QtWidgets.QDialogButtonBox.Cancel
        )
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)

    def _format(self, value: float) -> str:
        if math.isnan(value):
            return "NaN"
        return f"{value:.{self.decimals}f}"

    def _add_float(self, layout, label, default):
        w = QtWidgets.QLineEdit(self._format(default))
        validator = QtGui.QDoubleValidator(w)
        # Defaults are shown with "." whatever the system locale.
        validator.setLocale(QtCore.QLocale.c())
        validator.setNotation(QtGui.QDoubleValidator.ScientificNotation)
        w.setValidator(validator)
        w.setAlignment(QtCore.Qt.AlignRight)
        layout.addRow(label + ":", w)
        self.defaults.append(float(default))
        self.edits.append(w)

    def values(self) -> list:
        result = []
        for w, default in zip(self.edits, self.defaults):
            text = w.text()
            # The field only shows the rounded default; untouched fields keep the exact value.
            if text == self._format(default):
                result.append(default)
            else:
                result.append(parse_answer(text, math.nan))
        return result


class QtFieldSource(FieldSource):
    """Asks for the values in a modal dialog. A QApplication must exist."""

    def __init__(self, parent=None):
        self.parent = parent

    def request(self, fields, title="", decimals=3):
        dialog = CalibrationDialog(fields, title, decimals, self.parent)
        if dialog.exec_() != QtWidgets.QDialog.Accepted:
            return None
        return dialog.values()

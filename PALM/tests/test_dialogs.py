import math
import os
import unittest
from pathlib import Path
from unittest import mock
import sys

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt5 import QtCore, QtWidgets
from PyQt5.QtTest import QTest

from PALM.src.ui.dialogs import CalibrationDialog, QtFieldSource


FORM = [("SizeX_(microns)", 100.123456789), ("SizeY_(microns)", 185.7), ("Zero_StagePosition_X-coordinate", 118.0)]


class TestCalibrationDialog(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.app = QtWidgets.QApplication.instance() or QtWidgets.QApplication([])

    def setUp(self):
        self.saved_locale = QtCore.QLocale()

    def tearDown(self):
        QtCore.QLocale.setDefault(self.saved_locale)

    def test_defaults_shown_rounded(self):
        dialog = CalibrationDialog(FORM, "Zeiss PALM Roi IO", 3)
        self.assertEqual(dialog.edits[0].text(), "100.123")
        self.assertEqual(dialog.windowTitle(), "Zeiss PALM Roi IO")

    def test_unedited_fields_keep_exact_default(self):
        dialog = CalibrationDialog(FORM, decimals=3)
        self.assertEqual(dialog.values(), [100.123456789, 185.7, 118.0])

    def test_edited_and_cleared_fields(self):
        dialog = CalibrationDialog(FORM, decimals=3)
        dialog.edits[0].setText("250.5")
        dialog.edits[1].clear()
        dialog.edits[2].setText("abc")
        values = dialog.values()
        self.assertEqual(values[0], 250.5)
        self.assertTrue(math.isnan(values[1]))
        self.assertTrue(math.isnan(values[2]))

    def test_typing_under_comma_locale(self):
        QtCore.QLocale.setDefault(QtCore.QLocale(QtCore.QLocale.French, QtCore.QLocale.France))
        dialog = CalibrationDialog(FORM, decimals=3)
        edit = dialog.edits[0]
        edit.clear()
        QTest.keyClicks(edit, "250.5")
        self.assertEqual(edit.text(), "250.5")
        self.assertEqual(dialog.values()[0], 250.5)
        self.assertEqual(edit.validator().locale(), QtCore.QLocale.c())


class TestQtFieldSource(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.app = QtWidgets.QApplication.instance() or QtWidgets.QApplication([])

    def test_accepted_returns_values(self):
        with mock.patch.object(CalibrationDialog, "exec_", return_value=QtWidgets.QDialog.Accepted):
            values = QtFieldSource().request(FORM, "Title", 3)
        self.assertEqual(values, [100.123456789, 185.7, 118.0])

    def test_rejected_cancels(self):
        with mock.patch.object(CalibrationDialog, "exec_", return_value=QtWidgets.QDialog.Rejected):
            self.assertIsNone(QtFieldSource().request(FORM, "Title", 3))


if __name__ == "__main__":
    unittest.main()

"""Smoke tests for the typer CLI against a temporary data file."""

import sys
import tempfile
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from typer.testing import CliRunner

from inventory_manager.cli import app
from inventory_manager.store import InventoryStore

runner = CliRunner()


class TestCli(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.path = Path(self._tmp.name) / "inventory.csv"

    def tearDown(self):
        self._tmp.cleanup()

    def invoke(self, *args, **kwargs):
        return runner.invoke(app, ["--file", str(self.path), *args], **kwargs)

    def test_add_then_report(self):
        result = self.invoke("add", "Widget", "10", "2.5", "--category", "Tools", "--price", "4")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Item added with ID 1", result.output)
        items = InventoryStore(self.path).all_items()
        self.assertEqual([(i.name, i.category, i.selling_price) for i in items], [("Widget", "Tools", 4.0)])

        report = self.invoke("report")
        self.assertEqual(report.exit_code, 0, report.output)
        self.assertIn("Stock value: 25.00", report.output)
        self.assertIn("Potential profit: 15.00", report.output)

    def test_invalid_add_exits_nonzero(self):
        result = self.invoke("add", "", "1", "2.5")
        self.assertEqual(result.exit_code, 1)
        self.assertEqual(InventoryStore(self.path).all_items(), [])

    def test_update_adjust_delete(self):
        self.invoke("add", "Widget", "10", "2.5")
        self.assertEqual(self.invoke("update", "1", "--quantity", "4", "--supplier", "Acme").exit_code, 0)
        self.assertEqual(self.invoke("adjust", "1", "3").exit_code, 0)
        item = InventoryStore(self.path).get(1)
        self.assertEqual((item.quantity, item.supplier), (7, "Acme"))
        self.assertEqual(self.invoke("delete", "1").exit_code, 0)
        self.assertEqual(self.invoke("delete", "1").exit_code, 1)

    def test_export_import(self):
        self.invoke("add", "Widget", "10", "2.5")
        target = Path(self._tmp.name) / "copy.csv"
        self.assertEqual(self.invoke("export", str(target)).exit_code, 0)
        self.assertTrue(target.exists())
        result = self.invoke("import", str(target), "--replace")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Imported 1 items (0 errors)", result.output)

    def test_menu_add_and_exit(self):
        answers = ["1", "Widget", "", "3", "1.5", "", "", "", "", "9"]
        result = self.invoke("menu", input="\n".join(answers) + "\n")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Exiting program.", result.output)
        items = InventoryStore(self.path).all_items()
        self.assertEqual([(i.name, i.category, i.quantity) for i in items], [("Widget", "General", 3)])

    def test_menu_invalid_option(self):
        result = self.invoke("menu", input="42\n9\n")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Invalid option", result.output)


if __name__ == "__main__":
    unittest.main()

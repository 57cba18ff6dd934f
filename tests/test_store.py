"""Tests for InventoryStore CRUD, queries and analytics (in-memory, no backing file)."""

import sys
import unittest
from pathlib import Path
from unittest.mock import patch

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from inventory_manager.errors import ValidationError
from inventory_manager.models.item import SECONDS_PER_DAY
from inventory_manager.store import InventoryStore


class TestStoreCrud(unittest.TestCase):
    def setUp(self):
        self.store = InventoryStore()

    def test_ids_are_distinct_and_increasing(self):
        ids = [self.store.add(f"Item {n}", "Misc", n, 1.0) for n in range(5)]
        self.assertEqual(ids, sorted(set(ids)))
        self.assertEqual(ids, [1, 2, 3, 4, 5])
        self.assertEqual(self.store.count(), 5)

    def test_add_validation_failures_leave_store_unchanged(self):
        with self.assertRaises(ValidationError):
            self.store.add("", "cat", 1, 1.0)
        with self.assertRaises(ValidationError):
            self.store.add("x", "cat", -1, 1.0)
        with self.assertRaises(ValidationError):
            self.store.add("x", "cat", 1, -0.5)
        self.assertEqual(self.store.count(), 0)
        self.assertEqual(self.store.next_id, 1)

    def test_end_to_end_totals_and_delete(self):
        item_id = self.store.add("Widget", "Tools", 10, 2.50, 4.00)
        self.assertEqual(self.store.total_value(), 25.00)
        self.assertEqual(self.store.total_profit(), 15.00)
        before = self.store.count()
        self.assertTrue(self.store.delete(item_id))
        self.assertEqual(self.store.count(), before - 1)
        self.assertIsNone(self.store.get(item_id))
        self.assertNotIn(item_id, self.store)
        self.assertFalse(self.store.delete(item_id))

    def test_ids_not_reused_after_delete(self):
        first = self.store.add("A", "X", 1, 1.0)
        self.store.delete(first)
        self.assertEqual(self.store.add("B", "X", 1, 1.0), first + 1)

    def test_delete_keeps_order_and_lookup(self):
        a = self.store.add("A", "X", 1, 1.0)
        b = self.store.add("B", "X", 1, 1.0)
        c = self.store.add("C", "X", 1, 1.0)
        self.store.delete(b)
        self.assertEqual([item.id for item in self.store], [a, c])
        self.assertEqual(self.store.get(c).name, "C")

    def test_adjust_quantity(self):
        item_id = self.store.add("Widget", "Tools", 4, 1.0)
        self.assertTrue(self.store.adjust_quantity(item_id, 6))
        self.assertEqual(self.store.get(item_id).quantity, 10)
        with self.assertRaises(ValidationError):
            self.store.adjust_quantity(item_id, -11)
        self.assertEqual(self.store.get(item_id).quantity, 10)
        self.assertFalse(self.store.adjust_quantity(999, 1))

    def test_update_applies_fields_independently(self):
        item_id = self.store.add("Widget", "Tools", 4, 1.0)
        report = self.store.update_fields(item_id, name="Gadget", quantity=-3, cost=2.0)
        self.assertTrue(report.found)
        self.assertEqual(sorted(report.applied), ["cost", "name"])
        self.assertIn("quantity", report.rejected)
        item = self.store.get(item_id)
        self.assertEqual(item.name, "Gadget")
        self.assertEqual(item.quantity, 4)
        self.assertEqual(item.cost, 2.0)

    def test_update_none_means_unchanged(self):
        item_id = self.store.add("Widget", "Tools", 4, 1.0, supplier="Acme")
        self.assertTrue(self.store.update(item_id, supplier=None, location="Bin 3"))
        item = self.store.get(item_id)
        self.assertEqual(item.supplier, "Acme")
        self.assertEqual(item.location, "Bin 3")

    def test_update_minimum_stock_zero_is_a_value(self):
        item_id = self.store.add("Widget", "Tools", 4, 1.0)
        self.store.update(item_id, minimum_stock=0)
        self.assertEqual(self.store.get(item_id).minimum_stock, 0)

    def test_update_missing_and_unknown_field(self):
        self.assertFalse(self.store.update(42, name="x"))
        item_id = self.store.add("Widget", "Tools", 4, 1.0)
        with self.assertRaises(TypeError):
            self.store.update(item_id, barcode="111")

    def test_returned_items_are_copies(self):
        item_id = self.store.add("Widget", "Tools", 4, 1.0)
        copy = self.store.get(item_id)
        copy.quantity = 99
        self.store.search("widget")[0].name = "Changed"
        self.assertEqual(self.store.get(item_id).quantity, 4)
        self.assertEqual(self.store.get(item_id).name, "Widget")

    def test_clear_keeps_id_counter(self):
        self.store.add("A", "X", 1, 1.0)
        self.store.add("B", "X", 1, 1.0)
        self.store.clear()
        self.assertEqual(len(self.store), 0)
        self.assertEqual(self.store.add("C", "X", 1, 1.0), 3)


class TestStoreQueries(unittest.TestCase):
    def setUp(self):
        self.store = InventoryStore()
        with patch("inventory_manager.models.item.random.randint", return_value=555123999):
            self.laptop = self.store.add("Laptop", "Electronics", 3, 500.0, 750.0, supplier="TechCorp")
        with patch("inventory_manager.models.item.random.randint", return_value=777000111):
            self.hammer = self.store.add("Hammer", "Tools", 20, 8.0, 12.0, supplier="Bob's Hardware")
            self.drill = self.store.add("Drill", "Power Tools", 5, 40.0, 65.0, supplier="Bob's Hardware")

    def test_search_case_insensitive_text_fields(self):
        self.assertEqual([item.id for item in self.store.search("tech")], [self.laptop])
        self.assertEqual([item.id for item in self.store.search("TOOLS")], [self.hammer, self.drill])
        self.assertEqual([item.id for item in self.store.search("bob")], [self.hammer, self.drill])

    def test_search_barcode_substring(self):
        self.assertEqual([item.id for item in self.store.search("123")], [self.laptop])
        self.assertEqual(self.store.search("999999"), [])

    def test_filter_by_category_exact_case_insensitive(self):
        self.assertEqual([item.id for item in self.store.filter_by_category("tools")], [self.hammer])
        self.assertEqual(self.store.filter_by_category("Tool"), [])
        self.assertEqual(self.store.categories(), ["Electronics", "Power Tools", "Tools"])

    def test_low_stock_items(self):
        self.assertEqual([item.id for item in self.store.low_stock_items()], [self.laptop, self.drill])

    def test_expiry_queries(self):
        now = 1_700_000_000
        store = InventoryStore(expiry_window_days=10)
        expired = store.add("Milk", "Dairy", 10, 1.0, expiry_date=now - 60)
        soon = store.add("Cheese", "Dairy", 10, 3.0, expiry_date=now + 2 * SECONDS_PER_DAY)
        store.add("Salt", "Pantry", 10, 0.5)
        store.add("Jam", "Pantry", 10, 2.0, expiry_date=now + 100 * SECONDS_PER_DAY)
        self.assertEqual([item.id for item in store.expired_items(now)], [expired])
        self.assertEqual([item.id for item in store.expiring_soon_items(now=now)], [soon])
        self.assertEqual(len(store.expiring_soon_items(days=200, now=now)), 2)
        report = store.analytics(now=now)
        self.assertEqual(report.expired_count, 1)
        self.assertEqual(report.expiring_soon_count, 1)
        self.assertEqual(report.expiry_window_days, 10)

    def test_analytics_report(self):
        report = self.store.analytics()
        self.assertEqual(report.total_items, 3)
        self.assertEqual(report.total_units, 28)
        self.assertEqual(report.total_value, 1500.0 + 160.0 + 200.0)
        self.assertEqual(report.total_profit, 750.0 + 80.0 + 125.0)
        self.assertEqual([c.category for c in report.categories], ["Electronics", "Power Tools", "Tools"])
        self.assertEqual(report.categories[2].item_count, 1)
        self.assertEqual(report.categories[2].total_value, 160.0)
        self.assertEqual(report.low_stock_count, 2)
        self.assertEqual([top.id for top in report.top_items], [self.laptop, self.drill, self.hammer])

    def test_top_items_limited_and_stable(self):
        store = InventoryStore()
        ids = [store.add(f"Same {n}", "X", 1, 10.0) for n in range(6)]
        big = store.add("Big", "X", 1, 50.0)
        top = store.analytics().top_items
        self.assertEqual(len(top), 5)
        self.assertEqual([t.id for t in top], [big] + ids[:4])

    def test_empty_store_analytics(self):
        report = InventoryStore().analytics()
        self.assertEqual(report.total_items, 0)
        self.assertEqual(report.total_value, 0)
        self.assertEqual(report.categories, [])
        self.assertEqual(report.top_items, [])


if __name__ == "__main__":
    unittest.main()

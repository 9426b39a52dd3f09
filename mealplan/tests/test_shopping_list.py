import unittest
from mealplan.domain.ShoppingList import ShoppingList, ShoppingListItem
from mealplan.infra.pdf_utils import generate_pdf_for_shopping_list


class TestShoppingList(unittest.TestCase):

    def setUp(self):
        self.shopping_list = ShoppingList([
            ShoppingListItem("a", "Garlic", 4, "cloves", "Vegetables"),
            ShoppingListItem("b", "Rice", 1, "cup", "Grains", is_purchased=True),
            ShoppingListItem("c", "Tomato", 2, "pcs", "Vegetables"),
            ShoppingListItem("d", "Milk", 1, "l", "Dairy", is_purchased=True),
        ])

    def test_progress(self):
        progress = self.shopping_list.progress()
        self.assertEqual(progress["total"], 4)
        self.assertEqual(progress["purchased"], 2)
        self.assertEqual(progress["percentage"], 50)

    def test_progress_of_empty_list(self):
        self.assertEqual(ShoppingList().progress(), {"total": 0, "purchased": 0, "percentage": 0})

    def test_grouped_by_category(self):
        groups = self.shopping_list.grouped_by_category()
        self.assertEqual(list(groups), ["Vegetables", "Grains", "Dairy"])
        self.assertEqual([i.name for i in groups["Vegetables"]], ["Garlic", "Tomato"])

    def test_clear_purchased(self):
        self.assertEqual(self.shopping_list.clear_purchased(), 2)
        self.assertEqual([i.id for i in self.shopping_list.get_items()], ["a", "c"])

    def test_from_dict_skips_non_records(self):
        shopping_list = ShoppingList.from_dict([{"id": "x", "name": "Salt", "quantity": "lots"}, "junk", 3])
        self.assertEqual(len(shopping_list), 1)
        self.assertEqual(shopping_list.find("x").quantity, 0)

    def test_store_section_round_trip(self):
        item = ShoppingListItem.from_dict({"id": "s", "name": "Bread", "quantity": 1, "unit": "loaf",
                                           "category": "Grains", "store_section": "Bakery"})
        self.assertEqual(item.to_dict()["store_section"], "Bakery")
        self.assertNotIn("store_section", self.shopping_list.find("a").to_dict())

    def test_pdf_export(self):
        pdf = generate_pdf_for_shopping_list(self.shopping_list)
        self.assertTrue(pdf.startswith(b"%PDF"))
        self.assertTrue(generate_pdf_for_shopping_list(ShoppingList()).startswith(b"%PDF"))

    def test_pdf_export_with_markup_in_category(self):
        shopping_list = ShoppingList([ShoppingListItem("1", "Fish", 1, "pcs", "Fish & <Chips")])
        self.assertTrue(generate_pdf_for_shopping_list(shopping_list).startswith(b"%PDF"))

    def test_non_text_item_fields_are_coerced(self):
        item = ShoppingListItem.from_dict({"id": 7, "name": 42, "quantity": 1, "unit": 5, "category": None,
                                           "recipes": [3, None, "Soup"]})
        self.assertEqual((item.id, item.name, item.unit, item.category), ("7", "42", "5", ""))
        self.assertEqual(item.recipes, ["3", "Soup"])


if __name__ == '__main__':
    unittest.main()

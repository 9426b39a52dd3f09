import unittest
from mealplan.domain.ShoppingList import ConsolidatedEntry, ShoppingListItem
from mealplan.logic.shopping.merge import merge_shopping_lists


class TestMergeShoppingLists(unittest.TestCase):

    def setUp(self):
        self.existing = [
            ShoppingListItem(id="a1", name="Olive Oil", quantity=1, unit="tbsp", category="Pantry",
                             recipes=["Old Dish"]),
        ]

    def test_matching_line_is_summed(self):
        new = [ConsolidatedEntry("Olive Oil", "Pantry", 2, "tbsp", ["New Dish"])]
        merged = merge_shopping_lists(self.existing, new)
        self.assertEqual(len(merged), 1)
        self.assertEqual(merged[0].id, "a1")
        self.assertEqual(merged[0].quantity, 3)
        self.assertEqual(set(merged[0].recipes), {"Old Dish", "New Dish"})

    def test_match_ignores_case_of_name_and_unit(self):
        new = [ConsolidatedEntry("olive oil", "Pantry", 2, "Tbsp", ["Old Dish"])]
        merged = merge_shopping_lists(self.existing, new)
        self.assertEqual(len(merged), 1)
        self.assertEqual(merged[0].quantity, 3)
        self.assertEqual(merged[0].recipes, ["Old Dish"])

    def test_new_line_becomes_unpurchased_item(self):
        self.existing[0].is_purchased = True
        new = [ConsolidatedEntry("Garlic", "Vegetables", 4, "cloves", ["Stir Fry"])]
        merged = merge_shopping_lists(self.existing, new, id_factory=lambda: "fixed-id")
        self.assertEqual(len(merged), 2)
        garlic = merged[1]
        self.assertEqual(garlic.id, "fixed-id")
        self.assertEqual(garlic.quantity, 4)
        self.assertEqual(garlic.category, "Vegetables")
        self.assertFalse(garlic.is_purchased)
        # the purchased flag of an existing item survives
        self.assertTrue(merged[0].is_purchased)

    def test_generated_ids_are_unique(self):
        new = [
            ConsolidatedEntry("Garlic", "Vegetables", 4, "cloves"),
            ConsolidatedEntry("Rice", "Grains", 1, "cup"),
        ]
        merged = merge_shopping_lists([], new)
        self.assertNotEqual(merged[0].id, merged[1].id)

    def test_existing_list_is_not_modified(self):
        new = [ConsolidatedEntry("Olive Oil", "Pantry", 2, "tbsp", ["New Dish"])]
        merge_shopping_lists(self.existing, new)
        self.assertEqual(self.existing[0].quantity, 1)
        self.assertEqual(self.existing[0].recipes, ["Old Dish"])

    def test_merging_twice_counts_twice(self):
        new = [ConsolidatedEntry("Olive Oil", "Pantry", 2, "tbsp", ["New Dish"])]
        once = merge_shopping_lists(self.existing, new)
        twice = merge_shopping_lists(once, new)
        self.assertEqual(twice[0].quantity, 5)

    def test_repeated_new_line_matches_appended_item(self):
        new = [
            ConsolidatedEntry("Rice", "Grains", 1, "cup", ["A"]),
            ConsolidatedEntry("rice", "Grains", 2, "CUP", ["B"]),
        ]
        merged = merge_shopping_lists([], new)
        self.assertEqual(len(merged), 1)
        self.assertEqual(merged[0].quantity, 3)
        self.assertEqual(merged[0].recipes, ["A", "B"])


if __name__ == '__main__':
    unittest.main()

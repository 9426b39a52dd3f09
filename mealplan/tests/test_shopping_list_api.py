import json
import unittest
from unittest import mock
from fastapi.testclient import TestClient
from mealplan.api import api_run
from mealplan.api.api_run import app
from mealplan.events import web_observers
from mealplan.infra.Key_Value_Store import InMemoryStore
from mealplan.utilities.constants import MEAL_PLAN_KEY, RECIPES_KEY
from mealplan.utilities.errors import PersistenceWriteError

STIR_FRY = {
    "id": "r1",
    "title": "Chicken Stir Fry",
    "servings": 2,
    "ingredients": [
        {"name": "Chicken Breast", "quantity": 2, "unit": "pcs"},
        {"name": "Olive Oil", "quantity": 2, "unit": "tbsp"},
        {"name": "Garlic", "quantity": 3, "unit": "cloves"},
    ],
}


class ReadOnlyStore(InMemoryStore):
    def set(self, key, value):
        raise PersistenceWriteError(key, "disk full")


class TestShoppingListAPI(unittest.TestCase):

    def setUp(self):
        self.store = InMemoryStore({RECIPES_KEY: json.dumps([STIR_FRY])})
        patcher = mock.patch.object(api_run, "store", self.store)
        patcher.start()
        self.addCleanup(patcher.stop)
        web_observers.reset()
        self.client = TestClient(app)

    def _plan(self, recipe=None, day="2024-03-04", meal_type="dinner"):
        resp = self.client.post('/api/meal-plan', json={
            "date": day, "meal_type": meal_type, "recipe": recipe or STIR_FRY})
        self.assertEqual(resp.status_code, 200, resp.text)
        return resp.json()["entry"]

    def test_generate_with_empty_plan(self):
        resp = self.client.get('/api/shopping-list/generate')
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual(data["state"], "empty")
        self.assertEqual(data["items"], [])
        self.assertEqual(data["message"], "No meals planned")

    def test_generate_sorted_by_category(self):
        self._plan()
        self._plan(day="2024-03-05")
        resp = self.client.get('/api/shopping-list/generate')
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual(data["state"], "generated")
        self.assertEqual(data["count"], 3)
        self.assertEqual([i["category"] for i in data["items"]], ["Pantry", "Protein", "Vegetables"])
        garlic = [i for i in data["items"] if i["name"] == "Garlic"][0]
        self.assertEqual(garlic["totalQuantity"], 6)
        self.assertEqual(garlic["recipes"], ["Chicken Stir Fry"])

    def test_plan_from_saved_recipe(self):
        resp = self.client.post('/api/meal-plan', json={"date": "2024-03-04", "meal_type": "lunch", "recipe_id": "r1"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["entry"]["recipe"]["title"], "Chicken Stir Fry")

    def test_plan_validation(self):
        resp = self.client.post('/api/meal-plan', json={"date": "2024-03-04", "meal_type": "lunch"})
        self.assertEqual(resp.status_code, 400)
        resp = self.client.post('/api/meal-plan', json={"date": "2024-03-04", "meal_type": "lunch", "recipe_id": "zzz"})
        self.assertEqual(resp.status_code, 404)
        resp = self.client.post('/api/meal-plan', json={"date": "2024-03-04", "meal_type": "brunch", "recipe_id": "r1"})
        self.assertEqual(resp.status_code, 422)
        resp = self.client.post('/api/meal-plan', json={"date": "04/03/2024", "meal_type": "lunch", "recipe_id": "r1"})
        self.assertEqual(resp.status_code, 422)

    def test_week_view_and_clear(self):
        entry = self._plan(day="2024-03-06")
        self._plan(day="2024-03-12")
        resp = self.client.get('/api/meal-plan', params={"week_start": "2024-03-06"})
        data = resp.json()
        self.assertEqual(data["week_start"], "2024-03-03")
        self.assertEqual([e["id"] for e in data["entries"]], [entry["id"]])

        resp = self.client.post('/api/meal-plan/clear-week', json={"week_start": "2024-03-03"})
        self.assertEqual(resp.json()["removed"], 1)
        self.assertEqual(self.client.get('/api/meal-plan').json()["count"], 1)
        self.assertEqual(self.client.get('/api/meal-plan', params={"week_start": "March"}).status_code, 400)

    def test_remove_entry(self):
        entry = self._plan()
        self.assertEqual(self.client.delete(f'/api/meal-plan/{entry["id"]}').status_code, 200)
        self.assertEqual(self.client.delete(f'/api/meal-plan/{entry["id"]}').status_code, 404)

    def test_save_and_manage_list(self):
        self._plan()
        resp = self.client.post('/api/shopping-list/save')
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(resp.json()["count"], 3)

        resp = self.client.post('/api/shopping-list/save', json={"items": [
            {"name": "garlic", "category": "Vegetables", "totalQuantity": 1, "unit": "Cloves", "recipes": ["Soup"]},
        ]})
        self.assertEqual(resp.json()["count"], 3)

        data = self.client.get('/api/shopping-list').json()
        garlic = [i for i in data["items"] if i["name"] == "Garlic"][0]
        self.assertEqual(garlic["quantity"], 4)
        self.assertEqual(garlic["recipes"], ["Chicken Stir Fry", "Soup"])
        self.assertEqual(set(data["categories"]), {"Pantry", "Protein", "Vegetables"})

        resp = self.client.post(f'/api/shopping-list/{garlic["id"]}/toggle')
        self.assertTrue(resp.json()["item"]["is_purchased"])
        progress = self.client.get('/api/shopping-list').json()["progress"]
        self.assertEqual(progress["purchased"], 1)

        self.assertEqual(self.client.post('/api/shopping-list/clear-purchased').json()["removed"], 1)
        items = self.client.get('/api/shopping-list').json()["items"]
        self.assertEqual(len(items), 2)

        self.assertEqual(self.client.delete(f'/api/shopping-list/{items[0]["id"]}').status_code, 200)
        self.assertEqual(self.client.delete('/api/shopping-list/unknown').status_code, 404)
        self.assertEqual(self.client.post('/api/shopping-list/unknown/toggle').status_code, 404)

    def test_zero_servings_is_rejected(self):
        self.store.set(MEAL_PLAN_KEY, json.dumps([
            {"id": "e1", "date": "2024-03-04", "mealType": "dinner", "recipe": dict(STIR_FRY, servings=0)},
        ]))
        resp = self.client.get('/api/shopping-list/generate')
        self.assertEqual(resp.status_code, 422)

    def test_repair_write_failure(self):
        store = ReadOnlyStore({MEAL_PLAN_KEY: json.dumps([
            {"id": "e1", "date": "2024-03-04", "mealType": "dinner",
             "recipe": {"id": "2", "title": "Overnight Oats", "servings": 1}},
        ])})
        with mock.patch.object(api_run, "store", store):
            resp = self.client.get('/api/shopping-list/generate')
            self.assertEqual(resp.status_code, 507)
            resp = self.client.post('/api/meal-plan', json={"date": "2024-03-04", "meal_type": "lunch",
                                                            "recipe": STIR_FRY})
            self.assertEqual(resp.status_code, 507)

    def test_malformed_meal_plan_reads_as_empty(self):
        self.store.set(MEAL_PLAN_KEY, "not json at all")
        resp = self.client.get('/api/shopping-list/generate')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["state"], "empty")

    def test_export_pdf(self):
        self._plan()
        self.client.post('/api/shopping-list/save')
        resp = self.client.get('/api/shopping-list/export_pdf')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.headers["content-type"], "application/pdf")
        self.assertTrue(resp.content.startswith(b"%PDF"))

    def test_export_pdf_with_markup_in_category(self):
        resp = self.client.post('/api/shopping-list/save', json={"items": [
            {"name": "Cod", "category": "Fish & <Chips", "totalQuantity": 2, "unit": "pcs"},
        ]})
        self.assertEqual(resp.status_code, 200, resp.text)
        resp = self.client.get('/api/shopping-list/export_pdf')
        self.assertEqual(resp.status_code, 200)
        self.assertTrue(resp.content.startswith(b"%PDF"))

    def test_generation_states_are_polled(self):
        with TestClient(app) as client:
            client.get('/api/shopping-list/generate')
            data = client.get('/api/events').json()
            states = [e["state"] for e in data["events"] if e["type"] == "shopping.generation_state"]
            self.assertEqual(states, ["loading", "empty"])
            newer = client.get('/api/events', params={"since": data["next_cursor"]}).json()
            self.assertEqual(newer["events"], [])


if __name__ == '__main__':
    unittest.main()

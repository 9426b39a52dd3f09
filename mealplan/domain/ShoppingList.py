"""Shopping list entities: generated (consolidated) lines, persisted items and the list aggregate."""
from typing import Any, Dict, List, Optional


def _text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


class ConsolidatedEntry:
    """One consolidated line of a freshly generated list, before it is merged into the stored one."""

    def __init__(self, name: str, category: str, total_quantity, unit: str,
                 recipes: Optional[List[str]] = None):
        self.name = name
        self.category = category
        self.total_quantity = total_quantity
        self.unit = unit
        self.recipes = recipes[:] if recipes else []

    def __str__(self) -> str:
        return f"{self.name} - {self.total_quantity} {self.unit} ({self.category})"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        return ConsolidatedEntry(
            name=_text(d.get("name")),
            category=_text(d.get("category")),
            total_quantity=d.get("totalQuantity", 0) or 0,
            unit=_text(d.get("unit")),
            recipes=[_text(r) for r in d.get("recipes") or []],
        )

    def to_dict(self):
        return {
            "name": self.name,
            "category": self.category,
            "totalQuantity": self.total_quantity,
            "unit": self.unit,
            "recipes": self.recipes,
        }


class ShoppingListItem:
    def __init__(self, id: str, name: str, quantity, unit: str, category: str,
                 is_purchased: bool = False, recipes: Optional[List[str]] = None,
                 store_section: Optional[str] = None):
        self.id = id
        self.name = name
        self.quantity = quantity
        self.unit = unit
        self.category = category
        self.is_purchased = is_purchased
        self.recipes = recipes[:] if recipes else []
        self.store_section = store_section

    def __str__(self) -> str:
        mark = "x" if self.is_purchased else " "
        return f"[{mark}] {self.name} - {self.quantity} {self.unit}"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        '''Creates an item from its stored form. Missing fields get neutral defaults.'''
        d = dict(data) if isinstance(data, dict) else {}
        quantity = d.get("quantity", 0)
        if not isinstance(quantity, (int, float)) or isinstance(quantity, bool):
            quantity = 0
        recipes = d.get("recipes")
        store_section = d.get("store_section")
        return ShoppingListItem(
            id=_text(d.get("id")),
            name=_text(d.get("name")),
            quantity=quantity,
            unit=_text(d.get("unit")),
            category=_text(d.get("category")),
            is_purchased=bool(d.get("is_purchased", False)),
            recipes=[_text(r) for r in recipes if r is not None] if isinstance(recipes, list) else [],
            store_section=None if store_section is None else _text(store_section),
        )

    def to_dict(self):
        d = {
            "id": self.id,
            "name": self.name,
            "quantity": self.quantity,
            "unit": self.unit,
            "category": self.category,
            "is_purchased": self.is_purchased,
            "recipes": self.recipes,
        }
        if self.store_section is not None:
            d["store_section"] = self.store_section
        return d


class ShoppingList:
    """Aggregate over the persisted items: the operations the shopping list page offers."""

    def __init__(self, items: Optional[List[ShoppingListItem]] = None):
        self.items: List[ShoppingListItem] = items[:] if items else []

    def get_items(self) -> List[ShoppingListItem]:
        return self.items

    def find(self, item_id: str) -> Optional[ShoppingListItem]:
        for item in self.items:
            if item.id == item_id:
                return item
        return None

    def toggle_purchased(self, item_id: str) -> ShoppingListItem:
        '''
        Flips the purchased flag of one item.
        '''
        item = self.find(item_id)
        if item is None:
            raise KeyError(item_id)
        item.is_purchased = not item.is_purchased
        return item

    def remove_item(self, item_id: str) -> ShoppingListItem:
        item = self.find(item_id)
        if item is None:
            raise KeyError(item_id)
        self.items.remove(item)
        return item

    def clear_purchased(self) -> int:
        '''
        Drops every purchased item, returns how many were removed.
        '''
        before = len(self.items)
        self.items = [item for item in self.items if not item.is_purchased]
        return before - len(self.items)

    def grouped_by_category(self) -> Dict[str, List[ShoppingListItem]]:
        """Items per category, categories in first-seen order."""
        groups: Dict[str, List[ShoppingListItem]] = {}
        for item in self.items:
            groups.setdefault(item.category, []).append(item)
        return groups

    def progress(self) -> Dict[str, float]:
        total = len(self.items)
        purchased = sum(1 for item in self.items if item.is_purchased)
        percentage = (purchased / total) * 100 if total > 0 else 0
        return {"total": total, "purchased": purchased, "percentage": percentage}

    def __len__(self) -> int:
        return len(self.items)

    def __str__(self) -> str:
        items_str = ",\n\t".join(str(item) for item in self.items)
        return f"Shopping List Items:\n\t{items_str}"

    def __repr__(self) -> str:
        return self.__str__()

    @staticmethod
    def from_dict(data):
        return ShoppingList([ShoppingListItem.from_dict(d) for d in data if isinstance(d, dict)])

    def to_dict(self):
        return [item.to_dict() for item in self.items]

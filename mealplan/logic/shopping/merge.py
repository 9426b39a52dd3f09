"""Merge a freshly generated list into the stored shopping list."""
import copy
from typing import Callable, List, Optional, Sequence
from uuid import uuid4

from mealplan.domain.ShoppingList import ConsolidatedEntry, ShoppingListItem


def _new_item_id() -> str:
    return uuid4().hex


def _same_line(item: ShoppingListItem, entry: ConsolidatedEntry) -> bool:
    # Unlike consolidation, units compare case-insensitively here
    return (item.name.lower() == entry.name.lower()
            and (item.unit or '').lower() == (entry.unit or '').lower())


def _union(old: List[str], new: List[str]) -> List[str]:
    merged: List[str] = []
    for title in list(old) + list(new):
        if title not in merged:
            merged.append(title)
    return merged


def merge_shopping_lists(existing: Sequence[ShoppingListItem], new_items: Sequence[ConsolidatedEntry],
                         id_factory: Optional[Callable[[], str]] = None) -> List[ShoppingListItem]:
    """Combine generated lines with the stored items.

    A generated line matching a stored item by name and unit (both
    case-insensitive) adds its quantity to that item and unions the recipe
    titles; otherwise it becomes a new, unpurchased item. `existing` is not
    modified. Merging the same lines twice counts them twice.
    """
    make_id = id_factory or _new_item_id
    combined = [copy.deepcopy(item) for item in existing]

    for entry in new_items:
        match = next((item for item in combined if _same_line(item, entry)), None)
        if match is not None:
            match.quantity += entry.total_quantity
            match.recipes = _union(match.recipes, entry.recipes)
        else:
            combined.append(ShoppingListItem(
                id=make_id(),
                name=entry.name,
                quantity=entry.total_quantity,
                unit=entry.unit,
                category=entry.category,
                is_purchased=False,
                recipes=_union([], entry.recipes),
            ))
    return combined


__all__ = ['merge_shopping_lists']

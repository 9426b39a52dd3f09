"""Ingredient domain entity: name, quantity, optional unit and notes."""
from typing import Optional, Union

Number = Union[int, float]


class Ingredient:
    def __init__(self, name: str = "", quantity: Number = 0, unit: Optional[str] = None,
                 notes: Optional[str] = None, id: Optional[str] = None):
        # unit/notes stay None when the record never had them; consolidation decides the fallback
        self.id = id
        self.name = name
        self.quantity = quantity
        self.unit = unit
        self.notes = notes

    def __str__(self) -> str:
        parts = [f"{self.name} - {self.quantity} {self.unit or ''}".rstrip()]
        if self.notes:
            parts.append(self.notes)
        return " - ".join(parts)

    __repr__ = __str__

    def __eq__(self, other) -> bool:
        if not isinstance(other, Ingredient):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    @staticmethod
    def from_dict(data):
        '''Creates an Ingredient object from a dictionary. Ignores unknown keys.'''
        d = dict(data) if isinstance(data, dict) else {}
        allowed = {"id", "name", "quantity", "unit", "notes"}
        filtered = {k: v for k, v in d.items() if k in allowed}
        # stored records may carry numbers where text is expected
        for k in ("id", "unit", "notes"):
            if filtered.get(k) is not None and not isinstance(filtered[k], str):
                filtered[k] = str(filtered[k])
        name = filtered.get("name")
        filtered["name"] = "" if name is None else str(name)
        if not isinstance(filtered.get("quantity"), (int, float)) or isinstance(filtered.get("quantity"), bool):
            filtered["quantity"] = 0
        return Ingredient(**filtered)

    def to_dict(self):
        '''Converts the Ingredient object to a dictionary; absent optional fields are omitted.'''
        d = {"name": self.name, "quantity": self.quantity}
        if self.id is not None:
            d["id"] = self.id
        if self.unit is not None:
            d["unit"] = self.unit
        if self.notes is not None:
            d["notes"] = self.notes
        return d

"""ItemProfile domain entity: packaging unit of an item, optionally per household size."""
from typing import Any, Dict, Mapping, Optional

from bulkorder.utilities.validators import ItemProfileInput


class ItemProfile:
    def __init__(self, item: str, unit: str = "", quantities: Optional[Dict[int, int]] = None):
        self.item = item
        self.unit = unit
        self.quantities = dict(quantities) if quantities else {}

    def quantity_for(self, household_size: int) -> Optional[int]:
        '''Units one request stands for at this household size, or None if the row has no column for it.'''
        return self.quantities.get(household_size)

    def __str__(self) -> str:
        if self.quantities:
            sizes = ", ".join(f"{size}: {qty}" for size, qty in sorted(self.quantities.items()))
            return f"{self.item} ({self.unit}) - per household size: {sizes}"
        return f"{self.item} ({self.unit})"

    __repr__ = __str__

    @staticmethod
    def from_fields(fields: Mapping[str, Any]) -> "ItemProfile":
        '''Creates an ItemProfile from a store row. Ignores unknown keys.'''
        parsed = ItemProfileInput.model_validate(dict(fields))
        return ItemProfile(parsed.item, parsed.unit, parsed.quantities)

    def to_dict(self):
        d = {"item": self.item, "unit": self.unit}
        for size, qty in sorted(self.quantities.items()):
            d[str(size)] = qty
        return d

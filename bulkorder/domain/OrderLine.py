"""OrderLine domain entity: one row of the bulk order (item, unit, quantity)."""
from typing import Any, Mapping, Tuple


class OrderLine:
    def __init__(self, item: str, unit: str, quantity: int):
        if quantity < 0:
            raise ValueError(f"Quantity cannot be negative: {quantity}")
        self.item = item
        self.unit = unit
        self.quantity = quantity

    def key(self) -> Tuple[str, str, int]:
        return (self.item, self.unit, self.quantity)

    def __eq__(self, other) -> bool:
        if not isinstance(other, OrderLine):
            return NotImplemented
        return self.key() == other.key()

    def __hash__(self) -> int:
        return hash(self.key())

    def __str__(self) -> str:
        return f"{self.item} - {self.quantity} {self.unit}"

    def __repr__(self) -> str:
        return f"OrderLine({self.item!r}, {self.unit!r}, {self.quantity!r})"

    @staticmethod
    def from_fields(fields: Mapping[str, Any]) -> "OrderLine":
        '''Creates an OrderLine from a bulk order row; missing values fall back to empty/zero.'''
        d = dict(fields) if isinstance(fields, Mapping) else {}
        try:
            quantity = int(d.get("quantity") or 0)
        except (TypeError, ValueError):
            quantity = 0
        return OrderLine(str(d.get("item") or ""), str(d.get("unit") or ""), max(quantity, 0))

    def to_dict(self):
        '''Converts the line to the fields written to the bulk order table.'''
        return {
            "item": self.item,
            "unit": self.unit,
            "quantity": self.quantity,
        }

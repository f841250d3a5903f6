"""Simple Event Bus / Observer implementation for order sheet notifications.

Event names used so far:
  order_sheet.missing_unit -> payload {"item": str, "quantity": int}
  order_sheet.published -> payload {"table": str, "created": int, "deleted": int, "kept": int}

Subscribers are callables taking (event_name, payload).
"""
from __future__ import annotations
import logging
from collections import defaultdict
from typing import Callable, Any, Dict, List

logger = logging.getLogger(__name__)

# --- Event name constants (used across modules) ---
ORDER_SHEET_MISSING_UNIT = "order_sheet.missing_unit"
ORDER_SHEET_PUBLISHED = "order_sheet.published"


class EventBus:
	def __init__(self):
		self._subscribers: Dict[str, List[Callable[[str, Any], None]]] = defaultdict(list)

	def subscribe(self, event_name: str, callback: Callable[[str, Any], None]):
		if callback not in self._subscribers[event_name]:
			self._subscribers[event_name].append(callback)

	def unsubscribe(self, event_name: str, callback: Callable[[str, Any], None]):
		try:
			self._subscribers[event_name].remove(callback)
		except (ValueError, KeyError):
			pass

	def publish(self, event_name: str, payload: Any):
		for cb in list(self._subscribers.get(event_name, [])):
			try:
				cb(event_name, payload)
			except Exception:
				# A failing listener must not abort the order run
				logger.exception(f"Error delivering {event_name} to {cb}")


# A singleton-like instance (can be imported)
GLOBAL_EVENT_BUS = EventBus()


def simple_print_listener(event_name: str, payload: Any):
	print(f"[EVENT] {event_name}: {payload}")


__all__ = [
	'EventBus', 'GLOBAL_EVENT_BUS', 'simple_print_listener',
	'ORDER_SHEET_MISSING_UNIT', 'ORDER_SHEET_PUBLISHED'
]

"""Core business logic layer.

Subpackages:
- sampling: choosing eligible intake records and aggregating their requests
- ordering: scaling demand, building order lines and publishing them

pipeline wires both into one order sheet run.
"""
__all__ = ["sampling", "ordering", "pipeline"]

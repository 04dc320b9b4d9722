"""
pyqt-tripboard: presenter layer for an editable trip itinerary board in PyQt6.

Renders a filterable, sortable list of trip points, lets the user edit,
favorite, create and delete them, and keeps the UI consistent while backend
mutations are in flight.

Architecture:
- Tier 1 (Core): rendering primitives, key subscriptions, mutation gate
- Tier 2 (Models/Protocols): point values, sort/filter tables, data sources
- Tier 3 (Views): passive PyQt6 widgets that report gestures as signals
- Tier 4 (Presenters): per-item and board-level reconciliation

Key Features:
- At most one open editor across the board
- Serialized mutations with a delayed, non-flickering blocking indicator
- Optimistic saving/deleting state with rollback and shake on failure
- Minimal re-rendering per notification kind (PATCH / MINOR / MAJOR)
"""

__version__ = "0.1.0"

__all__ = [
    "__version__",
]

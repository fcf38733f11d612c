"""Collection ordering helpers."""

from .ordering import array_move, position_updates, reorder, sort_by_position

__all__ = ["array_move", "position_updates", "reorder", "sort_by_position"]

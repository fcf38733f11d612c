"""Partner helpers."""

from .revenue_share import percentage_to_share, share_to_percentage

__all__ = ["percentage_to_share", "share_to_percentage"]

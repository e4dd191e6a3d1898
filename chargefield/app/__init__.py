"""Interactive front-end: matplotlib charge editor."""

from .editor import ChargeEditor

__all__ = ['ChargeEditor']

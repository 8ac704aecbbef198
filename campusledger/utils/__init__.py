"""Mini README: Utility helper functions for Campus Ledger.

Currently exports the entry-point plugin loader used to discover extra
document store backends.
"""

from .plugin_loader import load_entry_point_plugins

__all__ = ["load_entry_point_plugins"]

"""Correspondence editing.

This module provides the operations the correspondence tool uses when an
author reassigns which source stroke morphs into which target stroke.

Functions:
    explode_bindings: Grouped bindings -> single edges.
    apply_connection_edit: Add or move edges (overwrite / swap policies).
    regroup_bindings: Edges -> groups by connected component.
    collect_connections: Explicit + auto-matched edges for a frame pair.
    edit_from_selection: Tool selection -> ConnectionEdit.

Classes:
    BindingStore: Caller-owned, versioned group collection.
"""

from .graph import (
    apply_connection_edit,
    collect_connections,
    edit_from_selection,
    explode_bindings,
    regroup_bindings,
)
from .store import BindingStore

__all__ = [
    'explode_bindings', 'apply_connection_edit', 'regroup_bindings',
    'collect_connections', 'edit_from_selection',
    'BindingStore',
]

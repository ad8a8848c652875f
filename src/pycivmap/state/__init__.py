"""State port layer.

The orchestrator and decoders never touch application state directly;
they submit discrete update records through a :class:`StatePort`.
"""

from pycivmap.state.events import (
    AddFeature,
    LoadFeatures,
    SelectFeature,
    SetBasemap,
    SetViewport,
    StoreUpdate,
    UpdateKind,
)
from pycivmap.state.store import InMemoryStateStore, StatePort, StoreSnapshot

__all__ = [
    "AddFeature",
    "InMemoryStateStore",
    "LoadFeatures",
    "SelectFeature",
    "SetBasemap",
    "SetViewport",
    "StatePort",
    "StoreSnapshot",
    "StoreUpdate",
    "UpdateKind",
]

"""Focus model: the session's workflow cursor.

A focus is one of three states::

    NONE ──build──▶ BUILDING ──create──▶ CONNECTED ──delete──▶ NONE
                      ▲    │
                      └────┘ failed create (rollback)

``value`` carries the blueprint id while ``BUILDING`` and the cluster id
while ``CONNECTED``; it is ``None`` exactly when the state is ``NONE``.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, model_validator


# ---------------------------------------------------------------------------
# FocusType enum
# ---------------------------------------------------------------------------


class FocusType(str, Enum):
    """Which workflow the session is currently engaged in."""

    NONE = "NONE"
    BUILDING = "BUILDING"
    CONNECTED = "CONNECTED"


# ---------------------------------------------------------------------------
# Focus
# ---------------------------------------------------------------------------


class Focus(BaseModel):
    """Immutable focus snapshot.

    Attributes:
        state: Current :class:`FocusType`.
        value: Blueprint id (``BUILDING``) or cluster id (``CONNECTED``).
    """

    model_config = ConfigDict(frozen=True)

    state: FocusType = FocusType.NONE
    value: Optional[str] = None

    @model_validator(mode="after")
    def _value_matches_state(self) -> "Focus":
        """Enforce: ``value`` is present iff ``state`` is not ``NONE``."""
        if self.state == FocusType.NONE and self.value is not None:
            raise ValueError("focus value must be empty when state is NONE")
        if self.state != FocusType.NONE and not self.value:
            raise ValueError(f"focus value is required when state is {self.state.value}")
        return self

    # -- factories ----------------------------------------------------------

    @classmethod
    def none(cls) -> "Focus":
        return cls()

    @classmethod
    def building(cls, blueprint_id: str) -> "Focus":
        return cls(state=FocusType.BUILDING, value=blueprint_id)

    @classmethod
    def connected(cls, cluster_id: str) -> "Focus":
        return cls(state=FocusType.CONNECTED, value=cluster_id)

    # -- convenience helpers ------------------------------------------------

    @property
    def is_building(self) -> bool:
        return self.state == FocusType.BUILDING

    @property
    def is_connected(self) -> bool:
        return self.state == FocusType.CONNECTED

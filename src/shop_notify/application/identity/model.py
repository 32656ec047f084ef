"""Application identity – the signed-in user as seen by this subsystem."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Identity:
    """Current signed-in identity."""

    user_id: str
    email: str | None = None
    display_name: str | None = None


__all__ = ["Identity"]

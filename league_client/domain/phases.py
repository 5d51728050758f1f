from __future__ import annotations

from enum import Enum
from types import MappingProxyType

__all__ = [
    "Phase",
    "PHASE_LABELS",
    "phase_label",
]


class Phase(str, Enum):
    signup = "signup"
    guarantee_draw = "guarantee_draw"
    normal_draw = "normal_draw"
    draft = "draft"
    trading = "trading"
    auction = "auction"
    match = "match"
    finished = "finished"


PHASE_LABELS: MappingProxyType[str, str] = MappingProxyType(
    {
        Phase.signup.value: "Sign-up",
        Phase.guarantee_draw.value: "Guaranteed draw",
        Phase.normal_draw.value: "Normal draw",
        Phase.draft.value: "Draft",
        Phase.trading.value: "Free trading",
        Phase.auction.value: "Auction",
        Phase.match.value: "Matches",
        Phase.finished.value: "Season finished",
    }
)


def phase_label(phase: str | Phase) -> str:
    """Return the display label for a phase identifier.

    Unknown identifiers come back unchanged, so phases the service introduces
    before the client learns about them still render as their raw name.
    """
    key = phase.value if isinstance(phase, Phase) else phase
    return PHASE_LABELS.get(key, key)

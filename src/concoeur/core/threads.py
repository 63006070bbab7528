""" Narrative thread state.

One small struct per story thread. Handlers write these flags after a
verdict; filters read them to lock or unlock later requests. None means the
player has not ruled on that matter yet.
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class PrinceState:
    approved_festival: Optional[bool] = None


@dataclass
class SmithyState:
    commissioned_blades: Optional[bool] = None
    paid_in_full: Optional[bool] = None


@dataclass
class NunState:
    funded_orphanage: Optional[bool] = None
    pardoned_thief: Optional[bool] = None


@dataclass
class DuchyState:
    sent_grain: Optional[bool] = None
    granted_autonomy: Optional[bool] = None


@dataclass
class DreamState:
    heard_omen: bool = False
    heeded_omen: Optional[bool] = None


@dataclass
class AuxiliaryState:
    prince: PrinceState = field(default_factory=PrinceState)
    smithy: SmithyState = field(default_factory=SmithyState)
    nun: NunState = field(default_factory=NunState)
    duchy: DuchyState = field(default_factory=DuchyState)
    dream: DreamState = field(default_factory=DreamState)

    def flag(self, thread:str, name:str) -> Optional[bool]:
        """ looks up a flag by thread and field name, e.g. ("prince", "approved_festival") """
        return getattr(getattr(self, thread), name)

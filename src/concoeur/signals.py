""" Outbound signals.

The engine never calls into presentation. Every step returns the signals it
produced and collaborators (rendering, audio, fades) consume them.
"""

import enum
from dataclasses import dataclass
from typing import Optional

from concoeur.core import RealmState, StateUpdate, Verdict, DayPhase, Outcome, PetitionerClass


class Signal:
    pass


@dataclass(frozen=True)
class PetitionPresented(Signal):
    key: str
    name: str
    petitioner_class: PetitionerClass
    sprite_path: str
    day: int
    request_index: int
    text: str
    yes_label: str
    no_label: str


@dataclass(frozen=True)
class VerdictApplied(Signal):
    key: str
    verdict: Verdict
    update: StateUpdate
    realm: RealmState

    @property
    def last_word(self) -> Optional[str]:
        return self.update.last_word


@dataclass(frozen=True)
class ExternalSignal(Signal):
    """ a cue for an outside collaborator, e.g. ("audio", "omen_bell") """
    channel: str
    name: str


@dataclass(frozen=True)
class PhaseChanged(Signal):
    phase: DayPhase
    day: int
    day_name: str
    # the phase machine waits for a PhaseComplete for this phase
    awaits_completion: bool


@dataclass(frozen=True)
class PoolExhausted(Signal):
    phase: DayPhase
    day: int


@dataclass(frozen=True)
class InsightRevealed(Signal):
    key: str
    cost: float
    yes_heart: float
    yes_prosperity: float
    no_heart: float
    no_prosperity: float


class LossReason(enum.Enum):
    HEART_EMPTY = enum.auto()
    HEART_BURST = enum.auto()
    NOT_ENOUGH_PROSPERITY = enum.auto()


@dataclass(frozen=True)
class OutcomeDecided(Signal):
    outcome: Outcome
    reason: Optional[LossReason]
    realm: RealmState

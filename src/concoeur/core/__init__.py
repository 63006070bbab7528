""" Court core data model. """

from .realm import (
    RealmState, StateUpdate, Verdict, Mask,
    MAX_HEART, MIN_PROSPERITY_THRESHOLD, FINAL_DAY,
    MAX_WEALTH, MAX_HAPPINESS, MAX_PROSPERITY,
)
from .petition import Petitioner, PetitionerClass, Request, Availability
from .catalog import PetitionCatalog
from .threads import AuxiliaryState, PrinceState, SmithyState, NunState, DuchyState, DreamState
from .gamestate import Gamestate, DayPhase, Outcome

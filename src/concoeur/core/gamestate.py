""" Court gamestate, a central repository for all state of a run.

One Gamestate is passed explicitly through the pipeline, the phase machine
and insight. Only the step currently processing an input mutates it.
"""

import enum
import logging
from typing import Optional, Tuple

import numpy as np

from concoeur import util
from .realm import RealmState
from .catalog import PetitionCatalog
from .petition import Petitioner, Request
from .threads import AuxiliaryState


class DayPhase(enum.Enum):
    NONE = enum.auto()
    MORNING = enum.auto()
    DAY = enum.auto()
    EVENING = enum.auto()
    NIGHT = enum.auto()


class Outcome(enum.Enum):
    WIN = enum.auto()
    LOSS = enum.auto()


class Gamestate:
    def __init__(
        self,
        catalog:PetitionCatalog,
        realm:Optional[RealmState]=None,
        aux:Optional[AuxiliaryState]=None,
        r:Optional[np.random.Generator]=None,
        seed:Optional[int]=None,
    ) -> None:
        self.logger = logging.getLogger(util.fullname(self))

        self.catalog = catalog
        self.realm = realm if realm is not None else RealmState.from_settings()
        self.aux = aux if aux is not None else AuxiliaryState()
        self.random = r if r is not None else np.random.default_rng(seed)

        self.phase = DayPhase.NONE
        # key of the petitioner whose request is on display, if any
        self.presented_key:Optional[str] = None
        self.outcome:Optional[Outcome] = None

    @property
    def day(self) -> int:
        return self.realm.day

    def is_over(self) -> bool:
        return self.outcome is not None

    def presented(self) -> Optional[Tuple[Petitioner, Request]]:
        if self.presented_key is None:
            return None
        petitioner = self.catalog[self.presented_key]
        request = petitioner.request(self.day)
        if request is None:
            return None
        return petitioner, request

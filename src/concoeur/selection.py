""" Chooses who comes before the throne next.

Two stage sampling: every candidate petitioner proposes one of its eligible
requests for the day, uniformly at random, then one proposal is chosen
uniformly at random. Petitioners with nothing eligible sit out.
"""

import enum
import logging
from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from concoeur import config, util
from concoeur.core import Gamestate, PetitionCatalog, Request
from concoeur.signals import PetitionPresented

# the petitioner who visits in dreams, only eligible at night
DREAM_KEY = "dream"

logger = logging.getLogger(__name__)


class Pool(enum.Enum):
    COURT = enum.auto()
    DREAM = enum.auto()


class CatalogExhausted(RuntimeError):
    """ No petition exists where one is required. This is a content bug. """
    pass


@dataclass(frozen=True)
class Selection:
    key: str
    index: int
    request: Request


def candidate_keys(catalog:PetitionCatalog, current_key:Optional[str], pool:Pool=Pool.COURT) -> List[str]:
    if pool == Pool.DREAM:
        # the dream pool is the dream petitioner alone, the not-current rule
        # does not apply
        return [DREAM_KEY] if DREAM_KEY in catalog else []
    return [k for k in catalog.keys() if k != current_key and k != DREAM_KEY]

def select_petition(
    catalog:PetitionCatalog,
    day:int,
    current_key:Optional[str],
    r:np.random.Generator,
    pool:Pool=Pool.COURT,
) -> Optional[Selection]:
    """ Picks the next (petitioner, request) pair or None if the pool is
    exhausted for day. Does not touch any state. """

    proposals:List[Selection] = []
    for key in candidate_keys(catalog, current_key, pool):
        sampled = catalog[key].sample_request(day, r)
        if sampled is None:
            continue
        index, request = sampled
        proposals.append(Selection(key, index, request))

    if len(proposals) == 0:
        logger.debug(f'{pool.name.lower()} pool exhausted on day {day}')
        return None

    selection = util.choose(r, proposals)
    logger.debug(f'chose {selection.key}:{selection.index} from {[p.key for p in proposals]}')
    return selection

def require_petition(
    catalog:PetitionCatalog,
    day:int,
    current_key:Optional[str],
    r:np.random.Generator,
    pool:Pool=Pool.COURT,
) -> Selection:
    selection = select_petition(catalog, day, current_key, r, pool)
    if selection is None:
        raise CatalogExhausted(f'no {pool.name.lower()} petitions available on day {day}, content for the day is incomplete')
    return selection

def present(gamestate:Gamestate, selection:Selection) -> PetitionPresented:
    """ puts selection before the throne and describes it for presentation """
    petitioner = gamestate.catalog[selection.key]
    petitioner.set_current(gamestate.day, selection.index)
    gamestate.presented_key = selection.key
    logger.info(f'selecting new petitioner: {selection.key} ({petitioner.name}) request {selection.index} on day {gamestate.day}')

    request = selection.request
    return PetitionPresented(
        selection.key,
        petitioner.name,
        petitioner.petitioner_class,
        petitioner.sprite_path,
        gamestate.day,
        selection.index,
        request.text,
        request.yes_label or config.Settings.responses.yes,
        request.no_label or config.Settings.responses.no,
    )

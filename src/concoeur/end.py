""" Win and loss.

The heart bound is checked continuously: after every verdict and every
insight purchase. Prosperity only matters on the Evening of the final day.
A heart out of bounds always wins over the prosperity check.
"""

import logging
from typing import Optional, Tuple

from concoeur.core import (
    DayPhase, Gamestate, Outcome, RealmState,
    FINAL_DAY, MIN_PROSPERITY_THRESHOLD,
)
from concoeur.signals import LossReason, OutcomeDecided

logger = logging.getLogger(__name__)

def heart_violation(realm:RealmState) -> Optional[LossReason]:
    if realm.heart_in_bounds():
        return None
    elif realm.heart_size <= 0.:
        return LossReason.HEART_EMPTY
    return LossReason.HEART_BURST

def check_end_conditions(realm:RealmState, phase:DayPhase) -> Optional[Tuple[Outcome, Optional[LossReason]]]:
    reason = heart_violation(realm)
    if reason is not None:
        return Outcome.LOSS, reason

    if phase == DayPhase.EVENING and realm.day == FINAL_DAY:
        if realm.prosperity() >= MIN_PROSPERITY_THRESHOLD:
            return Outcome.WIN, None
        return Outcome.LOSS, LossReason.NOT_ENOUGH_PROSPERITY

    return None

def decide(gamestate:Gamestate) -> Optional[OutcomeDecided]:
    """ runs the check and, if the run is over, records the outcome """
    if gamestate.is_over():
        return None

    result = check_end_conditions(gamestate.realm, gamestate.phase)
    if result is None:
        return None

    outcome, reason = result
    gamestate.outcome = outcome
    gamestate.presented_key = None
    if outcome == Outcome.WIN:
        logger.info(f'you won: {gamestate.realm}')
    else:
        logger.info(f'you lost ({reason.name.lower() if reason else ""}): {gamestate.realm}')
    return OutcomeDecided(outcome, reason, gamestate.realm.snapshot())

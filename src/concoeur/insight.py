""" Insight: spend heart to preview what a verdict would do. """

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from concoeur import config, end, util
from concoeur.core import Gamestate, RealmState, StateUpdate
from concoeur.signals import InsightRevealed, Signal


@dataclass(frozen=True)
class InsightRequest:
    """ the player asked for insight into the presented petition """
    pass


def preview(update:StateUpdate) -> Tuple[float, float]:
    """ heart delta and the magnitude of the prosperity change """
    return update.heart_size, RealmState.calculate_prosperity(abs(update.happiness), abs(update.wealth))


class InsightTracker:
    def __init__(self, cost:Optional[float]=None) -> None:
        self.logger = logging.getLogger(util.fullname(self))
        self.cost = cost if cost is not None else float(config.Settings.insight.cost)
        # (key, day, slot) of the petition last revealed
        self.revealed:Optional[Tuple[str, int, int]] = None

    def can_acquire(self, gamestate:Gamestate) -> bool:
        return gamestate.day > 0 or gamestate.realm.can_use_insight

    def acquire(self, gamestate:Gamestate) -> List[Signal]:
        if gamestate.is_over():
            self.logger.warning("insight requested after the outcome was decided")
            return []

        presented = gamestate.presented()
        if presented is None:
            self.logger.warning("insight requested with no petition presented")
            return []
        petitioner, request = presented
        assert petitioner.current_request is not None

        if not self.can_acquire(gamestate):
            self.logger.warning(f'insight is not available yet on day {gamestate.day}')
            return []

        token = (petitioner.key, gamestate.day, petitioner.current_request)
        if self.revealed == token:
            self.logger.info(f'insight already acquired for {petitioner.key}')
            return []
        self.revealed = token

        gamestate.realm.heart_size -= self.cost
        self.logger.info(f'spent {self.cost} heart on insight into {petitioner.key}: {gamestate.realm}')

        yes_heart, yes_prosperity = preview(request.yes)
        no_heart, no_prosperity = preview(request.no)
        signals:List[Signal] = [InsightRevealed(petitioner.key, self.cost, yes_heart, yes_prosperity, no_heart, no_prosperity)]

        outcome = end.decide(gamestate)
        if outcome is not None:
            signals.append(outcome)
        return signals

""" Day-phase state machine.

    None -> Morning -> Day -> Evening -> Night -> Morning -> ...

Morning and Evening open with a fade handled outside the engine, they only
advance once a PhaseComplete for them comes back. Day ends when the court
pool is exhausted and Night (the dream) ends when the dream pool is. The day
counter moves exactly once per cycle, on the way from Evening to Night.

Winning or losing is not a phase, the end check simply stops the machine.
"""

import logging
from dataclasses import dataclass
from typing import List

from concoeur import end, util
from concoeur.core import DayPhase, Gamestate
from concoeur.filters import FilterRegistry
from concoeur.selection import Pool, require_petition, select_petition, present
from concoeur.signals import PhaseChanged, PoolExhausted, Signal


@dataclass(frozen=True)
class PhaseComplete:
    """ the fade for phase has finished playing """
    phase: DayPhase


class DayPhaseMachine:
    def __init__(self, filters:FilterRegistry) -> None:
        self.logger = logging.getLogger(util.fullname(self))
        self.filters = filters

    def _phase_changed(self, gamestate:Gamestate, awaits_completion:bool) -> PhaseChanged:
        return PhaseChanged(gamestate.phase, gamestate.day, gamestate.realm.day_name(), awaits_completion)

    def _start_day(self, gamestate:Gamestate) -> None:
        gamestate.catalog.clear_requests()
        gamestate.presented_key = None
        self.filters.run(gamestate.day, gamestate.catalog, gamestate.aux)

    def start(self, gamestate:Gamestate) -> List[Signal]:
        if gamestate.phase != DayPhase.NONE:
            raise ValueError(f'cannot start from {gamestate.phase}')
        return self._enter_morning(gamestate)

    def _enter_morning(self, gamestate:Gamestate) -> List[Signal]:
        self.logger.info(f'enter morning of day {gamestate.day}')
        gamestate.phase = DayPhase.MORNING
        self._start_day(gamestate)
        return [self._phase_changed(gamestate, True)]

    def _enter_day(self, gamestate:Gamestate) -> List[Signal]:
        self.logger.info("enter day")
        gamestate.phase = DayPhase.DAY
        # an empty court at the start of a day is a content bug
        selection = require_petition(gamestate.catalog, gamestate.day, None, gamestate.random, Pool.COURT)
        return [self._phase_changed(gamestate, False), present(gamestate, selection)]

    def _enter_evening(self, gamestate:Gamestate) -> List[Signal]:
        self.logger.info("entering evening")
        gamestate.phase = DayPhase.EVENING
        gamestate.presented_key = None
        signals:List[Signal] = [self._phase_changed(gamestate, True)]
        outcome = end.decide(gamestate)
        if outcome is not None:
            signals.append(outcome)
        return signals

    def _enter_night(self, gamestate:Gamestate) -> List[Signal]:
        gamestate.realm.day += 1
        gamestate.phase = DayPhase.NIGHT
        self.logger.info(f'entered night, now day {gamestate.day}')
        self._start_day(gamestate)

        signals:List[Signal] = [self._phase_changed(gamestate, False)]
        selection = select_petition(gamestate.catalog, gamestate.day, None, gamestate.random, Pool.DREAM)
        if selection is None:
            # a dreamless night
            signals.append(PoolExhausted(gamestate.phase, gamestate.day))
            signals.extend(self._enter_morning(gamestate))
        else:
            signals.append(present(gamestate, selection))
        return signals

    def complete(self, gamestate:Gamestate, phase:DayPhase) -> List[Signal]:
        """ handles a completion signal from the fade collaborator """
        if gamestate.is_over():
            self.logger.warning(f'ignoring completion of {phase.name} after the outcome was decided')
            return []
        if phase != gamestate.phase:
            self.logger.warning(f'ignoring completion of {phase.name} while in {gamestate.phase.name}')
            return []

        if phase == DayPhase.MORNING:
            return self._enter_day(gamestate)
        elif phase == DayPhase.EVENING:
            return self._enter_night(gamestate)
        else:
            self.logger.warning(f'{phase.name} does not wait for completion')
            return []

    def pool_exhausted(self, gamestate:Gamestate) -> List[Signal]:
        """ moves on once the active pool has nothing left for the day """
        if gamestate.is_over():
            return []
        if gamestate.phase == DayPhase.DAY:
            return self._enter_evening(gamestate)
        elif gamestate.phase == DayPhase.NIGHT:
            return self._enter_morning(gamestate)
        else:
            raise ValueError(f'pool exhaustion in {gamestate.phase.name}')

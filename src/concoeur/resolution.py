""" The decision resolution pipeline.

A verdict is resolved synchronously, in a fixed order:

 1. find the petitioner's live request
 2. pick the yes or no outcome
 3. apply it to the realm and record the verdict
 4. mark the request used
 5. run the request's response handlers, in order
 6. rerun every filter for the day
 7. select the next petition (or notice the pool is exhausted)
 8. check the end conditions

Handlers see the verdict just applied, filters see what the handlers wrote,
and selection sees what the filters unlocked.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from concoeur import end, util
from concoeur.core import DayPhase, Gamestate, Verdict
from concoeur.filters import FilterRegistry
from concoeur.handlers import HandlerRegistry
from concoeur.selection import Pool, Selection, select_petition, present
from concoeur.signals import OutcomeDecided, PoolExhausted, Signal, VerdictApplied


@dataclass(frozen=True)
class VerdictEvent:
    """ the player ruled on the presented request """
    petitioner_key: str
    verdict: Verdict


class Resolution:
    def __init__(self) -> None:
        self.applied = False
        self.signals:List[Signal] = []
        self.selection:Optional[Selection] = None
        self.exhausted = False
        self.outcome:Optional[OutcomeDecided] = None


class DecisionPipeline:
    def __init__(self, handlers:HandlerRegistry, filters:FilterRegistry) -> None:
        self.logger = logging.getLogger(util.fullname(self))
        self.handlers = handlers
        self.filters = filters

    def resolve(self, gamestate:Gamestate, event:VerdictEvent) -> Resolution:
        resolution = Resolution()
        day = gamestate.day

        petitioner = gamestate.catalog.get(event.petitioner_key)
        if petitioner is None:
            self.logger.error(f'verdict {event.verdict.value} for unknown petitioner {event.petitioner_key}')
            return resolution

        request = petitioner.request(day)
        if request is None:
            self.logger.error(f'verdict {event.verdict.value} for {petitioner.key} without a live request, ignoring')
            return resolution
        if request.availability.used:
            self.logger.error(f'verdict {event.verdict.value} for {petitioner.key} on a request already resolved, ignoring')
            return resolution

        self.logger.info(f'applying verdict [{event.verdict.value}] for petitioner [{petitioner.name}]')
        update = request.outcome(event.verdict)
        gamestate.realm.apply_update(update, event.verdict)
        request.availability.mark_used()
        petitioner.clear_request()
        if gamestate.presented_key == petitioner.key:
            gamestate.presented_key = None
        resolution.applied = True
        resolution.signals.append(VerdictApplied(petitioner.key, event.verdict, update, gamestate.realm.snapshot()))

        for name in request.response_handlers:
            resolution.signals.extend(self.handlers.run(name, gamestate.realm, gamestate.aux))

        self.filters.run(day, gamestate.catalog, gamestate.aux)

        pool = Pool.DREAM if gamestate.phase == DayPhase.NIGHT else Pool.COURT
        selection = select_petition(gamestate.catalog, day, petitioner.key, gamestate.random, pool)

        resolution.outcome = end.decide(gamestate)
        if resolution.outcome is not None:
            resolution.signals.append(resolution.outcome)
            return resolution

        if selection is not None:
            resolution.selection = selection
            resolution.signals.append(present(gamestate, selection))
        else:
            self.logger.info(f'{pool.name.lower()} pool exhausted on day {day}')
            resolution.exhausted = True
            resolution.signals.append(PoolExhausted(gamestate.phase, day))

        return resolution

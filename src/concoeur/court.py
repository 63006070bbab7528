""" The court runtime: one run of the game from the first morning to the
outcome.

Inbound events are queued with submit() and processed strictly in order by
tick(), each to completion before the next is looked at. tick() returns
every outbound signal produced while processing.
"""

import collections
import logging
from typing import Deque, List, Optional, Union

from concoeur import util
from concoeur.core import DayPhase, Gamestate
from concoeur.filters import FilterRegistry
from concoeur.filters import default_registry as default_filters
from concoeur.handlers import HandlerRegistry
from concoeur.handlers import default_registry as default_handlers
from concoeur.insight import InsightRequest, InsightTracker
from concoeur.phase import DayPhaseMachine, PhaseComplete
from concoeur.resolution import DecisionPipeline, VerdictEvent
from concoeur.signals import Signal

InboundEvent = Union[VerdictEvent, PhaseComplete, InsightRequest]


class Court:
    def __init__(
        self,
        gamestate:Gamestate,
        handlers:Optional[HandlerRegistry]=None,
        filters:Optional[FilterRegistry]=None,
        insight:Optional[InsightTracker]=None,
    ) -> None:
        self.logger = logging.getLogger(util.fullname(self))
        self.gamestate = gamestate
        self.handlers = handlers if handlers is not None else default_handlers()
        self.filters = filters if filters is not None else default_filters()
        self.insight = insight if insight is not None else InsightTracker()

        self.pipeline = DecisionPipeline(self.handlers, self.filters)
        self.phases = DayPhaseMachine(self.filters)

        self.event_queue:Deque[InboundEvent] = collections.deque()
        self.events_processed = 0

    @property
    def phase(self) -> DayPhase:
        return self.gamestate.phase

    def is_over(self) -> bool:
        return self.gamestate.is_over()

    def start(self) -> List[Signal]:
        return self.phases.start(self.gamestate)

    def submit(self, event:InboundEvent) -> None:
        self.event_queue.append(event)

    def tick(self) -> List[Signal]:
        signals:List[Signal] = []
        while len(self.event_queue) > 0:
            event = self.event_queue.popleft()
            if self.gamestate.is_over():
                self.logger.warning(f'dropping {event} received after the outcome was decided')
                continue
            signals.extend(self._process(event))
            self.events_processed += 1
        return signals

    def _process(self, event:InboundEvent) -> List[Signal]:
        if isinstance(event, VerdictEvent):
            resolution = self.pipeline.resolve(self.gamestate, event)
            signals = resolution.signals
            if resolution.exhausted:
                signals.extend(self.phases.pool_exhausted(self.gamestate))
            return signals
        elif isinstance(event, PhaseComplete):
            return self.phases.complete(self.gamestate, event.phase)
        elif isinstance(event, InsightRequest):
            return self.insight.acquire(self.gamestate)
        else:
            raise ValueError(f'unknown inbound event {event}')

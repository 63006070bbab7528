""" Response handlers: named side effects run after a verdict.

Each handler reads the verdict just recorded on the realm and writes flags on
exactly one narrative thread of the auxiliary state. Handlers never touch the
realm counters. A handler may cue an outside collaborator by emitting an
ExternalSignal, which the pipeline passes back to its caller.

Handler names are a closed set (HandlerId). Content is checked against it at
load time; names that slip through (lenient loading) are skipped at runtime
with a warning.
"""

import enum
import logging
from typing import Callable, Dict, List, Optional, Set, Union

from concoeur import util
from concoeur.core import RealmState, AuxiliaryState, Verdict
from concoeur.signals import Signal, ExternalSignal


class HandlerId(enum.Enum):
    PRINCE_FESTIVAL = "prince_festival_handler"
    SMITHY_COMMISSION = "smithy_commission_handler"
    SMITHY_PAYMENT = "smithy_payment_handler"
    NUN_ORPHANAGE = "nun_orphanage_handler"
    NUN_PARDON = "nun_pardon_handler"
    DUCHY_GRAIN = "duchy_grain_handler"
    DUCHY_AUTONOMY = "duchy_autonomy_handler"
    DREAM_OMEN = "dream_omen_handler"


class HandlerContext:
    def __init__(self, realm:RealmState, aux:AuxiliaryState) -> None:
        self.realm = realm
        self.aux = aux
        self.signals:List[Signal] = []

    def approved(self) -> Optional[bool]:
        """ True if the last verdict was yes, None if there was none """
        if self.realm.last_verdict is None:
            return None
        return self.realm.last_verdict == Verdict.YES

    def emit(self, channel:str, name:str) -> None:
        self.signals.append(ExternalSignal(channel, name))


Handler = Callable[[HandlerContext], None]


class HandlerRegistry:
    def __init__(self) -> None:
        self.logger = logging.getLogger(util.fullname(self))
        self.handlers:Dict[HandlerId, Handler] = {}
        self._warned:Set[str] = set()

    def register_handler(self, handler_id:HandlerId, handler:Handler) -> None:
        if handler_id in self.handlers:
            raise ValueError(f'handler {handler_id.value} already registered')
        self.handlers[handler_id] = handler

    def lookup(self, name:Union[HandlerId, str]) -> Optional[HandlerId]:
        if isinstance(name, HandlerId):
            return name if name in self.handlers else None
        try:
            handler_id = HandlerId(name)
        except ValueError:
            return None
        return handler_id if handler_id in self.handlers else None

    def __contains__(self, name:object) -> bool:
        if not isinstance(name, (HandlerId, str)):
            return False
        return self.lookup(name) is not None

    def run(self, name:Union[HandlerId, str], realm:RealmState, aux:AuxiliaryState) -> List[Signal]:
        """ runs the named handler, returning any signals it emitted.

        unknown names are logged (once) and skipped.
        """
        handler_id = self.lookup(name)
        if handler_id is None:
            raw_name = name.value if isinstance(name, HandlerId) else name
            if raw_name not in self._warned:
                self._warned.add(raw_name)
                self.logger.warning(f'unknown response handler "{raw_name}", skipping')
            return []

        self.logger.debug(f'running handler {handler_id.value} after {realm.last_verdict}')
        context = HandlerContext(realm, aux)
        self.handlers[handler_id](context)
        return context.signals


def prince_festival(ctx:HandlerContext) -> None:
    ctx.aux.prince.approved_festival = ctx.approved()

def smithy_commission(ctx:HandlerContext) -> None:
    ctx.aux.smithy.commissioned_blades = ctx.approved()

def smithy_payment(ctx:HandlerContext) -> None:
    ctx.aux.smithy.paid_in_full = ctx.approved()

def nun_orphanage(ctx:HandlerContext) -> None:
    ctx.aux.nun.funded_orphanage = ctx.approved()

def nun_pardon(ctx:HandlerContext) -> None:
    ctx.aux.nun.pardoned_thief = ctx.approved()

def duchy_grain(ctx:HandlerContext) -> None:
    ctx.aux.duchy.sent_grain = ctx.approved()

def duchy_autonomy(ctx:HandlerContext) -> None:
    ctx.aux.duchy.granted_autonomy = ctx.approved()

def dream_omen(ctx:HandlerContext) -> None:
    ctx.aux.dream.heard_omen = True
    ctx.aux.dream.heeded_omen = ctx.approved()
    # the one handler that reaches outside the state boundary
    ctx.emit("audio", "omen_bell")


def register_handlers(registry:HandlerRegistry) -> None:
    registry.register_handler(HandlerId.PRINCE_FESTIVAL, prince_festival)
    registry.register_handler(HandlerId.SMITHY_COMMISSION, smithy_commission)
    registry.register_handler(HandlerId.SMITHY_PAYMENT, smithy_payment)
    registry.register_handler(HandlerId.NUN_ORPHANAGE, nun_orphanage)
    registry.register_handler(HandlerId.NUN_PARDON, nun_pardon)
    registry.register_handler(HandlerId.DUCHY_GRAIN, duchy_grain)
    registry.register_handler(HandlerId.DUCHY_AUTONOMY, duchy_autonomy)
    registry.register_handler(HandlerId.DREAM_OMEN, dream_omen)

def default_registry() -> HandlerRegistry:
    registry = HandlerRegistry()
    register_handlers(registry)
    return registry

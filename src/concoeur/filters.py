""" Availability filters: named predicates that lock or unlock requests.

A filter reads the auxiliary thread state and produces the value of one
request's availability.filtered flag. Filters are side effect free apart from
that flag, so running them repeatedly against the same state is harmless.
They run once at the start of each day and again after every verdict, which
makes a request unlocked by this verdict's handlers eligible for the very
next selection.

Most filters are written as small boolean criteria over thread flags.
"""

import abc
import enum
import logging
from typing import Callable, Dict, Optional, Set, Union

from concoeur import util
from concoeur.core import AuxiliaryState, PetitionCatalog


class Criteria(abc.ABC):
    @abc.abstractmethod
    def evaluate(self, aux:AuxiliaryState) -> bool: ...

class Literal(Criteria):
    def __init__(self, value:bool) -> None:
        self.value = value
    def evaluate(self, aux:AuxiliaryState) -> bool:
        return self.value

class Approved(Criteria):
    """ the player said yes on this matter """
    def __init__(self, thread:str, flag:str) -> None:
        self.thread = thread
        self.flag = flag
    def evaluate(self, aux:AuxiliaryState) -> bool:
        return aux.flag(self.thread, self.flag) is True

class Refused(Criteria):
    """ the player said no on this matter (undecided does not count) """
    def __init__(self, thread:str, flag:str) -> None:
        self.thread = thread
        self.flag = flag
    def evaluate(self, aux:AuxiliaryState) -> bool:
        return aux.flag(self.thread, self.flag) is False

class Negation(Criteria):
    def __init__(self, inner:Criteria) -> None:
        self.inner = inner
    def evaluate(self, aux:AuxiliaryState) -> bool:
        return not self.inner.evaluate(aux)

class Disjunction(Criteria):
    def __init__(self, a:Criteria, b:Criteria) -> None:
        self.a = a
        self.b = b
    def evaluate(self, aux:AuxiliaryState) -> bool:
        return self.a.evaluate(aux) or self.b.evaluate(aux)

class Conjunction(Criteria):
    def __init__(self, a:Criteria, b:Criteria) -> None:
        self.a = a
        self.b = b
    def evaluate(self, aux:AuxiliaryState) -> bool:
        return self.a.evaluate(aux) and self.b.evaluate(aux)


class Unlocks:
    """ A filter that keeps its request locked until criteria hold. """
    def __init__(self, criteria:Criteria) -> None:
        self.criteria = criteria

    def __call__(self, aux:AuxiliaryState) -> bool:
        return not self.criteria.evaluate(aux)


class FilterId(enum.Enum):
    PRINCE_FESTIVAL_HELD = "prince_festival_held"
    PRINCE_FESTIVAL_REFUSED = "prince_festival_refused"
    SMITHY_BLADES_READY = "smithy_blades_ready"
    SMITHY_DEBT = "smithy_debt"
    NUN_ORPHANAGE_THANKS = "nun_orphanage_thanks"
    NUN_THIEF_RETURNS = "nun_thief_returns"
    DUCHY_FAMINE = "duchy_famine"
    DUCHY_SECESSION = "duchy_secession"
    DREAM_OMEN_RECALLED = "dream_omen_recalled"


# (auxiliary state) -> value for availability.filtered
Filter = Callable[[AuxiliaryState], bool]


class FilterRegistry:
    def __init__(self) -> None:
        self.logger = logging.getLogger(util.fullname(self))
        self.filters:Dict[FilterId, Filter] = {}
        self._warned:Set[str] = set()

    def register_filter(self, filter_id:FilterId, f:Filter) -> None:
        if filter_id in self.filters:
            raise ValueError(f'filter {filter_id.value} already registered')
        self.filters[filter_id] = f

    def lookup(self, name:Union[FilterId, str]) -> Optional[FilterId]:
        if isinstance(name, FilterId):
            return name if name in self.filters else None
        try:
            filter_id = FilterId(name)
        except ValueError:
            return None
        return filter_id if filter_id in self.filters else None

    def __contains__(self, name:object) -> bool:
        if not isinstance(name, (FilterId, str)):
            return False
        return self.lookup(name) is not None

    def evaluate(self, name:Union[FilterId, str], aux:AuxiliaryState) -> Optional[bool]:
        """ the filtered value the named filter computes, None if unknown """
        filter_id = self.lookup(name)
        if filter_id is None:
            raw_name = name.value if isinstance(name, FilterId) else name
            if raw_name not in self._warned:
                self._warned.add(raw_name)
                self.logger.warning(f'unknown filter "{raw_name}", leaving availability as is')
            return None
        return self.filters[filter_id](aux)

    def run(self, day:int, catalog:PetitionCatalog, aux:AuxiliaryState) -> int:
        """ Recomputes availability.filtered for every unused request of day
        that names a filter. Returns how many flags changed. """
        changed = 0
        for petitioner, index, request in catalog.requests_for_day(day):
            if request.availability.used or request.filter is None:
                continue
            filtered = self.evaluate(request.filter, aux)
            if filtered is None:
                continue
            if filtered != request.availability.filtered:
                changed += 1
                self.logger.debug(f'{petitioner.key}:{day}:{index} {"locked" if filtered else "unlocked"} by {request.filter}')
            request.availability.filtered = filtered
        return changed


def register_filters(registry:FilterRegistry) -> None:
    registry.register_filter(FilterId.PRINCE_FESTIVAL_HELD, Unlocks(Approved("prince", "approved_festival")))
    registry.register_filter(FilterId.PRINCE_FESTIVAL_REFUSED, Unlocks(Refused("prince", "approved_festival")))
    registry.register_filter(FilterId.SMITHY_BLADES_READY, Unlocks(Approved("smithy", "commissioned_blades")))
    registry.register_filter(FilterId.SMITHY_DEBT, Unlocks(Conjunction(
        Approved("smithy", "commissioned_blades"),
        Negation(Approved("smithy", "paid_in_full")),
    )))
    registry.register_filter(FilterId.NUN_ORPHANAGE_THANKS, Unlocks(Approved("nun", "funded_orphanage")))
    registry.register_filter(FilterId.NUN_THIEF_RETURNS, Unlocks(Approved("nun", "pardoned_thief")))
    registry.register_filter(FilterId.DUCHY_FAMINE, Unlocks(Refused("duchy", "sent_grain")))
    registry.register_filter(FilterId.DUCHY_SECESSION, Unlocks(Disjunction(
        Approved("duchy", "granted_autonomy"),
        Conjunction(Refused("duchy", "sent_grain"), Refused("duchy", "granted_autonomy")),
    )))
    registry.register_filter(FilterId.DREAM_OMEN_RECALLED, Unlocks(Approved("dream", "heard_omen")))

def default_registry() -> FilterRegistry:
    registry = FilterRegistry()
    register_filters(registry)
    return registry

from typing import Any, List, Optional, Sequence

from concoeur.core import (
    Petitioner, PetitionerClass, PetitionCatalog, Request, StateUpdate,
)
from concoeur.court import Court
from concoeur.phase import PhaseComplete
from concoeur.signals import Signal, PhaseChanged

def make_request(text:str="a humble request", yes:Optional[StateUpdate]=None, no:Optional[StateUpdate]=None, **kwargs:Any) -> Request:
    return Request(
        text,
        yes if yes is not None else StateUpdate(),
        no if no is not None else StateUpdate(),
        **kwargs,
    )

def make_petitioner(key:str, requests:Sequence[Sequence[Request]], petitioner_class:PetitionerClass=PetitionerClass.PEASANT) -> Petitioner:
    return Petitioner(key, key.title(), petitioner_class, f'characters/{key}.png', requests)

def plain_requests(*counts:int) -> List[List[Request]]:
    """ counts[day] requests per day, each worth +5 prosperity on yes """
    return [
        [make_request(f'request {day}:{i}', yes=StateUpdate(wealth=3., happiness=2.)) for i in range(count)]
        for day, count in enumerate(counts)
    ]

def court_catalog() -> PetitionCatalog:
    """ A small three day court: two plain petitioners, a prince with a
    festival thread and a dream with an omen thread. No verdict moves the
    heart. """

    prince = make_petitioner("prince", [
        [make_request("a festival?", yes=StateUpdate(wealth=3., happiness=2.), response_handlers=["prince_festival_handler"])],
        [make_request("another festival?", yes=StateUpdate(happiness=1.), filter="prince_festival_held")],
        [make_request("a seat at court?", yes=StateUpdate(wealth=1.))],
    ], PetitionerClass.ROYAL)
    dream = make_petitioner("dream", [
        [],
        [make_request("a bell tolls", response_handlers=["dream_omen_handler"])],
        [make_request("the bell again", filter="dream_omen_recalled")],
    ], PetitionerClass.SPIRIT)

    return PetitionCatalog([
        make_petitioner("alice", plain_requests(2, 1, 1)),
        make_petitioner("bob", plain_requests(2, 1, 1)),
        prince,
        dream,
    ])

def acknowledge(court:Court, signals:Sequence[Signal]) -> bool:
    """ submits a completion for every phase waiting on one """
    acknowledged = False
    for signal in signals:
        if isinstance(signal, PhaseChanged) and signal.awaits_completion:
            court.submit(PhaseComplete(signal.phase))
            acknowledged = True
    return acknowledged

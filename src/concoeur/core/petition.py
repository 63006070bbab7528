""" Petitioners and the requests they bring to court. """

import enum
from typing import Optional, Union, Sequence, List, Tuple

import numpy as np

from concoeur import util
from .realm import StateUpdate, Verdict


class PetitionerClass(enum.Enum):
    PEASANT = "Peasant"
    CLERGY = "Clergy"
    NOBLE = "Noble"
    ROYAL = "Royal"
    SPIRIT = "Spirit"


class Availability:
    """ A request is eligible iff it is neither filtered nor used.

    used is one-way: once set it stays set for the rest of the run.
    """
    def __init__(self, filtered:bool=False, used:bool=False) -> None:
        self.filtered = filtered
        self._used = used

    @property
    def used(self) -> bool:
        return self._used

    def mark_used(self) -> None:
        self._used = True

    def is_available(self) -> bool:
        return not (self.filtered or self._used)

    def __repr__(self) -> str:
        return f'Availability(filtered={self.filtered}, used={self._used})'


class Request:
    def __init__(
        self,
        text:str,
        yes:StateUpdate,
        no:StateUpdate,
        filter:Optional[Union[enum.Enum, str]]=None,
        response_handlers:Optional[Sequence[Union[enum.Enum, str]]]=None,
        availability:Optional[Availability]=None,
        yes_label:Optional[str]=None,
        no_label:Optional[str]=None,
    ) -> None:
        self.text = text
        self.yes = yes
        self.no = no
        # HandlerId/FilterId members, or raw names when content is loaded leniently
        self.filter = filter
        self.response_handlers:List[Union[enum.Enum, str]] = list(response_handlers or [])
        self.availability = availability or Availability()
        self.yes_label = yes_label
        self.no_label = no_label

    def outcome(self, verdict:Verdict) -> StateUpdate:
        if verdict == Verdict.YES:
            return self.yes
        return self.no

    def is_available(self) -> bool:
        return self.availability.is_available()

    def __repr__(self) -> str:
        return f'Request({self.text[:24]!r}, filter={self.filter}, {self.availability})'


class Petitioner:
    def __init__(self, key:str, name:str, petitioner_class:PetitionerClass, sprite_path:str, requests:Sequence[Sequence[Request]]) -> None:
        self.key = key
        self.name = name
        self.petitioner_class = petitioner_class
        self.sprite_path = sprite_path
        # outer index is the day, inner index the slot within that day
        self.requests:List[List[Request]] = [list(x) for x in requests]
        self.current_request:Optional[int] = None

    def day_requests(self, day:int) -> Sequence[Request]:
        if day < 0 or day >= len(self.requests):
            return []
        return self.requests[day]

    def available_indices(self, day:int) -> List[int]:
        return [i for i, r in enumerate(self.day_requests(day)) if r.is_available()]

    def sample_request(self, day:int, r:np.random.Generator) -> Optional[Tuple[int, Request]]:
        """ Sample one of the remaining eligible requests for day, if any,
        along with its slot index. """
        indices = self.available_indices(day)
        if len(indices) == 0:
            return None
        index = util.choose(r, indices)
        return index, self.requests[day][index]

    def set_current(self, day:int, index:int) -> None:
        if index < 0 or index >= len(self.day_requests(day)):
            raise IndexError(f'{self.key} has no request {index} on day {day}')
        self.current_request = index

    def request(self, day:int) -> Optional[Request]:
        """ the current request, if any """
        if self.current_request is None:
            return None
        requests = self.day_requests(day)
        if self.current_request >= len(requests):
            return None
        return requests[self.current_request]

    def clear_request(self) -> None:
        """ Clear the current request selection. Called at the start of every day. """
        self.current_request = None

    def __repr__(self) -> str:
        return f'Petitioner({self.key!r}, {self.petitioner_class.value}, days={len(self.requests)})'

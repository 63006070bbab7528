""" The petition catalog: every petitioner keyed by name.

Loaded once at startup (see concoeur.content). The petitioners and their
requests are mutable so selection and resolution can flip availability.
"""

from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from .petition import Petitioner, Request


class PetitionCatalog:
    def __init__(self, petitioners:Optional[Iterable[Petitioner]]=None) -> None:
        self.petitioners:Dict[str, Petitioner] = {}
        for petitioner in petitioners or []:
            self.add(petitioner)

    def add(self, petitioner:Petitioner) -> None:
        if petitioner.key in self.petitioners:
            raise ValueError(f'duplicate petitioner key {petitioner.key}')
        self.petitioners[petitioner.key] = petitioner

    def get(self, key:str) -> Optional[Petitioner]:
        return self.petitioners.get(key)

    def __getitem__(self, key:str) -> Petitioner:
        return self.petitioners[key]

    def __contains__(self, key:object) -> bool:
        return key in self.petitioners

    def __iter__(self) -> Iterator[Petitioner]:
        return iter(self.petitioners.values())

    def __len__(self) -> int:
        return len(self.petitioners)

    def keys(self) -> List[str]:
        return list(self.petitioners.keys())

    def requests_for_day(self, day:int) -> Iterator[Tuple[Petitioner, int, Request]]:
        for petitioner in self.petitioners.values():
            for i, request in enumerate(petitioner.day_requests(day)):
                yield petitioner, i, request

    def clear_requests(self) -> None:
        for petitioner in self.petitioners.values():
            petitioner.clear_request()

""" Loads petitioner content into the petition catalog.

One TOML document per petitioner, named <key>.toml:

    name = "Prince Aldric"
    class = "Royal"
    sprite_path = "characters/prince.png"

    [[requests]]
    day = 0
    text = "..."
    yes = { heart_size = 1, happiness = 2 }
    no = { heart_size = -1 }
    filter = "prince_festival_held"
    response_handlers = ["prince_festival_handler"]

Requests are grouped by day in file order, slot indices follow that order.
The list-of-lists form (requests = [[...], [...]], outer index the day) is
accepted as well, which is handy for building catalogs in code.
"""

import enum
import importlib.resources
import logging
import os
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Type, TypeVar, Union

import toml # type: ignore

from concoeur import config
from concoeur.core import (
    Availability, PetitionCatalog, Petitioner, PetitionerClass, Request, StateUpdate,
)
from concoeur.filters import FilterId
from concoeur.handlers import HandlerId

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=enum.Enum)


class ContentError(ValueError):
    """ Petitioner content is malformed. """
    pass


def _strict(strict:Optional[bool]) -> bool:
    if strict is None:
        return bool(config.Settings.content.strict_names)
    return strict

def _resolve_name(enum_type:Type[E], name:Any, strict:bool, what:str, where:str) -> Union[E, str]:
    if not isinstance(name, str):
        raise ContentError(f'{where}: {what} names must be strings, got {name!r}')
    try:
        return enum_type(name)
    except ValueError:
        if strict:
            raise ContentError(f'{where}: unknown {what} "{name}"') from None
        logger.warning(f'{where}: unknown {what} "{name}", it will be skipped at runtime')
        return name

def _load_update(data:Any, where:str) -> StateUpdate:
    if not isinstance(data, Mapping):
        raise ContentError(f'{where}: expected a table, got {data!r}')
    try:
        return StateUpdate.from_dict(data)
    except ValueError as e:
        raise ContentError(f'{where}: {e}') from e

def load_request(data:Mapping[str, Any], where:str="request", strict:Optional[bool]=None) -> Request:
    strict = _strict(strict)
    for key in ("text", "yes", "no"):
        if key not in data:
            raise ContentError(f'{where}: missing required field "{key}"')

    filter_name = data.get("filter")
    request_filter = _resolve_name(FilterId, filter_name, strict, "filter", where) if filter_name is not None else None

    raw_handlers = data.get("response_handlers", [])
    if not isinstance(raw_handlers, list):
        raise ContentError(f'{where}: response_handlers must be a list')
    response_handlers = [_resolve_name(HandlerId, x, strict, "response handler", where) for x in raw_handlers]

    raw_availability = data.get("availability", {})
    if not isinstance(raw_availability, Mapping):
        raise ContentError(f'{where}: availability must be a table')
    unknown = set(raw_availability.keys()) - {"filtered", "used"}
    if unknown:
        raise ContentError(f'{where}: unknown availability fields {sorted(unknown)}')
    for key in ("filtered", "used"):
        if key in raw_availability and not isinstance(raw_availability[key], bool):
            raise ContentError(f'{where}: availability.{key} must be a bool, got {raw_availability[key]!r}')
    availability = Availability(
        filtered=raw_availability.get("filtered", False),
        used=raw_availability.get("used", False),
    )

    for key in ("yes_label", "no_label"):
        if key in data and not isinstance(data[key], str):
            raise ContentError(f'{where}: {key} must be a string, got {data[key]!r}')

    return Request(
        str(data["text"]).strip(),
        _load_update(data["yes"], f'{where}.yes'),
        _load_update(data["no"], f'{where}.no'),
        filter=request_filter,
        response_handlers=response_handlers,
        availability=availability,
        yes_label=data.get("yes_label"),
        no_label=data.get("no_label"),
    )

def group_requests(raw:Sequence[Any], where:str) -> List[List[Mapping[str, Any]]]:
    """ normalizes either request layout to a list of days of requests """
    if all(isinstance(x, list) for x in raw):
        return [list(x) for x in raw]

    if not all(isinstance(x, Mapping) for x in raw):
        raise ContentError(f'{where}: requests must be all tables or all lists')

    days:List[List[Mapping[str, Any]]] = []
    for i, entry in enumerate(raw):
        day = entry.get("day")
        if not isinstance(day, int) or isinstance(day, bool) or day < 0:
            raise ContentError(f'{where}: request {i} needs a non-negative integer "day"')
        while len(days) <= day:
            days.append([])
        days[day].append({k: v for k, v in entry.items() if k != "day"})
    return days

def load_petitioner(key:str, data:Mapping[str, Any], strict:Optional[bool]=None) -> Petitioner:
    for field in ("name", "class", "sprite_path", "requests"):
        if field not in data:
            raise ContentError(f'{key}: missing required field "{field}"')

    try:
        petitioner_class = PetitionerClass(data["class"])
    except ValueError:
        raise ContentError(f'{key}: unknown class "{data["class"]}"') from None

    if not isinstance(data["requests"], list):
        raise ContentError(f'{key}: requests must be a list')

    requests = [
        [load_request(r, f'{key}:{day}:{slot}', strict) for slot, r in enumerate(day_requests)]
        for day, day_requests in enumerate(group_requests(data["requests"], key))
    ]

    return Petitioner(key, str(data["name"]), petitioner_class, str(data["sprite_path"]).strip(), requests)

def load_petitioner_text(key:str, text:str, strict:Optional[bool]=None) -> Petitioner:
    try:
        data = toml.loads(text)
    except toml.TomlDecodeError as e:
        raise ContentError(f'{key}: {e}') from e
    return load_petitioner(key, data, strict)

def load_catalog(package:Optional[str]=None, strict:Optional[bool]=None) -> PetitionCatalog:
    """ loads every <key>.toml in package (default from config) """
    if package is None:
        package = config.Settings.content.petitioners

    catalog = PetitionCatalog()
    resources = sorted(
        (x for x in importlib.resources.files(package).iterdir() if x.name.endswith(".toml")),
        key=lambda x: x.name,
    )
    for resource in resources:
        key = resource.name[:-len(".toml")]
        catalog.add(load_petitioner_text(key, resource.read_text(encoding="utf-8"), strict))

    if len(catalog) == 0:
        raise ContentError(f'no petitioners found in {package}')

    logger.info(f'loaded {len(catalog)} petitioners: {catalog.keys()}')
    return catalog

def load_catalog_files(paths:Iterable[str], strict:Optional[bool]=None) -> PetitionCatalog:
    catalog = PetitionCatalog()
    for path in paths:
        key = os.path.splitext(os.path.basename(path))[0]
        with open(path, "rt", encoding="utf-8") as f:
            catalog.add(load_petitioner_text(key, f.read(), strict))
    return catalog

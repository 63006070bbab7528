""" Configuration for the court engine.

Settings come from the built-in config.toml shipped in concoeur.data. An
optional override file can be merged on top of it with load_config.
"""

import copy
import importlib.resources
import types
from typing import Dict, Optional, Any, List, Mapping, TextIO

import toml # type: ignore

def merge(a:Dict[str, Any], b:Dict[str, Any], path:Optional[List[str]]=None) -> Dict[str, Any]:
    """ recursively merges b into a

    b[key] overrides a[key] if key present in both. raises an exception if
    b[key] and a[key] are not of the same type.
    """

    if path is None: path = []
    for key in b:
        if key in a:
            if isinstance(a[key], dict) and isinstance(b[key], dict):
                merge(a[key], b[key], path + [str(key)])
            elif a[key].__class__ == b[key].__class__:
                a[key] = b[key]
            else:
                raise ValueError('Conflict at %s' % '.'.join(path + [str(key)]))
        else:
            a[key] = b[key]
    return a

def dict_to_simplenamespace(d:Dict[str, Any]) -> types.SimpleNamespace:
    """ Converts a dict recursively to a SimpleNamespace. """
    d = d.copy()
    for key in d:
        if isinstance(d[key], dict):
            d[key] = dict_to_simplenamespace(d[key])

    return types.SimpleNamespace(**d)

def load_config(config_file:Optional[TextIO]=None, overrides:Optional[Mapping[str, Any]]=None) -> types.SimpleNamespace:
    """ (re)loads Settings from the built-in config.

    config_file: an open TOML file merged on top of the built-in config
    overrides: a nested dict merged last, e.g. {"content": {"strict_names": False}}
    """
    config = toml.loads(importlib.resources.read_text("concoeur.data", "config.toml"))
    if config_file:
        override = toml.load(config_file)
        merge(config, override)
    if overrides:
        merge(config, copy.deepcopy(dict(overrides)))

    global Settings
    Settings = dict_to_simplenamespace(config)

    return Settings

# the built-in config is loaded on import, callers may reload with an override
Settings = load_config()

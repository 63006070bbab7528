""" Utility methods broadly applicable across the codebase. """

import logging
from typing import Any, Sequence, TypeVar

import numpy as np

logger = logging.getLogger(__name__)

T = TypeVar("T")

def fullname(o:Any) -> str:
    # from https://stackoverflow.com/a/2020083/553580
    # o.__module__ + "." + o.__class__.__qualname__ is an example in
    # this context of H.L. Mencken's "neat, plausible, and wrong."
    # Python makes no guarantees as to whether the __module__ special
    # attribute is defined, so we take a more circumspect approach.
    # Alas, the module name is explicitly excluded from __qualname__
    # in Python 3.

    if isinstance(o, type):
        klass = o
    else:
        klass = o.__class__

    module = klass.__module__
    if module is None or module == str.__class__.__module__:
        return klass.__qualname__  # Avoid reporting __builtin__
    else:
        return module + '.' + klass.__qualname__

def choose(r:np.random.Generator, items:Sequence[T]) -> T:
    """ uniformly chooses one of items. items must be non-empty. """
    if len(items) == 0:
        raise ValueError("cannot choose from an empty sequence")
    return items[int(r.integers(len(items)))]

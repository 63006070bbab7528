import logging
from typing import Generator
import types

import pytest
import numpy as np

from concoeur import config, handlers, filters
from concoeur.core import RealmState, AuxiliaryState, PetitionCatalog, Gamestate
from concoeur.court import Court
from concoeur.insight import InsightTracker
from . import court_catalog

# some logging to turn on if we like
#logging.getLogger("concoeur").level = logging.DEBUG
#logging.getLogger("concoeur.filters").level = logging.DEBUG

@pytest.fixture
def settings() -> Generator[types.SimpleNamespace, None, None]:
    """ the built-in config, restored after the test """
    yield config.load_config()
    config.load_config()

@pytest.fixture
def realm() -> RealmState:
    return RealmState(heart_size=3.)

@pytest.fixture
def aux() -> AuxiliaryState:
    return AuxiliaryState()

@pytest.fixture
def handler_registry() -> handlers.HandlerRegistry:
    return handlers.default_registry()

@pytest.fixture
def filter_registry() -> filters.FilterRegistry:
    return filters.default_registry()

@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(0)

@pytest.fixture
def catalog() -> PetitionCatalog:
    return court_catalog()

@pytest.fixture
def gamestate(catalog:PetitionCatalog, realm:RealmState, aux:AuxiliaryState, rng:np.random.Generator) -> Gamestate:
    return Gamestate(catalog, realm, aux, r=rng)

@pytest.fixture
def court(gamestate:Gamestate, handler_registry:handlers.HandlerRegistry, filter_registry:filters.FilterRegistry) -> Court:
    return Court(gamestate, handler_registry, filter_registry, InsightTracker(cost=1.))

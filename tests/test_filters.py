""" Tests for availability filters. """

import logging

import pytest

from concoeur import filters
from concoeur.core import PetitionCatalog, Verdict, StateUpdate
from concoeur.filters import FilterId
from . import make_petitioner, make_request

def test_criteria(aux):
    aux.smithy.commissioned_blades = True
    aux.smithy.paid_in_full = False

    assert filters.Approved("smithy", "commissioned_blades").evaluate(aux)
    assert not filters.Refused("smithy", "commissioned_blades").evaluate(aux)
    assert filters.Refused("smithy", "paid_in_full").evaluate(aux)
    # undecided is neither approved nor refused
    assert not filters.Approved("prince", "approved_festival").evaluate(aux)
    assert not filters.Refused("prince", "approved_festival").evaluate(aux)

    assert filters.Negation(filters.Literal(False)).evaluate(aux)
    assert filters.Conjunction(filters.Literal(True), filters.Literal(True)).evaluate(aux)
    assert not filters.Conjunction(filters.Literal(True), filters.Literal(False)).evaluate(aux)
    assert filters.Disjunction(filters.Literal(False), filters.Literal(True)).evaluate(aux)
    assert not filters.Disjunction(filters.Literal(False), filters.Literal(False)).evaluate(aux)

def test_unlocks(aux):
    unlocks = filters.Unlocks(filters.Approved("prince", "approved_festival"))
    assert unlocks(aux)
    aux.prince.approved_festival = True
    assert not unlocks(aux)

def test_festival_filters(filter_registry, aux):
    assert filter_registry.evaluate(FilterId.PRINCE_FESTIVAL_HELD, aux)
    assert filter_registry.evaluate(FilterId.PRINCE_FESTIVAL_REFUSED, aux)

    aux.prince.approved_festival = False
    assert filter_registry.evaluate(FilterId.PRINCE_FESTIVAL_HELD, aux)
    assert not filter_registry.evaluate(FilterId.PRINCE_FESTIVAL_REFUSED, aux)

    aux.prince.approved_festival = True
    assert not filter_registry.evaluate("prince_festival_held", aux)
    assert filter_registry.evaluate("prince_festival_refused", aux)

@pytest.mark.parametrize("commissioned,paid,filtered", [
    (None, None, True),
    (False, None, True),
    (True, None, False),
    (True, False, False),
    (True, True, True),
])
def test_smithy_debt(filter_registry, aux, commissioned, paid, filtered):
    aux.smithy.commissioned_blades = commissioned
    aux.smithy.paid_in_full = paid
    assert filter_registry.evaluate(FilterId.SMITHY_DEBT, aux) == filtered

@pytest.mark.parametrize("grain,autonomy,filtered", [
    (None, None, True),
    (True, None, True),
    (False, None, True),
    (True, True, False),
    (False, False, False),
    (True, False, True),
])
def test_duchy_secession(filter_registry, aux, grain, autonomy, filtered):
    aux.duchy.sent_grain = grain
    aux.duchy.granted_autonomy = autonomy
    assert filter_registry.evaluate(FilterId.DUCHY_SECESSION, aux) == filtered

def test_every_filter_registered(filter_registry, aux):
    for filter_id in FilterId:
        assert filter_id in filter_registry
        assert isinstance(filter_registry.evaluate(filter_id, aux), bool)

def test_run(filter_registry, aux):
    locked = make_request("locked", filter=FilterId.PRINCE_FESTIVAL_HELD)
    used = make_request("used", filter=FilterId.PRINCE_FESTIVAL_HELD)
    used.availability.mark_used()
    plain = make_request("plain")
    tomorrow = make_request("tomorrow", filter=FilterId.PRINCE_FESTIVAL_HELD)
    catalog = PetitionCatalog([make_petitioner("prince", [[locked, used, plain], [tomorrow]])])

    assert filter_registry.run(0, catalog, aux) == 1
    assert locked.availability.filtered
    assert not used.availability.filtered
    assert not plain.availability.filtered
    # other days are left alone
    assert not tomorrow.availability.filtered

    # rerunning against the same state changes nothing
    assert filter_registry.run(0, catalog, aux) == 0

    aux.prince.approved_festival = True
    assert filter_registry.run(0, catalog, aux) == 1
    assert locked.is_available()
    assert not used.is_available()

def test_unknown_filter(filter_registry, aux, caplog):
    request = make_request("legacy", filter="nonesuch_filter")
    request.availability.filtered = True
    catalog = PetitionCatalog([make_petitioner("jeremy", [[request]])])

    with caplog.at_level(logging.WARNING):
        assert filter_registry.run(0, catalog, aux) == 0
        assert filter_registry.run(0, catalog, aux) == 0
    # left as it was
    assert request.availability.filtered
    assert caplog.text.count("nonesuch_filter") == 1

def test_registry():
    registry = filters.FilterRegistry()
    registry.register_filter(FilterId.DUCHY_FAMINE, filters.Unlocks(filters.Literal(True)))
    with pytest.raises(ValueError):
        registry.register_filter(FilterId.DUCHY_FAMINE, filters.Unlocks(filters.Literal(False)))
    assert "duchy_famine" in registry
    assert FilterId.DUCHY_SECESSION not in registry
    assert registry.lookup("nonesuch") is None

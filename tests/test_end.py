""" Tests for win and loss. """

import pytest

from concoeur import end
from concoeur.core import RealmState, DayPhase, Outcome, MAX_HEART, FINAL_DAY
from concoeur.signals import LossReason, OutcomeDecided

def test_heart_bounds():
    assert end.heart_violation(RealmState(heart_size=3.)) is None
    assert end.heart_violation(RealmState(heart_size=0.)) == LossReason.HEART_EMPTY
    assert end.heart_violation(RealmState(heart_size=-1.)) == LossReason.HEART_EMPTY
    assert end.heart_violation(RealmState(heart_size=MAX_HEART)) == LossReason.HEART_BURST
    assert end.heart_violation(RealmState(heart_size=MAX_HEART - 1)) is None

@pytest.mark.parametrize("phase", list(DayPhase))
def test_heart_checked_in_every_phase(phase):
    realm = RealmState(heart_size=0., day=1)
    assert end.check_end_conditions(realm, phase) == (Outcome.LOSS, LossReason.HEART_EMPTY)

def test_heart_beats_prosperity():
    realm = RealmState(heart_size=0., wealth=10., happiness=10., day=FINAL_DAY)
    assert end.check_end_conditions(realm, DayPhase.EVENING) == (Outcome.LOSS, LossReason.HEART_EMPTY)
    realm.heart_size = MAX_HEART
    assert end.check_end_conditions(realm, DayPhase.EVENING) == (Outcome.LOSS, LossReason.HEART_BURST)

def test_prosperity_on_final_evening():
    realm = RealmState(heart_size=3., wealth=6., happiness=4., day=FINAL_DAY)
    assert end.check_end_conditions(realm, DayPhase.EVENING) == (Outcome.WIN, None)

    realm.happiness = 3.
    assert end.check_end_conditions(realm, DayPhase.EVENING) == (Outcome.LOSS, LossReason.NOT_ENOUGH_PROSPERITY)

def test_prosperity_only_on_final_evening():
    realm = RealmState(heart_size=3., day=FINAL_DAY)
    for phase in (DayPhase.MORNING, DayPhase.DAY, DayPhase.NIGHT):
        assert end.check_end_conditions(realm, phase) is None
    realm.day = FINAL_DAY - 1
    assert end.check_end_conditions(realm, DayPhase.EVENING) is None

def test_decide(gamestate):
    gamestate.phase = DayPhase.DAY
    assert end.decide(gamestate) is None
    assert not gamestate.is_over()

    gamestate.realm.heart_size = MAX_HEART + 1
    gamestate.presented_key = "alice"
    signal = end.decide(gamestate)

    assert signal == OutcomeDecided(Outcome.LOSS, LossReason.HEART_BURST, gamestate.realm.snapshot())
    assert gamestate.outcome == Outcome.LOSS
    assert gamestate.is_over()
    assert gamestate.presented_key is None

    # decided once
    assert end.decide(gamestate) is None

@pytest.mark.parametrize("heart", [-1., 0., 0.5, 3., MAX_HEART - 0.5, MAX_HEART, MAX_HEART + 2])
def test_heart_violation_matches_bounds(heart):
    realm = RealmState(heart_size=heart)
    assert (end.heart_violation(realm) is None) == realm.heart_in_bounds()

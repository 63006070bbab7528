""" Tests for the console runner. """

import io

from concoeur import play
from concoeur.core import Outcome, RealmState

def test_autoplay(court):
    out = io.StringIO()
    outcome = play.ConsoleRunner(court, autoplay=True, out=out).run()

    assert outcome in (Outcome.WIN, Outcome.LOSS)
    assert outcome == court.gamestate.outcome
    text = out.getvalue()
    assert "comes before you" in text
    assert "You have" in text

def test_interactive(court):
    court.gamestate.realm.can_use_insight = True
    # nonsense, insight, then grant everything
    inp = io.StringIO("what\ni\n" + "y\n" * 50)
    out = io.StringIO()

    outcome = play.ConsoleRunner(court, out=out, inp=inp).run()

    assert outcome == Outcome.WIN
    text = out.getvalue()
    assert "y, n or i" in text
    assert "insight (-1 heart)" in text
    assert "You have won" in text

def test_input_closed(court):
    out = io.StringIO()
    assert play.ConsoleRunner(court, out=out, inp=io.StringIO("")).run() is None
    assert not court.is_over()

def test_main(tmp_path, capsys):
    play.main(["--autoplay", "--seed", "7", "--log", str(tmp_path / "concoeur.log")])
    captured = capsys.readouterr()
    assert "comes before you" in captured.out
    assert "You have" in captured.out

def test_gauge():
    assert play.gauge(0., 10.) == ".........."
    assert play.gauge(5., 10.) == "#####....."
    assert play.gauge(10., 10.) == "##########"
    # clamped both ways
    assert play.gauge(-3., 10.) == ".........."
    assert play.gauge(25., 20.) == "##########"

def test_realm_status():
    status = play.realm_status(RealmState(heart_size=3., wealth=4., happiness=-1.))
    assert "heart [#####.....] 3/6" in status
    assert "wealth [####......] 4/10" in status
    assert "happiness [..........] -1/10" in status
    assert "prosperity [##........] 3/20" in status

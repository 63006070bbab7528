""" Plays Concoeur in the terminal.

Fades are skipped: every phase that waits for completion is acknowledged as
soon as it is shown.
"""

import argparse
import contextlib
import logging
import sys
from typing import List, Optional, Sequence, TextIO

from concoeur import config, content, util
from concoeur.core import (
    DayPhase, Gamestate, Outcome, RealmState, Verdict,
    MAX_HEART, MAX_WEALTH, MAX_HAPPINESS, MAX_PROSPERITY,
)
from concoeur.court import Court, InboundEvent
from concoeur.insight import InsightRequest
from concoeur.phase import PhaseComplete
from concoeur.resolution import VerdictEvent
from concoeur.signals import (
    Signal, PetitionPresented, VerdictApplied, ExternalSignal, PhaseChanged,
    PoolExhausted, InsightRevealed, OutcomeDecided,
)


def gauge(value:float, maximum:float, width:int=10) -> str:
    """ a fixed width bar, clamped to [0, maximum] """
    filled = int(round(min(max(value, 0.), maximum) / maximum * width))
    return "#" * filled + "." * (width - filled)

def realm_status(realm:RealmState) -> str:
    return (
        f'heart [{gauge(realm.heart_size, MAX_HEART)}] {realm.heart_size:.0f}/{MAX_HEART:.0f}'
        f'  wealth [{gauge(realm.wealth, MAX_WEALTH)}] {realm.wealth:.0f}/{MAX_WEALTH:.0f}'
        f'  happiness [{gauge(realm.happiness, MAX_HAPPINESS)}] {realm.happiness:.0f}/{MAX_HAPPINESS:.0f}'
        f'  prosperity [{gauge(realm.prosperity(), MAX_PROSPERITY)}] {realm.prosperity():.0f}/{MAX_PROSPERITY:.0f}'
    )


class ConsoleRunner:
    def __init__(self, court:Court, autoplay:bool=False, out:TextIO=sys.stdout, inp:TextIO=sys.stdin) -> None:
        self.logger = logging.getLogger(util.fullname(self))
        self.court = court
        self.autoplay = autoplay
        self.out = out
        self.inp = inp

    def write(self, line:str="") -> None:
        self.out.write(line + "\n")

    def show(self, signals:Sequence[Signal]) -> bool:
        """ prints signals, returns True if a phase completion was submitted """
        acknowledged = False
        for signal in signals:
            if isinstance(signal, PhaseChanged):
                if signal.phase == DayPhase.MORNING:
                    self.write()
                    self.write(f'=== {signal.day_name} ===')
                else:
                    self.write(f'--- {signal.phase.name.lower()} ---')
                if signal.awaits_completion:
                    self.court.submit(PhaseComplete(signal.phase))
                    acknowledged = True
            elif isinstance(signal, PetitionPresented):
                self.write()
                self.write(f'{signal.name} ({signal.petitioner_class.value}) comes before you:')
                self.write(f'  {signal.text}')
                self.write(f'  [y] {signal.yes_label}  [n] {signal.no_label}  [i] insight')
            elif isinstance(signal, VerdictApplied):
                if signal.last_word:
                    self.write(f'  "{signal.last_word}"')
                self.write(f'  {realm_status(signal.realm)}')
            elif isinstance(signal, InsightRevealed):
                self.write(f'  insight (-{signal.cost:.0f} heart): yes heart {signal.yes_heart:+.0f} prosperity {signal.yes_prosperity:.0f}, no heart {signal.no_heart:+.0f} prosperity {signal.no_prosperity:.0f}')
            elif isinstance(signal, ExternalSignal):
                self.logger.debug(f'{signal.channel} cue {signal.name}')
            elif isinstance(signal, PoolExhausted):
                self.logger.debug(f'pool exhausted in {signal.phase.name} of day {signal.day}')
            elif isinstance(signal, OutcomeDecided):
                self.write()
                if signal.outcome == Outcome.WIN:
                    self.write("The realm prospers. You have won.")
                else:
                    reason = signal.reason.name.lower().replace("_", " ") if signal.reason else "unknown"
                    self.write(f'You have lost: {reason}.')
                self.write(realm_status(signal.realm))
        return acknowledged

    def prompt(self, key:str) -> Optional[InboundEvent]:
        if self.autoplay:
            verdict = Verdict.YES if self.court.gamestate.random.integers(2) == 0 else Verdict.NO
            self.write(f'> {verdict.value}')
            return VerdictEvent(key, verdict)

        while True:
            self.out.write(f'heart {self.court.gamestate.realm.heart_size:.0f}/{MAX_HEART:.0f} > ')
            self.out.flush()
            line = self.inp.readline()
            if line == "":
                return None
            choice = line.strip().lower()
            if choice in ("y", "yes"):
                return VerdictEvent(key, Verdict.YES)
            elif choice in ("n", "no"):
                return VerdictEvent(key, Verdict.NO)
            elif choice in ("i", "insight"):
                return InsightRequest()
            self.write("y, n or i")

    def run(self) -> Optional[Outcome]:
        pending = self.court.start()
        while True:
            acknowledged = self.show(pending)
            if self.court.is_over():
                break
            if acknowledged:
                pending = self.court.tick()
                continue

            presented = self.court.gamestate.presented()
            if presented is None:
                raise RuntimeError(f'court stalled in {self.court.phase.name} with no petition presented')
            petitioner, _ = presented

            event = self.prompt(petitioner.key)
            if event is None:
                self.logger.info("input closed, abandoning the run")
                return None
            self.court.submit(event)
            pending = self.court.tick()

        return self.court.gamestate.outcome


def main(argv:Optional[List[str]]=None) -> None:
    with contextlib.ExitStack() as context_stack:
        parser = argparse.ArgumentParser(description="hold court for three days and keep your heart")
        parser.add_argument("--seed", type=int, default=None,
                help="seed for petition selection")
        parser.add_argument("--config", type=str, default=None,
                help="TOML file merged over the built-in config")
        parser.add_argument("--autoplay", action="store_true",
                help="rule at random instead of asking")
        parser.add_argument("--log", type=str, default=None,
                help="log file, defaults to log.file from config")

        args = parser.parse_args(argv)

        if args.config:
            config.load_config(context_stack.enter_context(open(args.config, "rt")))

        logging.basicConfig(
                format="%(asctime)s %(name)-12s %(levelname)-8s %(message)s",
                filename=args.log or config.Settings.log.file,
                filemode="w",
                level=logging.INFO
        )
        # send warnings to the logger
        logging.captureWarnings(True)

        catalog = content.load_catalog()
        court = Court(Gamestate(catalog, seed=args.seed))
        outcome = ConsoleRunner(court, autoplay=args.autoplay).run()

        logging.info(f'done: {outcome.name if outcome else "abandoned"} after {court.events_processed} events')

if __name__ == "__main__":
    main()

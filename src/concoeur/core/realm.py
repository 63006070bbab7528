""" The realm: the handful of scalar counters every verdict moves.

RealmState is mutated by the decision pipeline (applying StateUpdates) and by
the day-phase machine (advancing the day). Everything else only reads it.
"""

import copy
import enum
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from concoeur import config

# win/loss thresholds, never read from config
MAX_HEART = 6.0
MIN_PROSPERITY_THRESHOLD = 10.0
FINAL_DAY = 2

# only used to scale stat displays
MAX_WEALTH = 10.0
MAX_HAPPINESS = 10.0
MAX_PROSPERITY = MAX_WEALTH + MAX_HAPPINESS


class Verdict(enum.Enum):
    YES = "yes"
    NO = "no"


class Mask(enum.Enum):
    HAPPY = "Happy"
    NEUTRAL = "Neutral"
    SAD = "Sad"
    NONE = "None"


@dataclass(frozen=True)
class StateUpdate:
    """ One outcome of a request: deltas plus a few optional overrides. """
    heart_size: float = 0.
    wealth: float = 0.
    happiness: float = 0.
    can_use_insight: Optional[bool] = None
    mask: Optional[Mask] = None
    last_word: Optional[str] = None

    @staticmethod
    def from_dict(data:Mapping[str, Any]) -> "StateUpdate":
        unknown = set(data.keys()) - {"heart_size", "wealth", "happiness", "can_use_insight", "mask", "last_word"}
        if unknown:
            raise ValueError(f'unknown state update fields {sorted(unknown)}')

        for key in ("heart_size", "wealth", "happiness"):
            if key in data and (isinstance(data[key], bool) or not isinstance(data[key], (int, float))):
                raise ValueError(f'{key} must be a number, got {data[key]!r}')
        if "can_use_insight" in data and not isinstance(data["can_use_insight"], bool):
            raise ValueError(f'can_use_insight must be a bool, got {data["can_use_insight"]!r}')

        mask = Mask(data["mask"]) if "mask" in data else None
        last_word = data.get("last_word")
        if last_word is not None:
            last_word = str(last_word).strip()

        return StateUpdate(
            float(data.get("heart_size", 0.)),
            float(data.get("wealth", 0.)),
            float(data.get("happiness", 0.)),
            data.get("can_use_insight"),
            mask,
            last_word,
        )


@dataclass
class RealmState:
    heart_size: float = 0.
    wealth: float = 0.
    happiness: float = 0.
    can_use_insight: bool = False
    last_verdict: Optional[Verdict] = None
    day: int = 0
    mask: Mask = Mask.NEUTRAL

    @staticmethod
    def from_settings() -> "RealmState":
        return RealmState(
            heart_size=config.Settings.realm.starting_heart,
            wealth=config.Settings.realm.starting_wealth,
            happiness=config.Settings.realm.starting_happiness,
        )

    @staticmethod
    def calculate_prosperity(happiness:float, wealth:float) -> float:
        return happiness + wealth

    def prosperity(self) -> float:
        return RealmState.calculate_prosperity(self.happiness, self.wealth)

    def heart_in_bounds(self) -> bool:
        return 0. < self.heart_size < MAX_HEART

    def day_name(self) -> str:
        day_names = config.Settings.calendar.day_names
        if self.day < len(day_names):
            return day_names[self.day]
        return f'Day {self.day + 1}'

    def apply_update(self, update:StateUpdate, verdict:Verdict) -> None:
        """ applies an outcome in a single step.

        readers between pipeline steps never see a partially applied update.
        """
        self.heart_size += update.heart_size
        self.wealth += update.wealth
        self.happiness += update.happiness
        self.last_verdict = verdict
        if update.can_use_insight is not None:
            self.can_use_insight = update.can_use_insight
        if update.mask is not None:
            self.mask = update.mask

    def snapshot(self) -> "RealmState":
        return copy.copy(self)

    def __str__(self) -> str:
        return f'heart: {self.heart_size:.0f}/{MAX_HEART:.0f} wealth: {self.wealth:.0f} happiness: {self.happiness:.0f} prosperity: {self.prosperity():.0f} day: {self.day}'

"""
Pydantic models for Duck Overlord game state.

The engine never mutates a GameState in place: every action copies the
snapshot, edits the copy and hands it back. Content (planets, visitors)
uses the same models so JSON files validate straight into them.
"""

from enum import Enum
from typing import Annotated, ClassVar, Literal, Union

from pydantic import BaseModel, Field


# -----------------------------------------------------------------------------
# Enums
# -----------------------------------------------------------------------------

class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"


class WarCampaign(str, Enum):
    ATTACK = "attack"
    DEFENSE = "defense"


class BountyStage(str, Enum):
    START = "start"
    CONTINUE = "continue"
    STAND_DOWN = "stand_down"      # Calls the hunter off, contract ends


class StateFlag(str, Enum):
    """Boolean flags that option effects can raise."""
    GOD_DENIED = "god_denied"
    JESTER_HIRED = "jester_hired"
    INTERN_HIRED = "intern_hired"
    REFUGEE_BANNED = "refugee_banned"


class GameOverReason(str, Enum):
    """Terminal outcomes, valued by the text shown to the player."""
    VICTORY = (
        "You successfully conquered every planet. You die a hero to your people, "
        "and are remembered as the greatest duck overlord of all time."
    )
    BANKRUPTCY = (
        "Your treasury is empty. With no coins left, your empire collapses "
        "under debt and chaos."
    )
    TERRITORIAL_COLLAPSE = (
        "You have lost all your planets. With no worlds to call your own, "
        "your reign is at an end."
    )
    UPRISING = (
        "Your subjects are utterly miserable. Revolts spread across every world "
        "and you are overthrown."
    )
    EXECUTION = (
        "Rebellion erupts across your empire. With nothing left to lose and "
        "nowhere to retreat, you are dragged from your throne and executed."
    )


# -----------------------------------------------------------------------------
# Special effects (discriminated on `kind`)
# -----------------------------------------------------------------------------

class GambleEffect(BaseModel):
    kind: Literal["gamble"] = "gamble"


class ProphecyEffect(BaseModel):
    kind: Literal["prophecy"] = "prophecy"


class TaxCollectionEffect(BaseModel):
    kind: Literal["tax_collection"] = "tax_collection"


class BountyEffect(BaseModel):
    kind: Literal["bounty"] = "bounty"
    stage: BountyStage = BountyStage.START


class ScienceEffect(BaseModel):
    kind: Literal["science"] = "science"
    step: int = Field(ge=1, le=3)


class WarEffect(BaseModel):
    """Commits troops to a single-roll battle."""
    kind: Literal["war"] = "war"
    campaign: WarCampaign
    investment: int = Field(ge=0)
    our_planet_id: str | None = None     # Defended world (defense only)
    enemy_planet_id: str | None = None


class WarSurrenderEffect(BaseModel):
    kind: Literal["war_surrender"] = "war_surrender"
    planet_id: str


class FlagEffect(BaseModel):
    kind: Literal["flag"] = "flag"
    flag: StateFlag


class WarDiscountEffect(BaseModel):
    kind: Literal["war_discount"] = "war_discount"
    factor: float = Field(gt=0, le=1)


SpecialEffect = Annotated[
    Union[
        GambleEffect,
        ProphecyEffect,
        TaxCollectionEffect,
        BountyEffect,
        ScienceEffect,
        WarEffect,
        WarSurrenderEffect,
        FlagEffect,
        WarDiscountEffect,
    ],
    Field(discriminator="kind"),
]


# -----------------------------------------------------------------------------
# Content models
# -----------------------------------------------------------------------------

class Planet(BaseModel):
    id: str
    name: str
    owned: bool = False


class Effects(BaseModel):
    """What picking an option does. Deltas are applied before the special."""
    coins: int = 0
    happiness: int = 0
    tax_rate_delta: float = 0.0
    rebellion_delta: int = 0
    add_planet_id: str | None = None
    special: SpecialEffect | None = None


class VisitorOption(BaseModel):
    id: str
    text: str
    reaction: str = ""
    effects: Effects = Field(default_factory=Effects)


class VisitorConditions(BaseModel):
    """Eligibility constraints. Unset fields are ignored."""
    min_coins: int | None = None
    max_coins: int | None = None
    min_happiness: int | None = None
    max_happiness: int | None = None
    min_tax_rate: float | None = None
    max_tax_rate: float | None = None
    min_rebellion_chance: int | None = None
    max_rebellion_chance: int | None = None
    god_denied: bool | None = None
    jester_hired: bool | None = None
    intern_hired: bool | None = None
    refugee_banned: bool | None = None
    bounty_active: bool | None = None
    science_step: int | None = None
    requires_owned_planet: str | None = None
    requires_planet_not_owned: str | None = None


class Visitor(BaseModel):
    id: str
    name: str
    sprite: str
    text: str  # May contain {user}; substituted by the front end
    weight: float = Field(default=1.0, gt=0)
    conditions: VisitorConditions | None = None
    options: list[VisitorOption] = Field(min_length=1)

    def get_option(self, option_id: str) -> VisitorOption | None:
        for option in self.options:
            if option.id == option_id:
                return option
        return None


# -----------------------------------------------------------------------------
# Game state
# -----------------------------------------------------------------------------

class Player(BaseModel):
    name: str = ""
    gender: Gender | None = None
    coins: int = 100
    happiness: int = 50


class DaySummary(BaseModel):
    """Day-over-day changes shown between days."""
    day: int
    coins_change: int
    happiness_change: int
    rebellion_change: int


class GameState(BaseModel):
    """
    The aggregate snapshot the presentation layer renders from.

    A visitor is "awaiting a choice" until an option resolves; after that it
    stays on screen with its reaction until the next visitor is requested.
    """

    MAX_TAX_RATE: ClassVar[float] = 0.5
    MAX_REBELLION: ClassVar[int] = 100

    player: Player = Field(default_factory=Player)
    planets: list[Planet] = Field(default_factory=list)
    day: int = 1

    current_visitor: Visitor | None = None
    choice_made: bool = False
    reaction_text: str | None = None

    tax_rate: float = 0.15
    rebellion_chance: int = 0
    visits_today: int = 0
    max_visitors_per_day: int = 5
    visitors_seen_today: list[str] = Field(default_factory=list)

    # Multi-day side quests and flags
    scientist_step: int = 0  # 0 idle, 1 funded, 2 breakthrough pending, 3 done
    bounty_active: bool = False
    bounty_next_report_day: int | None = None
    bounty_failures: int = 0
    god_denied: bool = False
    jester_hired: bool = False
    intern_hired: bool = False
    refugee_banned: bool = False
    war_discount: float = 1.0  # Multiplier on war costs, 1.0 = no discount

    # Day summary
    day_start_coins: int = 100
    day_start_happiness: int = 50
    day_start_rebellion: int = 0
    pending_day_summary: bool = False
    show_day_summary: bool = False
    last_day_summary: DaySummary | None = None

    game_over: bool = False
    game_over_reason: str | None = None

    @property
    def owned_count(self) -> int:
        return sum(1 for p in self.planets if p.owned)

    @property
    def total_planets(self) -> int:
        return len(self.planets)

    @property
    def owned_planets(self) -> list[Planet]:
        return [p for p in self.planets if p.owned]

    @property
    def unowned_planets(self) -> list[Planet]:
        return [p for p in self.planets if not p.owned]

    @property
    def awaiting_choice(self) -> bool:
        return self.current_visitor is not None and not self.choice_made

    @property
    def blocked(self) -> bool:
        """True while no visitor may be drawn or resolved."""
        return self.game_over or self.show_day_summary

    def get_planet(self, planet_id: str) -> Planet | None:
        for planet in self.planets:
            if planet.id == planet_id:
                return planet
        return None

    def has_seen(self, visitor_id: str) -> bool:
        return visitor_id in self.visitors_seen_today

    def set_planet_owned(self, planet_id: str, owned: bool) -> Planet | None:
        """Flip ownership on this (already copied) state. Returns the planet."""
        planet = self.get_planet(planet_id)
        if planet is not None:
            planet.owned = owned
        return planet

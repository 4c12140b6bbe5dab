"""State models and notifications for Duck Overlord.

The store lives in `overlord.state.store`; it is not re-exported here
because it depends on the systems package, which depends on these models.
"""

from .schema import (
    BountyEffect,
    BountyStage,
    DaySummary,
    Effects,
    FlagEffect,
    GambleEffect,
    GameOverReason,
    GameState,
    Gender,
    Planet,
    Player,
    ProphecyEffect,
    ScienceEffect,
    StateFlag,
    TaxCollectionEffect,
    Visitor,
    VisitorConditions,
    VisitorOption,
    WarCampaign,
    WarDiscountEffect,
    WarEffect,
    WarSurrenderEffect,
)
from .actions import Action, ActionType
from .event_bus import (
    EventBus,
    EventType,
    GameEvent,
    get_event_bus,
    reset_event_bus,
)

__all__ = [
    # Schema
    "BountyEffect",
    "BountyStage",
    "DaySummary",
    "Effects",
    "FlagEffect",
    "GambleEffect",
    "GameOverReason",
    "GameState",
    "Gender",
    "Planet",
    "Player",
    "ProphecyEffect",
    "ScienceEffect",
    "StateFlag",
    "TaxCollectionEffect",
    "Visitor",
    "VisitorConditions",
    "VisitorOption",
    "WarCampaign",
    "WarDiscountEffect",
    "WarEffect",
    "WarSurrenderEffect",
    # Actions
    "Action",
    "ActionType",
    # Event Bus
    "EventBus",
    "EventType",
    "GameEvent",
    "get_event_bus",
    "reset_event_bus",
]

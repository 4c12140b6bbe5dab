"""
Action schemas for the engine's dispatch function.

An Action is a request from the presentation layer. Dispatching it is the
only way state changes: (state, action) -> new state.
"""

from enum import Enum

from pydantic import BaseModel, Field, StrictBool, StrictInt

from .schema import Gender, VisitorOption


class ActionType(str, Enum):
    INITIALIZE = "initialize"
    REQUEST_VISITOR = "request_visitor"
    CHOOSE_OPTION = "choose_option"
    ACKNOWLEDGE_DAY_SUMMARY = "acknowledge_day_summary"
    RESET = "reset"


class Action(BaseModel):
    """
    A single engine action.

    Payload fields are only read by the action type that needs them:
    `name`/`gender` for INITIALIZE, `option` for CHOOSE_OPTION (an option
    id, an index into the current visitor's options, or the option itself).
    """
    type: ActionType
    name: str = ""
    gender: Gender | None = None
    # A bool stays a bool so it never reads as index 0 or 1
    option: VisitorOption | str | StrictInt | StrictBool | None = Field(
        default=None, union_mode="left_to_right"
    )

    @classmethod
    def initialize(cls, name: str, gender: Gender | str | None = None) -> "Action":
        return cls(type=ActionType.INITIALIZE, name=name, gender=gender)

    @classmethod
    def request_visitor(cls) -> "Action":
        return cls(type=ActionType.REQUEST_VISITOR)

    @classmethod
    def choose(cls, option: VisitorOption | str | int) -> "Action":
        return cls(type=ActionType.CHOOSE_OPTION, option=option)

    @classmethod
    def acknowledge_day_summary(cls) -> "Action":
        return cls(type=ActionType.ACKNOWLEDGE_DAY_SUMMARY)

    @classmethod
    def reset(cls) -> "Action":
        return cls(type=ActionType.RESET)

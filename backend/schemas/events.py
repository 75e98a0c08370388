"""Gameplay events that can advance achievement progress.

Each event kind carries its own payload and is selected by its ``type`` tag.
``criteria_type`` is the ``unlock_criteria.type`` an event is matched against.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter, field_validator


BUILTIN_EVENT_TYPES = (
    "loop_entries",
    "loop_wins",
    "referrals",
    "total_spent",
    "early_user",
)


class _Event(BaseModel):
    @property
    def criteria_type(self) -> str:
        return self.type


class LoopEntriesEvent(_Event):
    """The user bought a ticket into a loop."""

    type: Literal["loop_entries"] = "loop_entries"
    wallet_address: str = Field(min_length=1, max_length=64)


class LoopWinsEvent(_Event):
    """A loop was settled in favour of the user's wallet."""

    type: Literal["loop_wins"] = "loop_wins"
    wallet_address: str = Field(min_length=1, max_length=64)


class ReferralsEvent(_Event):
    type: Literal["referrals"] = "referrals"


class TotalSpentEvent(_Event):
    type: Literal["total_spent"] = "total_spent"


class EarlyUserEvent(_Event):
    type: Literal["early_user"] = "early_user"


class CustomEvent(_Event):
    """Ad-hoc metric reported directly by the caller."""

    type: Literal["custom"] = "custom"
    name: str = Field(min_length=1, max_length=64)
    value: int = Field(default=0, ge=0)

    @field_validator("name")
    @classmethod
    def name_not_builtin(cls, v: str) -> str:
        # Built-in metrics are always recomputed from storage.
        if v in BUILTIN_EVENT_TYPES or v == "custom":
            raise ValueError(f"'{v}' is a reserved event type")
        return v

    @property
    def criteria_type(self) -> str:
        return self.name


AchievementEvent = Annotated[
    Union[
        LoopEntriesEvent,
        LoopWinsEvent,
        ReferralsEvent,
        TotalSpentEvent,
        EarlyUserEvent,
        CustomEvent,
    ],
    Field(discriminator="type"),
]

event_adapter = TypeAdapter(AchievementEvent)


def parse_event(data: dict):
    """Validate a raw payload into the matching event model."""
    return event_adapter.validate_python(data)

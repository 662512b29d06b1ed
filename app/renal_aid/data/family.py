"""Conversation starters for talking about treatment with the people around you."""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum


class PromptCategory(str, Enum):
    GENERAL = "general"
    FEELINGS = "feelings"
    PRACTICAL = "practical"
    SUPPORT = "support"


@dataclass(frozen=True)
class DiscussionPrompt:
    id: str
    text_key: str
    category: PromptCategory


@dataclass(frozen=True)
class FamilyRole:
    id: str
    prompts: list[DiscussionPrompt] = field(default_factory=list)

    @property
    def label_key(self) -> str:
        return f"decision.family.roles.{self.id}"

    @property
    def description_key(self) -> str:
        return f"decision.family.roles.{self.id}Desc"


def _role(role_id: str, prompts: list[tuple[str, PromptCategory]]) -> FamilyRole:
    return FamilyRole(
        role_id,
        [
            DiscussionPrompt(
                f"{role_id}-{i}", f"decision.family.prompts.{role_id}.{key}", category
            )
            for i, (key, category) in enumerate(prompts, start=1)
        ],
    )


_G, _F, _P, _S = (
    PromptCategory.GENERAL,
    PromptCategory.FEELINGS,
    PromptCategory.PRACTICAL,
    PromptCategory.SUPPORT,
)

FAMILY_ROLES: list[FamilyRole] = [
    _role(
        "partner",
        [("daily", _P), ("support", _S), ("feelings", _F), ("future", _G), ("together", _S)],
    ),
    _role(
        "children",
        [("explain", _G), ("feelings", _F), ("routine", _P), ("questions", _S), ("help", _S)],
    ),
    _role(
        "parents",
        [("update", _G), ("concerns", _F), ("involvement", _S), ("donor", _P)],
    ),
    _role(
        "friends",
        [("share", _G), ("support", _S), ("social", _P), ("listen", _F)],
    ),
    _role(
        "employer",
        [("inform", _G), ("adjustments", _P), ("appointments", _P), ("rights", _S)],
    ),
]


def get_role(role_id: str) -> FamilyRole | None:
    return next((r for r in FAMILY_ROLES if r.id == role_id), None)

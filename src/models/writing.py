"""Writing-assistant request models.

The assistant performs one of three actions on a passage of text.  Each
action reads its own option: ``polish`` uses ``style``, ``continue`` uses
``target_words`` and ``suggestion`` uses ``aspect``.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

DEFAULT_TARGET_WORDS = 500


class WritingAction(str, Enum):  # noqa: UP042
    POLISH = "polish"
    CONTINUE = "continue"
    SUGGESTION = "suggestion"


class PolishStyle(str, Enum):  # noqa: UP042
    VIVID = "vivid"
    CONCISE = "concise"
    LITERARY = "literary"
    DRAMATIC = "dramatic"


class SuggestionAspect(str, Enum):  # noqa: UP042
    PLOT = "plot"
    CHARACTER = "character"
    DIALOGUE = "dialogue"
    DESCRIPTION = "description"
    CONFLICT = "conflict"


class WritingAssistantRequest(BaseModel):
    """Body of ``POST /api/v1/writing/assist``.

    Options that do not belong to ``action`` are dropped so the wire body
    carries only the fields the server reads for that action.
    """

    action: WritingAction
    content: str = Field(min_length=1)
    project_id: str | None = None
    style: PolishStyle | None = None
    target_words: int | None = Field(default=None, ge=1)
    aspect: SuggestionAspect | None = None
    stream: bool = False

    @model_validator(mode="after")
    def _apply_action_defaults(self) -> "WritingAssistantRequest":
        if self.action is WritingAction.POLISH:
            self.style = self.style or PolishStyle.VIVID
            self.target_words = None
            self.aspect = None
        elif self.action is WritingAction.CONTINUE:
            self.target_words = self.target_words or DEFAULT_TARGET_WORDS
            self.style = None
            self.aspect = None
        else:
            self.aspect = self.aspect or SuggestionAspect.PLOT
            self.style = None
            self.target_words = None
        return self


class WritingResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    result: str = ""

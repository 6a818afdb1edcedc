"""Content moderation: checking text against usage policies."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .api import Transport


class ModerationModel(str, Enum):
    """Known moderation models; ``TEXT_001`` is deprecated and rejected."""

    OMNI_LATEST = "omni-moderation-latest"
    OMNI_20240926 = "omni-moderation-2024-09-26"
    TEXT_STABLE = "text-moderation-stable"
    TEXT_LATEST = "text-moderation-latest"
    TEXT_001 = "text-moderation-001"


_VALID_MODELS = frozenset(
    m.value
    for m in (
        ModerationModel.OMNI_LATEST,
        ModerationModel.OMNI_20240926,
        ModerationModel.TEXT_STABLE,
        ModerationModel.TEXT_LATEST,
    )
)

_CATEGORY_KEYS = (
    ("hate", "hate"),
    ("hate_threatening", "hate/threatening"),
    ("harassment", "harassment"),
    ("harassment_threatening", "harassment/threatening"),
    ("self_harm", "self-harm"),
    ("self_harm_intent", "self-harm/intent"),
    ("self_harm_instructions", "self-harm/instructions"),
    ("sexual", "sexual"),
    ("sexual_minors", "sexual/minors"),
    ("violence", "violence"),
    ("violence_graphic", "violence/graphic"),
)


class InvalidModerationModelError(ValueError):
    """The requested model cannot be used for moderation."""

    def __init__(self) -> None:
        super().__init__(
            "this model is not supported with moderation, "
            "please use text-moderation-stable or text-moderation-latest instead"
        )


@dataclass
class ModerationRequest:
    """Parameters of a moderation call; an empty model uses the server default."""

    input: str = ""
    model: ModerationModel | str = ""

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.input:
            out["input"] = self.input
        model = self.model.value if isinstance(self.model, Enum) else self.model
        if model:
            out["model"] = model
        return out


@dataclass
class ResultCategories:
    """Which policy categories were flagged."""

    hate: bool = False
    hate_threatening: bool = False
    harassment: bool = False
    harassment_threatening: bool = False
    self_harm: bool = False
    self_harm_intent: bool = False
    self_harm_instructions: bool = False
    sexual: bool = False
    sexual_minors: bool = False
    violence: bool = False
    violence_graphic: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> ResultCategories:
        data = data or {}
        return cls(**{name: bool(data.get(key)) for name, key in _CATEGORY_KEYS})

    def to_dict(self) -> dict[str, bool]:
        return {key: getattr(self, name) for name, key in _CATEGORY_KEYS}


@dataclass
class ResultCategoryScores:
    """The score of each policy category."""

    hate: float = 0.0
    hate_threatening: float = 0.0
    harassment: float = 0.0
    harassment_threatening: float = 0.0
    self_harm: float = 0.0
    self_harm_intent: float = 0.0
    self_harm_instructions: float = 0.0
    sexual: float = 0.0
    sexual_minors: float = 0.0
    violence: float = 0.0
    violence_graphic: float = 0.0

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> ResultCategoryScores:
        data = data or {}
        return cls(**{name: float(data.get(key) or 0.0) for name, key in _CATEGORY_KEYS})

    def to_dict(self) -> dict[str, float]:
        return {key: getattr(self, name) for name, key in _CATEGORY_KEYS}


@dataclass
class Result:
    """The moderation verdict for one input."""

    categories: ResultCategories = field(default_factory=ResultCategories)
    category_scores: ResultCategoryScores = field(default_factory=ResultCategoryScores)
    flagged: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Result:
        data = data or {}
        return cls(
            categories=ResultCategories.from_dict(data.get("categories")),
            category_scores=ResultCategoryScores.from_dict(data.get("category_scores")),
            flagged=bool(data.get("flagged")),
        )


@dataclass
class ModerationResponse:
    """The reply of a moderation call."""

    id: str = ""
    model: str = ""
    results: list[Result] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> ModerationResponse:
        data = data or {}
        return cls(
            id=str(data.get("id") or ""),
            model=str(data.get("model") or ""),
            results=[Result.from_dict(r) for r in data.get("results") or []],
        )


class ModerationsAPI:
    """The moderation endpoint."""

    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    def create(self, request: ModerationRequest) -> ModerationResponse:
        """Classify the input; raise ``InvalidModerationModelError`` for an unsupported model."""
        model = request.model.value if isinstance(request.model, Enum) else request.model
        if model and model not in _VALID_MODELS:
            raise InvalidModerationModelError()
        return ModerationResponse.from_dict(
            self._transport.request("POST", "/moderations", request, beta=False)
        )
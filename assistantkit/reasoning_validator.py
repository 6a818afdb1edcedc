"""Parameter checks for chat requests aimed at reasoning models."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

_REASONING_PREFIXES = ("o1", "o3", "o4", "gpt-5")


class ReasoningModelError(ValueError):
    """A request parameter is not supported by reasoning models."""


class MaxTokensDeprecatedError(ReasoningModelError):
    """``max_tokens`` was set where ``max_completion_tokens`` is required."""

    def __init__(self) -> None:
        super().__init__("this model is not supported MaxTokens, please use MaxCompletionTokens")


class LogprobsUnsupportedError(ReasoningModelError):
    """Log probabilities were requested from a reasoning model."""

    def __init__(self) -> None:
        super().__init__("this model has beta-limitations, logprobs not supported")


class FixedParameterError(ReasoningModelError):
    """A sampling parameter differs from its fixed value."""

    def __init__(self) -> None:
        super().__init__(
            "this model has beta-limitations, temperature, top_p and n are fixed at 1, "
            "while presence_penalty and frequency_penalty are fixed at 0"
        )


def _field(request: Any, name: str, default: Any = 0) -> Any:
    if isinstance(request, Mapping):
        value = request.get(name, default)
    else:
        value = getattr(request, name, default)
    return default if value is None else value


class ReasoningValidator:
    """Checks chat requests against the limitations of reasoning models."""

    def validate(self, request: Any) -> None:
        """Raise a ``ReasoningModelError`` if the request breaks a reasoning-model rule.

        The request may be a mapping or any object with the chat request
        attributes; requests for other models are accepted as they are.
        """
        model = str(_field(request, "model", ""))
        if not model.startswith(_REASONING_PREFIXES):
            return None

        if _field(request, "max_tokens") > 0:
            raise MaxTokensDeprecatedError()
        if _field(request, "logprobs", False):
            raise LogprobsUnsupportedError()
        for name in ("temperature", "top_p", "n"):
            value = _field(request, name)
            if value > 0 and value != 1:
                raise FixedParameterError()
        for name in ("presence_penalty", "frequency_penalty"):
            if _field(request, name) > 0:
                raise FixedParameterError()
        return None
from dataclasses import dataclass

import pytest

from assistantkit.reasoning_validator import (
    FixedParameterError,
    LogprobsUnsupportedError,
    MaxTokensDeprecatedError,
    ReasoningModelError,
    ReasoningValidator,
)


@dataclass
class _Request:
    model: str = ""
    max_tokens: int = 0
    logprobs: bool = False
    temperature: float = 0
    top_p: float = 0
    n: int = 0
    presence_penalty: float = 0
    frequency_penalty: float = 0


def test_other_models_are_not_checked():
    request = _Request(model="gpt-4o", max_tokens=100, logprobs=True, temperature=0.3)
    assert ReasoningValidator().validate(request) is None


@pytest.mark.parametrize("model", ["o1", "o1-mini", "o3", "o3-mini", "o4-mini", "gpt-5", "gpt-5-nano"])
def test_reasoning_models_reject_max_tokens(model):
    with pytest.raises(MaxTokensDeprecatedError) as info:
        ReasoningValidator().validate(_Request(model=model, max_tokens=10))
    assert str(info.value) == "this model is not supported MaxTokens, please use MaxCompletionTokens"


def test_logprobs_rejected():
    with pytest.raises(LogprobsUnsupportedError) as info:
        ReasoningValidator().validate(_Request(model="o1", logprobs=True))
    assert str(info.value) == "this model has beta-limitations, logprobs not supported"


@pytest.mark.parametrize(
    "overrides",
    [
        {"temperature": 0.5},
        {"top_p": 0.9},
        {"n": 2},
        {"presence_penalty": 0.1},
        {"frequency_penalty": 0.1},
    ],
)
def test_fixed_parameters_rejected(overrides):
    with pytest.raises(FixedParameterError) as info:
        ReasoningValidator().validate(_Request(model="o3", **overrides))
    assert "fixed at 1" in str(info.value)
    assert isinstance(info.value, ReasoningModelError)


@pytest.mark.parametrize(
    "overrides",
    [{}, {"temperature": 1}, {"top_p": 1}, {"n": 1}, {"presence_penalty": 0}],
)
def test_fixed_parameters_at_their_values_pass(overrides):
    assert ReasoningValidator().validate(_Request(model="o4-mini", **overrides)) is None


def test_mapping_requests_are_supported():
    validator = ReasoningValidator()
    assert validator.validate({"model": "o1", "temperature": 1}) is None
    with pytest.raises(MaxTokensDeprecatedError):
        validator.validate({"model": "o1", "max_tokens": 5})


def test_max_tokens_checked_before_other_limits():
    with pytest.raises(MaxTokensDeprecatedError):
        ReasoningValidator().validate(_Request(model="o1", max_tokens=5, logprobs=True, n=3))
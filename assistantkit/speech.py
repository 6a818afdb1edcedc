"""Text-to-speech generation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from .api import RawResponse, Transport


class SpeechModel(str, Enum):
    """Text-to-speech models."""

    TTS_1 = "tts-1"
    TTS_1_HD = "tts-1-hd"
    CANARY = "canary-tts"
    GPT_4O_MINI = "gpt-4o-mini-tts"


class SpeechVoice(str, Enum):
    """Voices available for speech."""

    ALLOY = "alloy"
    ASH = "ash"
    BALLAD = "ballad"
    CORAL = "coral"
    ECHO = "echo"
    FABLE = "fable"
    ONYX = "onyx"
    NOVA = "nova"
    SHIMMER = "shimmer"
    VERSE = "verse"


class SpeechResponseFormat(str, Enum):
    """Audio formats the speech endpoint can produce."""

    MP3 = "mp3"
    OPUS = "opus"
    AAC = "aac"
    FLAC = "flac"
    WAV = "wav"
    PCM = "pcm"


def _value(item: Any) -> Any:
    return item.value if isinstance(item, Enum) else item


@dataclass
class CreateSpeechRequest:
    """Parameters for generating speech; empty optional fields use server defaults."""

    model: SpeechModel | str
    input: str
    voice: SpeechVoice | str
    instructions: str = ""
    response_format: SpeechResponseFormat | str = ""
    speed: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "model": _value(self.model),
            "input": self.input,
            "voice": _value(self.voice),
        }
        if self.instructions:
            out["instructions"] = self.instructions
        if _value(self.response_format):
            out["response_format"] = _value(self.response_format)
        if self.speed:
            out["speed"] = self.speed
        return out


class SpeechAPI:
    """The speech endpoint."""

    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    def create(self, request: CreateSpeechRequest) -> RawResponse:
        """Generate audio and return the undecoded reply body."""
        return self._transport.raw("POST", "/audio/speech", request)
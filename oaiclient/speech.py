"""Text-to-speech: turn text into audio."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class SpeechModel(str, Enum):
    """Models that can speak."""

    TTS_1 = "tts-1"
    TTS_1_HD = "tts-1-hd"
    CANARY_TTS = "canary-tts"
    GPT_4O_MINI_TTS = "gpt-4o-mini-tts"


class SpeechVoice(str, Enum):
    """Voices to speak with."""

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
    """Audio formats the endpoint can return."""

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
    """What to say and how.

    ``instructions`` does not work with tts-1 or tts-1-hd; the server
    defaults the format to mp3 and the speed to 1.0.
    """

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
        if self.response_format:
            out["response_format"] = _value(self.response_format)
        if self.speed:
            out["speed"] = self.speed
        return out


class Speech:
    """Speech calls made through a transport."""

    def __init__(self, transport: Any) -> None:
        self._transport = transport

    def create(self, request: CreateSpeechRequest) -> bytes:
        """Return the audio for the request, as sent by the server."""
        return self._transport.request_raw("POST", "/audio/speech", request.to_dict())
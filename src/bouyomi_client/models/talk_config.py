"""Voice configuration sent with every talk command."""

from __future__ import annotations

from dataclasses import asdict, dataclass, replace

# -1 tells the application to keep its current setting
USE_APP_SETTING = -1


@dataclass(frozen=True)
class TalkConfig:
    """How the application should voice a message.

    Values are passed through untouched; the application clamps or
    rejects anything outside its ranges.

    Attributes:
        code: Voice database selector (uint8), 0 for the default.
        voice: 0 for the app default, 1-8 AquesTalk, 10001+ SAPI5.
        volume: 0-100, or -1.
        speed: 50-300, or -1.
        tone: 50-200, or -1.
    """

    code: int = 0
    voice: int = 0
    volume: int = 80
    speed: int = 100
    tone: int = 100

    @classmethod
    def application_defaults(cls) -> TalkConfig:
        """A config that defers every setting to the application."""
        return cls(
            code=0,
            voice=0,
            volume=USE_APP_SETTING,
            speed=USE_APP_SETTING,
            tone=USE_APP_SETTING,
        )

    def with_code(self, code: int) -> TalkConfig:
        return replace(self, code=code)

    def with_voice(self, voice: int) -> TalkConfig:
        return replace(self, voice=voice)

    def with_volume(self, volume: int) -> TalkConfig:
        return replace(self, volume=volume)

    def with_speed(self, speed: int) -> TalkConfig:
        return replace(self, speed=speed)

    def with_tone(self, tone: int) -> TalkConfig:
        return replace(self, tone=tone)

    def to_dict(self) -> dict[str, int]:
        return asdict(self)

from __future__ import annotations

import pytest

from astro_relay.config.upstream import VALID_VOICES
from astro_relay.upstream.voices import resolve_voice, is_valid_voice


@pytest.mark.parametrize("voice", sorted(VALID_VOICES))
def test_allowed_voices_pass_through(voice: str) -> None:
    assert is_valid_voice(voice)
    assert resolve_voice(voice) == voice


@pytest.mark.parametrize("voice", [None, "", "robot", "VERSE", 7, ["alloy"]])
def test_unknown_voice_falls_back_to_default(voice: object) -> None:
    assert resolve_voice(voice) == "verse"
    assert resolve_voice(voice, "coral") == "coral"


def test_invalid_default_is_replaced_by_fallback() -> None:
    assert resolve_voice("nope", "also-nope") == "verse"

"""Synthesised sound cues played through the pygame mixer.

Each cue is a short sine tone whose gain decays exponentially from 0.3 to
0.01, generated with numpy the first time it is needed.
"""

from typing import Dict, Optional

import numpy as np
import pygame

from .events import Cue

CUE_FREQUENCIES: Dict[Cue, float] = {
    Cue.JUMP: 400.0,
    Cue.DASH: 600.0,
    Cue.COLLECTIBLE: 800.0,
    Cue.LEVEL_COMPLETE: 1000.0,
    Cue.DAMAGE: 200.0,
}

START_GAIN = 0.3
END_GAIN = 0.01


def synthesize_tone(
    frequency: float,
    duration: float,
    sample_rate: int = 22050,
    start_gain: float = START_GAIN,
    end_gain: float = END_GAIN,
) -> np.ndarray:
    """Return a mono int16 sine tone with an exponential gain envelope."""
    n = max(int(sample_rate * duration), 1)
    t = np.arange(n) / sample_rate
    envelope = start_gain * (end_gain / start_gain) ** (t / duration)
    wave = np.sin(2 * np.pi * frequency * t) * envelope
    return (wave * np.iinfo(np.int16).max).astype(np.int16)


class ToneAudio:
    """AudioSink backed by pygame.mixer.

    If the mixer cannot start (no audio device), the sink prints a notice
    once and turns itself off.
    """

    def __init__(self, enabled: bool = True, sample_rate: int = 22050):
        self.enabled = enabled
        self.sample_rate = sample_rate
        self._sounds: Dict[Cue, pygame.mixer.Sound] = {}
        self._channels: Optional[int] = None

    def toggle(self) -> bool:
        """Flip sound on/off and return the new state."""
        self.enabled = not self.enabled
        return self.enabled

    def _ensure_mixer(self) -> bool:
        if self._channels is not None:
            return True
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init(frequency=self.sample_rate, size=-16, channels=1)
        except pygame.error:
            print("Audio playback not available")
            self.enabled = False
            return False
        frequency, _size, channels = pygame.mixer.get_init()
        self.sample_rate = frequency
        self._channels = channels
        return True

    def _sound_for(self, cue: Cue) -> pygame.mixer.Sound:
        sound = self._sounds.get(cue)
        if sound is None:
            samples = synthesize_tone(CUE_FREQUENCIES[cue], cue.duration, self.sample_rate)
            if self._channels > 1:
                samples = np.repeat(samples[:, np.newaxis], self._channels, axis=1)
            sound = pygame.sndarray.make_sound(np.ascontiguousarray(samples))
            self._sounds[cue] = sound
        return sound

    def play(self, cue: Cue) -> None:
        if not self.enabled or not self._ensure_mixer():
            return
        self._sound_for(cue).play()

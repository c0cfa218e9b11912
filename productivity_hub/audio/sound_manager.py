"""
Sound Manager — short cues for the pomodoro timer.

Uses pygame.mixer for lightweight audio. Cues are synthesized from sine
waves on first run and cached as WAV files.
"""

from __future__ import annotations

import logging
import math
import struct
import wave
from io import BytesIO
from pathlib import Path
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)

SOUNDS_DIR = Path(__file__).resolve().parent.parent / "assets" / "sounds"
SAMPLE_RATE = 22050

WORK_DONE = "work_done"
BREAK_DONE = "break_done"
ADDED = "added"

# Whether pygame mixer is available
_mixer_available = False
try:
    import pygame.mixer
    _mixer_available = True
except ImportError:
    logger.warning("pygame not installed; sounds will be disabled.")


class SoundManager:
    """Plays named cues with volume control and an on/off toggle."""

    def __init__(self, enabled: bool = True, volume: float = 0.5,
                 sounds_dir: Optional[Path] = None) -> None:
        self.enabled = enabled
        self.volume = max(0.0, min(volume, 1.0))
        self.sounds_dir = sounds_dir or SOUNDS_DIR
        self._initialized = False
        self._sounds: Dict[str, object] = {}

        if _mixer_available and enabled:
            self._init_mixer()

    def _init_mixer(self) -> None:
        try:
            pygame.mixer.init(frequency=SAMPLE_RATE, size=-16, channels=1, buffer=512)
        except pygame.error as e:
            logger.warning("Could not init audio: %s", e)
            return
        self._initialized = True
        self._load_sounds()
        logger.info("Sound manager initialized.")

    def _load_sounds(self) -> None:
        self.sounds_dir.mkdir(parents=True, exist_ok=True)
        for name, data in generate_cues().items():
            path = self.sounds_dir / f"{name}.wav"
            if not path.exists():
                path.write_bytes(data)
            try:
                self._sounds[name] = pygame.mixer.Sound(str(path))
                self._sounds[name].set_volume(self.volume)
            except pygame.error as e:
                logger.warning("Could not load sound %s: %s", name, e)

    def play(self, sound_name: str) -> None:
        if not self.enabled or not self._initialized:
            return
        sound = self._sounds.get(sound_name)
        if sound:
            sound.set_volume(self.volume)
            sound.play()

    def set_volume(self, volume: float) -> None:
        self.volume = max(0.0, min(volume, 1.0))
        for s in self._sounds.values():
            s.set_volume(self.volume)

    def set_enabled(self, enabled: bool) -> None:
        self.enabled = enabled
        if enabled and not self._initialized and _mixer_available:
            self._init_mixer()


# ── Cue synthesis (simple waveforms) ────────────────────────────────────────

def make_wav(samples: List[float], sample_rate: int = SAMPLE_RATE) -> bytes:
    """Pack raw samples into a 16-bit mono WAV byte string."""
    buf = BytesIO()
    with wave.open(buf, "wb") as w:
        w.setnchannels(1)
        w.setsampwidth(2)
        w.setframerate(sample_rate)
        w.writeframes(b"".join(struct.pack("<h", int(s)) for s in samples))
    return buf.getvalue()


def _notes(freqs: List[int], note_s: float, peak: float, gap_s: float = 0.0) -> List[float]:
    sr = SAMPLE_RATE
    samples: List[float] = []
    for freq in freqs:
        dur = int(sr * note_s)
        for t in range(dur):
            amp = peak * (1 - t / dur)  # linear fade
            samples.append(amp * math.sin(2 * math.pi * freq * t / sr))
        samples.extend([0.0] * int(sr * gap_s))
    return samples


def generate_cues() -> Dict[str, bytes]:
    return {
        # C5 E5 G5 C6: work phase finished
        WORK_DONE: make_wav(_notes([523, 659, 784, 1047], 0.12, 7000)),
        # G5 E5 C5: back to work
        BREAK_DONE: make_wav(_notes([784, 659, 523], 0.1, 7000, gap_s=0.02)),
        ADDED: make_wav(_notes([880], 0.06, 5000)),
    }

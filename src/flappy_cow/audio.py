"""Fire-and-forget sound effects and background music via pygame.mixer.

Playback never blocks or raises into the simulation: a missing mixer,
missing file or rejected playback is logged and ignored.
"""

import logging
from pathlib import Path
from typing import Dict, Optional

import pygame

logger = logging.getLogger(__name__)


# Sound names used by the simulation, mapped to asset file names
SOUND_FILES = {
    "jump": "jump.mp3",
    "point": "point.wav",
    "crash": "crash.wav",
}
MUSIC_FILE = "background.mp3"


class SoundBoard:
    """Plays named sounds when enabled.

    The mixer is initialized lazily on first use; if that fails (no audio
    device, headless CI) the board stays silent for the rest of the process.
    """

    def __init__(self, asset_dir: Optional[str] = None, enabled: bool = True):
        self.asset_dir = Path(asset_dir) if asset_dir else Path("assets")
        self.enabled = enabled
        self._sounds: Dict[str, "pygame.mixer.Sound"] = {}
        self._mixer_ready: Optional[bool] = None  # None = not tried yet
        self.failures = 0

    def _ensure_mixer(self) -> bool:
        if self._mixer_ready is None:
            try:
                if not pygame.mixer.get_init():
                    pygame.mixer.init()
                self._mixer_ready = True
            except pygame.error as exc:
                logger.warning("Audio unavailable, continuing silently: %s", exc)
                self._mixer_ready = False
        return self._mixer_ready

    def _load(self, name: str) -> "pygame.mixer.Sound":
        if name not in self._sounds:
            self._sounds[name] = pygame.mixer.Sound(str(self.asset_dir / SOUND_FILES[name]))
        return self._sounds[name]

    def play(self, name: str) -> None:
        """Play a one-shot sound; overlapping plays are allowed."""
        if not self.enabled or not self._ensure_mixer():
            return
        try:
            self._load(name).play()
        except (pygame.error, FileNotFoundError, KeyError) as exc:
            self.failures += 1
            logger.error("Error playing %s: %s", name, exc)

    def start_music(self) -> None:
        """Start the looping background track from the beginning."""
        if not self.enabled or not self._ensure_mixer():
            return
        try:
            pygame.mixer.music.load(str(self.asset_dir / MUSIC_FILE))
            pygame.mixer.music.play(-1)
        except (pygame.error, FileNotFoundError) as exc:
            self.failures += 1
            logger.error("Error playing %s: %s", MUSIC_FILE, exc)

    def stop_music(self) -> None:
        """Stop and rewind the background track."""
        if not self._mixer_ready:
            return
        try:
            pygame.mixer.music.stop()
        except pygame.error as exc:
            logger.error("Error stopping music: %s", exc)


class SilentBoard(SoundBoard):
    """Sound board that records requests instead of playing them."""

    def __init__(self, enabled: bool = True):
        super().__init__(enabled=enabled)
        self.played = []

    def play(self, name: str) -> None:
        if self.enabled:
            self.played.append(name)

    def start_music(self) -> None:
        if self.enabled:
            self.played.append("music")

    def stop_music(self) -> None:
        self.played.append("music_stop")

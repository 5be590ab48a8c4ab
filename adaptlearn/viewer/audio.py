"""
Narration - Read lesson scripts aloud for auditory learners.

Narration goes through an injected Narrator so the lesson view does not
depend on any particular speech backend.
"""

import logging
from typing import Optional, Protocol


logger = logging.getLogger(__name__)

NARRATION_UNSUPPORTED_MESSAGE = "Narration is not supported on this device."


class NarrationUnavailable(RuntimeError):
    """Raised by a narrator that cannot speak in this environment."""


class Narrator(Protocol):
    def speak(self, text: str) -> None: ...

    def cancel(self) -> None: ...

    def is_speaking(self) -> bool: ...


class TranscriptNarrator:
    """
    Narrator that shows the script instead of playing audio.

    speak() makes the text available as the transcript until cancel()
    or finished() is called.
    """

    def __init__(self):
        self.transcript: Optional[str] = None
        self._speaking = False

    def speak(self, text: str) -> None:
        self.transcript = text
        self._speaking = True

    def cancel(self) -> None:
        self._speaking = False

    def finished(self) -> None:
        """Playback reached the end of the script."""
        self._speaking = False

    def is_speaking(self) -> bool:
        return self._speaking


def toggle_narration(narrator: Narrator, text: str) -> Optional[str]:
    """
    Stop narration if it is running, otherwise start narrating text.

    Returns:
        An error message for the user, or None on success
    """
    try:
        if narrator.is_speaking():
            narrator.cancel()
            return None
        if not text:
            return None
        narrator.speak(text)
    except NarrationUnavailable as e:
        logger.info(f"Narration unavailable: {e}")
        return NARRATION_UNSUPPORTED_MESSAGE
    return None


def narration_button_label(narrator: Narrator) -> str:
    return "Stop narration" if narrator.is_speaking() else "Play narration"

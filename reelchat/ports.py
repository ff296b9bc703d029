"""
ReelChat — Capability ports

Speech, clipboard and "open a link" live in the user's browser. The
assistant talks to them through these small protocols so it can run
headless: the Null* adapters do nothing, the in-memory ones record what
they were asked to do.
"""

from __future__ import annotations

from collections import deque
from typing import Deque, Iterable, List, Optional, Protocol


class VoiceInput(Protocol):
    async def listen(self) -> Optional[str]:
        """Return one spoken transcript, or None if nothing was heard."""
        ...


class VoiceOutput(Protocol):
    def speak(self, text: str) -> None: ...

    def cancel(self) -> None: ...


class Clipboard(Protocol):
    def write(self, text: str) -> None: ...


class Launcher(Protocol):
    def open(self, url: str) -> None: ...


# ── Null adapters ─────────────────────────────────────────


class NullVoiceInput:
    async def listen(self) -> Optional[str]:
        return None


class NullVoiceOutput:
    def speak(self, text: str) -> None:
        pass

    def cancel(self) -> None:
        pass


class NullClipboard:
    def write(self, text: str) -> None:
        pass


class NullLauncher:
    def open(self, url: str) -> None:
        pass


# ── In-memory adapters ────────────────────────────────────


class ScriptedVoiceInput:
    """Plays back a fixed list of transcripts, then hears nothing."""

    def __init__(self, transcripts: Iterable[str] = ()) -> None:
        self._pending: Deque[str] = deque(transcripts)

    async def listen(self) -> Optional[str]:
        return self._pending.popleft() if self._pending else None


class RecordingVoiceOutput:
    def __init__(self) -> None:
        self.spoken: List[str] = []
        self.speaking = False

    def speak(self, text: str) -> None:
        self.spoken.append(text)
        self.speaking = True

    def cancel(self) -> None:
        self.speaking = False


class MemoryClipboard:
    def __init__(self) -> None:
        self.text: Optional[str] = None

    def write(self, text: str) -> None:
        self.text = text


class RecordingLauncher:
    def __init__(self) -> None:
        self.opened: List[str] = []

    def open(self, url: str) -> None:
        self.opened.append(url)

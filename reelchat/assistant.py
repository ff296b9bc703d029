"""
ReelChat — Chat Assistant (orchestration)

Design patterns:
  - Facade: submit() is the single entry point for a chat turn
  - Ports & Adapters: speech, clipboard and link opening are injected

Flow for one query:
  user turn → webhook → payload interpreter → assistant turn (+ new list)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, List, Literal, Optional

from reelchat.cards import display_title, search_url
from reelchat.clients.webhook import search_movies
from reelchat.errors import ClientError, EmptyQueryError
from reelchat.interpreter import extract_recommendations
from reelchat.models import ClientFailure, MovieRecord, SessionContext
from reelchat.ports import (
    Clipboard,
    Launcher,
    NullClipboard,
    NullLauncher,
    NullVoiceInput,
    NullVoiceOutput,
    VoiceInput,
    VoiceOutput,
)
from reelchat.sessions import append_turn, replace_recommendations

logger = logging.getLogger(__name__)

ERROR_REPLY = "Sorry, I ran into an error connecting to the server."
NO_RESULTS_REPLY = "I couldn't find any movies matching that. Could you try being more specific?"
FOUND_REPLY = 'I found {count} recommendations for you based on "{query}".'

SearchFn = Callable[[str], Awaitable[Any]]
Outcome = Literal["found", "no_results", "error"]


@dataclass
class ChatReply:
    reply: str
    outcome: Outcome
    recommendations: List[MovieRecord] = field(default_factory=list)
    error: Optional[ClientError] = None


class Assistant:
    """Runs chat turns against a session and the recommendation webhook."""

    def __init__(
        self,
        *,
        search: Optional[SearchFn] = None,
        voice_input: Optional[VoiceInput] = None,
        voice_output: Optional[VoiceOutput] = None,
        clipboard: Optional[Clipboard] = None,
        launcher: Optional[Launcher] = None,
    ) -> None:
        self._search = search
        self.voice_input = voice_input or NullVoiceInput()
        self.voice_output = voice_output or NullVoiceOutput()
        self.clipboard = clipboard or NullClipboard()
        self.launcher = launcher or NullLauncher()

    async def submit(self, session: SessionContext, query: str) -> ChatReply:
        """
        Handle one user query.

        Appends exactly two turns (user, assistant). The current
        recommendation list is replaced only when a non-empty list is found.
        """
        if not query or not query.strip():
            raise EmptyQueryError("query must not be blank")

        append_turn(session, "user", query)
        search = self._search or search_movies

        try:
            data = await search(query)
        except ClientError as exc:
            logger.warning("Search failed for session %s: %s (%s)", session.session_id, exc, exc.kind)
            session.last_error = ClientFailure(**exc.to_dict())
            return self._reply(session, ChatReply(ERROR_REPLY, "error", error=exc))

        session.last_error = None
        found = extract_recommendations(data)
        if not found:
            logger.info("No recommendation list in webhook payload")
            return self._reply(session, ChatReply(NO_RESULTS_REPLY, "no_results"))

        movies = [MovieRecord.from_raw(item) for item in found]
        replace_recommendations(session, movies)
        logger.info("Found %d recommendations for session %s", len(movies), session.session_id)
        text = FOUND_REPLY.format(count=len(movies), query=query)
        return self._reply(session, ChatReply(text, "found", recommendations=movies))

    async def listen(self, session: SessionContext) -> Optional[ChatReply]:
        """Take one spoken transcript and submit it. None if nothing usable was heard."""
        transcript = await self.voice_input.listen()
        if not transcript or not transcript.strip():
            return None
        return await self.submit(session, transcript)

    def copy_title(self, movie: MovieRecord) -> str:
        title = display_title(movie)
        self.clipboard.write(title)
        return title

    def open_search(self, movie: MovieRecord) -> str:
        url = search_url(movie)
        self.launcher.open(url)
        return url

    def _reply(self, session: SessionContext, result: ChatReply) -> ChatReply:
        append_turn(session, "assistant", result.reply)
        if session.speech_enabled:
            self.voice_output.cancel()
            self.voice_output.speak(result.reply)
        return result

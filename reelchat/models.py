"""
ReelChat — Pydantic Models

Shared data models used by the client, the assistant and the API.
"""

from __future__ import annotations

from typing import Any, List, Literal, Optional, Tuple, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


def _scalar_text(value: Any) -> Optional[str]:
    """Coerce a JSON scalar to text; containers and null become None."""
    if value is None or isinstance(value, (list, dict)):
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


# ── Recommendation records ───────────────────────────────


class MovieRecord(BaseModel):
    """
    One recommendation as returned by the webhook.

    Upstream does not enforce a schema, so every field is optional and
    coerced leniently. Unknown keys are kept but never interpreted.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    title: Optional[str] = None
    description: Optional[str] = None
    release_year: Optional[Union[int, str]] = Field(
        default=None,
        validation_alias=AliasChoices("release_year", "releaseYear"),
        serialization_alias="releaseYear",
    )
    genres: List[str] = Field(default_factory=list)
    source: Optional[str] = None
    country: Optional[str] = None

    @field_validator("title", "description", "source", "country", mode="before")
    @classmethod
    def _coerce_text(cls, v: Any) -> Optional[str]:
        return _scalar_text(v)

    @field_validator("release_year", mode="before")
    @classmethod
    def _coerce_year(cls, v: Any) -> Optional[Union[int, str]]:
        if v is None or isinstance(v, (bool, list, dict)):
            return None
        if isinstance(v, float):
            return int(v) if v.is_integer() else str(v)
        if isinstance(v, (int, str)):
            return v
        return str(v)

    @field_validator("genres", mode="before")
    @classmethod
    def _coerce_genres(cls, v: Any) -> List[str]:
        if isinstance(v, str):
            return [v]
        if not isinstance(v, (list, tuple)):
            return []
        return [g for g in (_scalar_text(item) for item in v) if g is not None]

    @classmethod
    def from_raw(cls, raw: Any) -> "MovieRecord":
        """Build a record from any list element; non-objects become empty records."""
        if not isinstance(raw, dict):
            return cls()
        return cls.model_validate(raw)


class MovieCard(BaseModel):
    """Display-ready view of a MovieRecord."""

    title: str
    year: str
    country: str
    description: Optional[str] = None
    genres: List[str] = Field(default_factory=list)
    source: Optional[str] = None
    match_score: int
    gradient: Tuple[str, str]
    search_url: str


# ── Conversation ─────────────────────────────────────────


class ConversationTurn(BaseModel):
    role: Literal["user", "assistant"]
    content: str


class ClientFailure(BaseModel):
    """Diagnostic snapshot of the last webhook failure."""

    kind: str
    status: Optional[int] = None
    detail: str = ""


class SessionContext(BaseModel):
    session_id: str
    turns: List[ConversationTurn] = Field(default_factory=list)
    recommendations: Optional[List[MovieRecord]] = None
    last_error: Optional[ClientFailure] = None
    speech_enabled: bool = False


# ── API Contract ─────────────────────────────────────────


class ChatRequest(BaseModel):
    query: str = Field(..., max_length=1000)
    session_id: Optional[str] = None


class ChatResponse(BaseModel):
    session_id: str
    reply: str
    outcome: Literal["found", "no_results", "error"]
    recommendations: List[MovieCard] = Field(default_factory=list)
    turns: List[ConversationTurn] = Field(default_factory=list)


class SpeechToggle(BaseModel):
    enabled: bool

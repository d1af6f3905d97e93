"""Typed shapes for TVMaze payloads and tool inputs/outputs.

Two schema modes are used:

* ``TVMazeModel`` is closed: declared fields are strictly typed and any
  field TVMaze adds that we do not declare is dropped.
* ``ExtensibleModel`` validates its declared fields the same way but keeps
  undeclared fields in an extension map and writes them back out. Only
  people and characters use it, so new upstream fields survive there.

Attributes are snake_case; wire names (``officialSite``, ``showId``,
``_embedded``) are aliases, used both for parsing and for serialization.
"""

from typing import Annotated, Any, Dict, List, Optional
from urllib.parse import urlparse

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel

from tvmaze_server.sanitize import strip_html


def _check_url(value: str) -> str:
    parsed = urlparse(value)
    if not parsed.scheme or not parsed.netloc:
        raise ValueError("must be an absolute URL")
    return value


Url = Annotated[str, AfterValidator(_check_url)]
SanitizedText = Annotated[Optional[str], AfterValidator(strip_html)]


def _whole_number(value: Any) -> Any:
    # JSON clients may send 5.0 for an integer argument.
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


WholeNumber = Annotated[int, BeforeValidator(_whole_number)]
ToolId = Annotated[WholeNumber, Field(gt=0)]
PreviewLimit = Annotated[WholeNumber, Field(ge=1, le=20)]


class TVMazeModel(BaseModel):
    """Closed schema: strict types, unknown fields ignored."""

    model_config = ConfigDict(
        strict=True,
        extra="ignore",
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_payload(self) -> Dict[str, Any]:
        """JSON-ready dict using wire names, with every field present."""
        return self.model_dump(mode="json", by_alias=True)


class ExtensibleModel(TVMazeModel):
    """Strict schema that preserves undeclared fields."""

    model_config = ConfigDict(extra="allow")

    @property
    def extensions(self) -> Dict[str, Any]:
        return dict(self.model_extra or {})


# ---------------------------------------------------------------------------
# Shared pieces
# ---------------------------------------------------------------------------

class Rating(TVMazeModel):
    average: Optional[float]


class Image(TVMazeModel):
    medium: Optional[Url] = None
    original: Optional[Url] = None


class Country(TVMazeModel):
    name: Optional[str]
    code: Optional[str]
    timezone: Optional[str]


class Channel(TVMazeModel):
    """A broadcast network or a web channel."""

    id: int
    name: str
    country: Optional[Country] = None


# ---------------------------------------------------------------------------
# Catalog entities
# ---------------------------------------------------------------------------

class Show(TVMazeModel):
    id: int
    name: str
    url: Url
    type: Optional[str] = None
    language: Optional[str] = None
    genres: List[str]
    status: Optional[str] = None
    premiered: Optional[str] = None
    official_site: Optional[Url] = None
    rating: Optional[Rating] = None
    summary: SanitizedText = None


class Person(ExtensibleModel):
    id: int
    name: str
    url: Optional[Url] = None
    country: Optional[Country] = None
    birthday: Optional[str] = None
    deathday: Optional[str] = None
    gender: Optional[str] = None
    image: Optional[Image] = None


class Character(ExtensibleModel):
    id: int
    name: str
    url: Optional[Url] = None
    image: Optional[Image] = None


class CastEntry(TVMazeModel):
    person: Person
    character: Optional[Character] = None
    is_self: bool = Field(default=False, alias="self")
    voice: bool = False


class CrewEntry(TVMazeModel):
    type: str
    person: Person


class Season(TVMazeModel):
    id: int
    number: Optional[int]
    name: Optional[str]
    episode_order: Optional[int] = None
    premiere_date: Optional[str] = None
    end_date: Optional[str] = None
    network: Optional[Channel] = None
    web_channel: Optional[Channel] = None
    image: Optional[Image] = None
    summary: SanitizedText = None


class EpisodeEmbedded(TVMazeModel):
    guestcast: Optional[List[CastEntry]] = None


class Episode(TVMazeModel):
    id: int
    name: str
    season: int
    number: Optional[int] = None
    airdate: Optional[str] = None
    airtime: Optional[str] = None
    airstamp: Optional[str] = None
    runtime: Optional[int] = None
    rating: Optional[Rating] = None
    summary: SanitizedText = None
    image: Optional[Image] = None
    embedded: Optional[EpisodeEmbedded] = Field(default=None, alias="_embedded")

    @property
    def guest_cast(self) -> Optional[List[CastEntry]]:
        return self.embedded.guestcast if self.embedded else None


class SearchResult(TVMazeModel):
    score: float
    show: Show


# ---------------------------------------------------------------------------
# Tool inputs
# ---------------------------------------------------------------------------

class SearchInput(TVMazeModel):
    query: str = Field(min_length=1, description="TV show name to search for")
    limit: PreviewLimit = Field(
        default=5, description="Maximum number of shows to return (1-20)"
    )


class ShowDetailsInput(TVMazeModel):
    id: ToolId = Field(
        description="TVMaze show ID, e.g. https://api.tvmaze.com/shows/{id}"
    )


class ShowPeopleInput(TVMazeModel):
    id: ToolId = Field(
        description="TVMaze show ID, e.g. https://api.tvmaze.com/shows/{id}"
    )
    cast_limit: PreviewLimit = Field(
        default=5, description="Number of cast entries to highlight in plaintext output"
    )
    crew_limit: PreviewLimit = Field(
        default=5, description="Number of crew entries to highlight in plaintext output"
    )


class SeasonsInput(TVMazeModel):
    show_id: ToolId = Field(description="TVMaze show ID e.g. /shows/{id}")
    preview_limit: PreviewLimit = Field(
        default=5, description="Number of seasons to highlight in plaintext output"
    )


class EpisodesInput(TVMazeModel):
    season_id: ToolId = Field(description="TVMaze season ID e.g. /seasons/{id}")
    include_guest_cast: bool = Field(
        default=False, description="Embed each episode's guest cast"
    )
    preview_limit: PreviewLimit = Field(
        default=5, description="Number of episodes to highlight in plaintext output"
    )


# ---------------------------------------------------------------------------
# Tool outputs
# ---------------------------------------------------------------------------

class SearchOutput(TVMazeModel):
    query: str
    results: List[SearchResult]


class ShowDetailsOutput(TVMazeModel):
    show: Show


class ShowPeopleOutput(TVMazeModel):
    show_id: int
    cast: List[CastEntry]
    crew: List[CrewEntry]


class SeasonsOutput(TVMazeModel):
    show_id: int
    seasons: List[Season]


class EpisodesOutput(TVMazeModel):
    season_id: int
    include_guest_cast: bool
    episodes: List[Episode]

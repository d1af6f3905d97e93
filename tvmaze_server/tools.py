"""Tool definitions and the fetch -> validate -> render pipeline they share."""

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional, Type

import mcp.types as types
from pydantic import BaseModel, ValidationError

from tvmaze_server import formatting
from tvmaze_server.errors import DecodeError, InvalidInputError
from tvmaze_server.models import (
    EpisodesInput,
    EpisodesOutput,
    SearchInput,
    SearchOutput,
    SeasonsInput,
    SeasonsOutput,
    ShowDetailsInput,
    ShowDetailsOutput,
    ShowPeopleInput,
    ShowPeopleOutput,
)
from tvmaze_server.tvmaze_api import TVMazeAPI

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToolResult:
    text: str
    data: Dict[str, Any]


@dataclass(frozen=True)
class ToolDefinition:
    """Everything that differs between two tools.

    ``fetch`` turns validated arguments into the raw payload for
    ``output_model``; ``render`` turns the validated output (plus the
    arguments, for preview limits) into plaintext.
    """

    name: str
    title: str
    description: str
    input_model: Type[BaseModel]
    output_model: Type[BaseModel]
    fetch: Callable[[TVMazeAPI, Any], Awaitable[Dict[str, Any]]]
    render: Callable[[Any, Any], str]

    def as_tool(self) -> types.Tool:
        return types.Tool(
            name=self.name,
            title=self.title,
            description=self.description,
            inputSchema=self.input_model.model_json_schema(by_alias=True),
            outputSchema=self.output_model.model_json_schema(
                by_alias=True, mode="serialization"
            ),
        )


def _describe(error: ValidationError) -> str:
    problems = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "input"
        problems.append(f"{location}: {item['msg']}")
    return "; ".join(problems)


async def run_tool(definition: ToolDefinition, api: TVMazeAPI,
                   arguments: Optional[Dict[str, Any]]) -> ToolResult:
    """Run one tool invocation end to end.

    Raises InvalidInputError before any request is sent when the arguments
    do not validate, DecodeError when TVMaze's payload does not match the
    output schema, and lets client errors propagate unchanged.
    """
    try:
        params = definition.input_model.model_validate(arguments or {})
    except ValidationError as e:
        raise InvalidInputError(
            f"Invalid arguments for {definition.name}: {_describe(e)}", e
        ) from e

    payload = await definition.fetch(api, params)

    try:
        output = definition.output_model.model_validate(payload)
    except ValidationError as e:
        raise DecodeError(
            f"Unexpected TVMaze response for {definition.name}: {_describe(e)}", e
        ) from e

    return ToolResult(text=definition.render(output, params), data=output.to_payload())


# ---------------------------------------------------------------------------
# Per-tool fetch steps
# ---------------------------------------------------------------------------

async def _fetch_search(api: TVMazeAPI, params: SearchInput) -> Dict[str, Any]:
    results = await api.search_shows(params.query)
    if not isinstance(results, list):
        raise DecodeError("Unexpected TVMaze response for search_tv_shows: expected a list")
    return {"query": params.query, "results": results[:params.limit]}


async def _fetch_show(api: TVMazeAPI, params: ShowDetailsInput) -> Dict[str, Any]:
    return {"show": await api.get_show(params.id)}


async def _fetch_people(api: TVMazeAPI, params: ShowPeopleInput) -> Dict[str, Any]:
    people = await api.get_show_people(params.id)
    return {"showId": params.id, "cast": people["cast"], "crew": people["crew"]}


async def _fetch_seasons(api: TVMazeAPI, params: SeasonsInput) -> Dict[str, Any]:
    return {"showId": params.show_id, "seasons": await api.get_show_seasons(params.show_id)}


async def _fetch_episodes(api: TVMazeAPI, params: EpisodesInput) -> Dict[str, Any]:
    episodes = await api.get_season_episodes(params.season_id, params.include_guest_cast)
    return {
        "seasonId": params.season_id,
        "includeGuestCast": params.include_guest_cast,
        "episodes": episodes,
    }


TOOLS: Dict[str, ToolDefinition] = {
    definition.name: definition
    for definition in (
        ToolDefinition(
            name="search_tv_shows",
            title="Search TV Shows",
            description="Find shows using the TVMaze search API",
            input_model=SearchInput,
            output_model=SearchOutput,
            fetch=_fetch_search,
            render=lambda output, params: formatting.render_search(output),
        ),
        ToolDefinition(
            name="get_tv_show",
            title="Get TV Show by ID",
            description="Retrieve TV show metadata from TVMaze using its numeric ID",
            input_model=ShowDetailsInput,
            output_model=ShowDetailsOutput,
            fetch=_fetch_show,
            render=lambda output, params: formatting.render_show(output),
        ),
        ToolDefinition(
            name="get_tv_show_people",
            title="Get TV Show Cast & Crew",
            description="Fetch cast and crew information for a given TVMaze show ID",
            input_model=ShowPeopleInput,
            output_model=ShowPeopleOutput,
            fetch=_fetch_people,
            render=lambda output, params: formatting.render_people(
                output, params.cast_limit, params.crew_limit
            ),
        ),
        ToolDefinition(
            name="get_tv_show_seasons",
            title="Get TV Show Seasons",
            description="List all seasons for a TVMaze show ID",
            input_model=SeasonsInput,
            output_model=SeasonsOutput,
            fetch=_fetch_seasons,
            render=lambda output, params: formatting.render_seasons(
                output, params.preview_limit
            ),
        ),
        ToolDefinition(
            name="get_season_episodes",
            title="Get Season Episodes",
            description=(
                "List episodes for a TVMaze season ID, optionally including "
                "guest cast information"
            ),
            input_model=EpisodesInput,
            output_model=EpisodesOutput,
            fetch=_fetch_episodes,
            render=lambda output, params: formatting.render_episodes(
                output, params.preview_limit
            ),
        ),
    )
}

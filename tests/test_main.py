import pytest
import requests

from tvmaze_server import main
from tvmaze_server.errors import InvalidInputError, UpstreamTimeoutError
from tvmaze_server.tvmaze_api import TVMazeAPI

from .mocks import BASE_URL, show_payload


@pytest.fixture
def server_api(monkeypatch, tvmaze):
    api = TVMazeAPI(BASE_URL, session_factory=tvmaze.session)
    monkeypatch.setattr(main, "tvmaze_api", api)
    return api


@pytest.mark.asyncio
async def test_list_tools_exposes_five_tools():
    tools = await main.handle_list_tools()

    assert [tool.name for tool in tools] == [
        "search_tv_shows",
        "get_tv_show",
        "get_tv_show_people",
        "get_tv_show_seasons",
        "get_season_episodes",
    ]
    assert all(tool.outputSchema for tool in tools)


@pytest.mark.asyncio
async def test_call_tool_returns_text_and_structured_content(server_api, tvmaze):
    tvmaze.add("/shows/1", show_payload())

    content, structured = await main.handle_call_tool("get_tv_show", {"id": 1})

    assert content[0].type == "text"
    assert content[0].text.startswith("Under the Dome (ID 1)")
    assert structured["show"]["id"] == 1


@pytest.mark.asyncio
async def test_call_tool_unknown_name(server_api):
    with pytest.raises(ValueError, match="Unknown tool: get_movie"):
        await main.handle_call_tool("get_movie", {})


@pytest.mark.asyncio
async def test_call_tool_raises_classified_errors(server_api, tvmaze):
    tvmaze.fail("/shows/1", requests.exceptions.ReadTimeout("read timed out"))

    with pytest.raises(UpstreamTimeoutError):
        await main.handle_call_tool("get_tv_show", {"id": 1})

    with pytest.raises(InvalidInputError):
        await main.handle_call_tool("get_tv_show", {"id": -3})


def test_instructions_list_endpoints():
    text = main.server_instructions("https://api.tvmaze.com/")

    assert "Show endpoint: https://api.tvmaze.com/shows/{id}" in text
    assert "Episodes endpoint: https://api.tvmaze.com/seasons/{id}/episodes[?embed=guestcast]" in text


def test_get_tvmaze_api_is_built_from_settings(monkeypatch):
    monkeypatch.setattr(main, "tvmaze_api", None)

    api = main.get_tvmaze_api()

    assert api is main.get_tvmaze_api()
    assert api.timeout == main.get_settings().request_timeout

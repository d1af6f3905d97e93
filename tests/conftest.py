import pytest

from tvmaze_server.tvmaze_api import TVMazeAPI

from .mocks import BASE_URL, FakeTVMaze


@pytest.fixture
def tvmaze():
    """Fake upstream; every request and session it hands out is recorded."""
    return FakeTVMaze()


@pytest.fixture
def api(tvmaze):
    return TVMazeAPI(BASE_URL, timeout=10.0, session_factory=tvmaze.session)

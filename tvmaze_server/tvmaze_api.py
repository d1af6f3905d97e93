import asyncio
import logging
from typing import Any, Callable, Dict, List, Optional

import requests

from tvmaze_server.errors import (
    DecodeError,
    NotFoundError,
    UpstreamError,
    UpstreamTimeoutError,
)

logger = logging.getLogger(__name__)

SHOW = "TV show"
SEASON = "Season"


def _is_transport_failure(error: BaseException) -> bool:
    # No HTTP status means TVMaze never answered.
    if isinstance(error, UpstreamTimeoutError):
        return True
    return isinstance(error, UpstreamError) and error.status_code is None


class TVMazeAPI:
    """Thin client for the public TVMaze REST API.

    Every request runs in its own ``requests.Session`` which is closed as soon
    as the call settles, so nothing outlives a single tool invocation.
    Blocking I/O is pushed to worker threads; the async methods only suspend
    while a request is in flight.
    """

    def __init__(self, base_url: str = "https://api.tvmaze.com", timeout: float = 10.0,
                 session_factory: Callable[[], requests.Session] = requests.Session):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session_factory = session_factory

    def _make_request(self, endpoint: str, params: Dict = None, resource: str = SHOW,
                      identifier: Optional[int] = None, label: str = "TVMaze") -> Any:
        """GET an endpoint and return its decoded JSON body.

        ``resource`` and ``identifier`` name what a 404 means for this
        endpoint; ``label`` prefixes the message for other bad statuses.
        """
        url = f"{self.base_url}{endpoint}"
        logger.debug("GET %s params=%s", url, params)

        with self.session_factory() as session:
            try:
                response = session.get(
                    url,
                    params=params,
                    headers={"Accept-Encoding": "gzip, deflate"},
                    timeout=self.timeout,
                )
            except requests.exceptions.Timeout as e:
                raise UpstreamTimeoutError("TVMaze request timed out", e) from e
            except requests.exceptions.RequestException as e:
                raise UpstreamError(f"TVMaze request failed: {e}", original_exception=e) from e

            if response.status_code == 404 and identifier is not None:
                raise NotFoundError(resource, identifier)
            if not response.ok:
                raise UpstreamError(
                    f"{label} responded with {response.status_code}",
                    status_code=response.status_code,
                )

            try:
                return response.json()
            except requests.exceptions.JSONDecodeError as e:
                raise DecodeError(f"{label} returned a body that is not valid JSON", e) from e

    async def _get(self, endpoint: str, **kwargs) -> Any:
        """Run one request in a worker thread under an overall deadline.

        The ``requests`` timeout only bounds each connect or read step, so a
        body trickling in slowly is cut off here instead. The abandoned
        thread still closes its own session when it finishes.
        """
        try:
            return await asyncio.wait_for(
                asyncio.to_thread(self._make_request, endpoint, **kwargs),
                self.timeout,
            )
        except asyncio.TimeoutError as e:
            logger.debug("GET %s exceeded %ss", endpoint, self.timeout)
            raise UpstreamTimeoutError("TVMaze request timed out", e) from e

    async def search_shows(self, query: str) -> List[Dict]:
        """Search shows by name; returns TVMaze's ``[{score, show}]`` list."""
        return await self._get("/search/shows", params={"q": query})

    async def get_show(self, show_id: int) -> Dict:
        return await self._get(f"/shows/{show_id}", identifier=show_id)

    async def get_show_cast(self, show_id: int) -> List[Dict]:
        return await self._get(
            f"/shows/{show_id}/cast", identifier=show_id, label="TVMaze cast endpoint"
        )

    async def get_show_crew(self, show_id: int) -> List[Dict]:
        return await self._get(
            f"/shows/{show_id}/crew", identifier=show_id, label="TVMaze crew endpoint"
        )

    async def get_show_people(self, show_id: int) -> Dict[str, List[Dict]]:
        """Fetch cast and crew concurrently.

        Both halves must succeed. A 404 or a transport failure (timeout,
        unreachable host) is raised as soon as it arrives. Any other failure
        waits for the other half, so a 404 there still wins; between two such
        failures the cast one is reported.
        """
        tasks = {
            "cast": asyncio.ensure_future(self.get_show_cast(show_id)),
            "crew": asyncio.ensure_future(self.get_show_crew(show_id)),
        }
        deferred: Dict[str, BaseException] = {}
        pending = set(tasks.values())
        try:
            while pending:
                done, pending = await asyncio.wait(pending, return_when=asyncio.FIRST_COMPLETED)
                for name, task in tasks.items():
                    if task not in done or task.exception() is None:
                        continue
                    error = task.exception()
                    if isinstance(error, NotFoundError) or _is_transport_failure(error):
                        raise error
                    deferred[name] = error
        finally:
            for task in pending:
                task.cancel()

        for name in ("cast", "crew"):
            if name in deferred:
                raise deferred[name]

        return {"cast": tasks["cast"].result(), "crew": tasks["crew"].result()}

    async def get_show_seasons(self, show_id: int) -> List[Dict]:
        return await self._get(
            f"/shows/{show_id}/seasons", identifier=show_id, label="TVMaze seasons endpoint"
        )

    async def get_season_episodes(self, season_id: int, include_guest_cast: bool = False) -> List[Dict]:
        params = {"embed": "guestcast"} if include_guest_cast else None
        return await self._get(
            f"/seasons/{season_id}/episodes",
            params=params,
            resource=SEASON,
            identifier=season_id,
            label="TVMaze episodes endpoint",
        )

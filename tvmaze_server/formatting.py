"""Plaintext summaries of validated TVMaze data.

These functions only read the models they are given. Header counts always
come from the full lists; preview limits only decide how many bullets are
written.
"""

from typing import List, Optional

from tvmaze_server.models import (
    CastEntry,
    CrewEntry,
    Episode,
    EpisodesOutput,
    Season,
    SearchOutput,
    Show,
    ShowDetailsOutput,
    ShowPeopleOutput,
    SeasonsOutput,
)


def format_number(value: float) -> str:
    """Render 8.0 as "8" and 8.5 as "8.5"."""
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def format_show(show: Show, header: str) -> str:
    lines = [header, f"Genres: {', '.join(show.genres) or 'n/a'}"]
    if show.language:
        lines.append(f"Language: {show.language}")
    if show.status:
        lines.append(f"Status: {show.status}")
    # A 0.0 average is treated as "no rating".
    if show.rating and show.rating.average:
        lines.append(f"Rating: {format_number(show.rating.average)}")
    if show.premiered:
        lines.append(f"Premiered: {show.premiered}")
    if show.official_site:
        lines.append(f"Official Site: {show.official_site}")
    lines.append(f"URL: {show.url}")
    if show.summary:
        lines.append(f"Summary: {show.summary}")
    return "\n".join(lines)


def render_search(output: SearchOutput) -> str:
    blocks = [
        format_show(result.show, f"{result.show.name} (score {result.score:.2f})")
        for result in output.results
    ]
    return "\n\n".join(blocks) or "No results"


def render_show(output: ShowDetailsOutput) -> str:
    show = output.show
    return format_show(show, f"{show.name} (ID {show.id})")


def format_cast_entry(entry: CastEntry) -> str:
    line = f"- {entry.person.name}"
    if entry.character and entry.character.name:
        line += f" as {entry.character.name}"

    flags = [flag for flag, on in (("self", entry.is_self), ("voice", entry.voice)) if on]
    if flags:
        line += f" ({', '.join(flags)})"
    return line


def format_crew_entry(entry: CrewEntry) -> str:
    return f"- {entry.person.name} — {entry.type}"


def _bullets(lines: List[str], empty: str) -> List[str]:
    return lines or [empty]


def render_people(output: ShowPeopleOutput, cast_limit: int = 5, crew_limit: int = 5) -> str:
    cast_lines = [format_cast_entry(entry) for entry in output.cast[:cast_limit]]
    crew_lines = [format_crew_entry(entry) for entry in output.crew[:crew_limit]]

    return "\n".join([
        f"Cast ({len(output.cast)} total):",
        *_bullets(cast_lines, "- None listed"),
        "",
        f"Crew ({len(output.crew)} total):",
        *_bullets(crew_lines, "- None listed"),
    ])


def format_season(season: Season) -> str:
    line = f"- Season {season.number}" if season.number is not None else "- Season"
    if season.name:
        line += f" — {season.name}"
    if season.premiere_date or season.end_date:
        line += f" ({season.premiere_date or '?'} – {season.end_date or '?'})"
    if season.episode_order is not None:
        line += f" • {season.episode_order} episodes"
    return line


def render_seasons(output: SeasonsOutput, preview_limit: int = 5) -> str:
    preview = [format_season(season) for season in output.seasons[:preview_limit]]
    return "\n".join([
        f"Seasons for show {output.show_id} ({len(output.seasons)} total):",
        *_bullets(preview, "- None found"),
    ])


def format_episode(episode: Episode, include_guest_cast: bool = False) -> str:
    number = f"E{episode.number:02d}" if episode.number is not None else "Episode"
    line = f"- {number}: {episode.name or 'Untitled'} ({episode.airdate or '?'})"

    average: Optional[float] = episode.rating.average if episode.rating else None
    if average is not None:
        line += f" • Rating: {format_number(average)}"

    guest_cast = episode.guest_cast
    if include_guest_cast and guest_cast is not None:
        line += f" • Guest Cast: {len(guest_cast)}"
    return line


def render_episodes(output: EpisodesOutput, preview_limit: int = 5) -> str:
    preview = [
        format_episode(episode, output.include_guest_cast)
        for episode in output.episodes[:preview_limit]
    ]
    return "\n".join([
        f"Episodes for season {output.season_id} ({len(output.episodes)} total):",
        *_bullets(preview, "- None found"),
    ])

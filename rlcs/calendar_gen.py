"""ICS calendar generation from match data."""

from __future__ import annotations

from datetime import timedelta

from icalendar import Alarm, Calendar, Event

from rlcs import GameListing, Match

MATCH_DURATION = timedelta(hours=2)


def create_match_calendar(matches: list[Match]) -> Calendar:
    """Create an ICS calendar with one event per match."""
    cal = _new_calendar()
    for match in matches:
        cal.add_component(_create_event(match, ""))
    return cal


def create_games_calendar(games: list[GameListing]) -> Calendar:
    """Create an ICS calendar for a cross-tournament game listing."""
    cal = _new_calendar()
    for game in games:
        cal.add_component(_create_event(game.match, game.tournament_name))
    return cal


def _new_calendar() -> Calendar:
    cal = Calendar()
    cal.add("prodid", "-//RLCS Match Calendar//blast.tv//")
    cal.add("version", "2.0")
    cal.add("calscale", "GREGORIAN")
    cal.add("method", "PUBLISH")
    cal.add("x-wr-calname", "RLCS Matches")
    return cal


def _create_event(match: Match, tournament_name: str) -> Event:
    """Create a calendar event from a match."""
    event = Event()

    summary = f"{match.team_a.name or 'TBD'} vs {match.team_b.name or 'TBD'}"
    if match.type:
        summary += f" ({match.type})"
    event.add("summary", summary)
    event.add("dtstart", match.time_of_series)
    event.add("dtend", match.time_of_series + MATCH_DURATION)

    description = match.name
    if tournament_name:
        description = f"Tournament: {tournament_name}\n{description}"
    if match.is_completed and not match.is_live:
        description += f"\n\nFinal score: {match.team_a_score} - {match.team_b_score}"
    event.add("description", description)

    # Stable UID so re-imports update the same event
    event.add("uid", f"{match.id}@blast.tv")

    if not match.is_live and not match.is_completed:
        alarm = Alarm()
        alarm.add("action", "DISPLAY")
        alarm.add("description", f"{summary} starts in 30 minutes!")
        alarm.add("trigger", timedelta(minutes=-30))
        event.add_component(alarm)

    event.add("status", "CONFIRMED")
    if match.is_completed and not match.is_live:
        event.add("transp", "TRANSPARENT")  # Don't block time for past matches

    return event

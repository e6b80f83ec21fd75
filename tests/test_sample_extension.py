"""Tests for the sample teams extension."""

import pytest

from cmdpalette.models import SuggestionKind


@pytest.mark.asyncio
async def test_roster(teams_palette):
    result = teams_palette.submit("roster RED")
    assert result.success
    assert result.output == "alice, arthur"


@pytest.mark.asyncio
async def test_pick(teams_palette):
    result = teams_palette.submit("choose blue boris 2")
    assert result.output == "Picked boris from blue x2"
    assert teams_palette.extensions["teams"].picks == [("blue", "boris", 2)]


@pytest.mark.asyncio
async def test_pick_default_count(teams_palette):
    teams_palette.submit("pick red alice")
    assert teams_palette.extensions["teams"].picks == [("red", "alice", 1)]


@pytest.mark.asyncio
async def test_pick_wrong_team(teams_palette):
    """A member of another team is a valid teammate but the handler refuses it."""
    result = teams_palette.submit("pick red bob")
    assert not result.success
    assert result.message == "pick failed: bob is not in team red"


@pytest.mark.asyncio
async def test_unknown_team(teams_palette):
    result = teams_palette.submit("roster green")
    assert result.message == "Invalid value for argument 'team': green"


@pytest.mark.asyncio
async def test_dependent_suggestions(teams_palette):
    """Teammate suggestions follow the team typed before."""
    assert list(teams_palette.suggest("pick ")) == ["blue", "red"]
    assert list(teams_palette.suggest("pick red ")) == ["alice", "arthur"]
    assert list(teams_palette.suggest("pick blue b")) == ["bob", "boris"]
    assert list(teams_palette.suggest("pick purple a")) == ["alice", "arthur"]


@pytest.mark.asyncio
async def test_render(teams_palette):
    result = teams_palette.suggest("pick red a")
    assert result.kind == SuggestionKind.ARGUMENT
    assert result.color == "ansiblue"
    assert teams_palette.render_suggestion(result, "alice") == ("alice", "Alice")


@pytest.mark.asyncio
async def test_roster_cached(teams_palette):
    extension = teams_palette.extensions["teams"]
    loads = []
    original = extension.roster.loader
    extension.roster.loader = lambda: loads.append(1) or original()
    extension.roster.invalidate()
    teams_palette.suggest("pick ")
    teams_palette.suggest("pick red ")
    teams_palette.submit("roster red")
    assert len(loads) == 1


@pytest.mark.asyncio
async def test_default_roster():
    from palette_examples.teams import DEFAULT_ROSTER, TeamsExtension

    from cmdpalette.palette import Palette

    palette = Palette()
    await palette.load_extensions([TeamsExtension("teams")])
    assert palette.submit("roster blue").output == ", ".join(DEFAULT_ROSTER["blue"])

" generic fixtures "
import logging

import pytest
from pytest_asyncio import fixture as async_fixture

from cmdpalette.commands.models import argument
from cmdpalette.palette import Palette


def pytest_configure():
    "Runs once before all"
    from cmdpalette.logs import init_logger

    init_logger("/dev/null", force_debug=True)


@pytest.fixture
def test_logger():
    "A debug logger wired to the test handlers"
    from cmdpalette.logs import get_logger

    return get_logger("tests", logging.DEBUG)


@pytest.fixture
def palette():
    "A palette with the built-in extension only"
    return Palette()


@pytest.fixture
def game_palette(palette):
    """A palette with a small game vocabulary:

    - `player` type (alice, bob, carol, suggested by prefix)
    - `give <target:player> <amount:number> [note:string]`
    - `tp <target:player> [x:number=0] [y:number=0]` (alias `teleport`)
    """
    players = ["alice", "bob", "carol"]

    def validate_player(raw):
        if raw not in players:
            raise ValueError(raw)
        return raw

    palette.register_arg_type(
        "player",
        validate_player,
        suggest=lambda query, _previous: [p for p in players if p.startswith(query)],
        color="ansired",
    )
    palette.calls = []
    palette.register_command(
        "game",
        "give",
        [argument("target", "player"), argument("amount", "number"), argument("note", optional=True)],
        [],
        "Give an amount to a player",
        lambda target, amount, note: palette.calls.append(("give", target, amount, note)) or f"gave {amount} to {target}",
    )
    palette.register_command(
        "game",
        "tp",
        [argument("target", "player"), argument("x", "number", default=0), argument("y", "number", default=0)],
        ["teleport"],
        "Teleport a player",
        lambda target, x, y: palette.calls.append(("tp", target, x, y)),
    )
    return palette


@async_fixture
async def teams_palette():
    "A palette with the sample teams extension loaded"
    from palette_examples.teams import TeamsExtension

    palette = Palette({"teams": {"roster": {"red": ["alice", "arthur"], "blue": ["bob", "boris"]}}})
    await palette.load_extensions([TeamsExtension("teams")])
    yield palette
    await palette.exit_extensions()

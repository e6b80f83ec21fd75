"""Tests for the help texts and the built-in commands."""

import pytest

from cmdpalette.commands.models import argument
from cmdpalette.help import format_usage, get_command_help, get_help
from cmdpalette.models import SuggestionKind
from cmdpalette.version import VERSION


def test_format_usage(game_palette):
    assert format_usage(game_palette.commands.resolve("give")) == "give <target:player> <amount:number> [note:string]"
    assert format_usage(game_palette.commands.resolve("tp")) == "tp <target:player> [x:number=0] [y:number=0]"
    assert format_usage(game_palette.commands.resolve("version")) == "version"


def test_get_help_groups(game_palette):
    text = get_help(game_palette)
    assert text.index("built-in:") < text.index("game:")
    assert "  give                 Give an amount to a player" in text
    assert "help" in text


def test_get_help_category(game_palette):
    text = get_help(game_palette, "game")
    assert "built-in:" not in text
    assert "tp" in text
    assert get_help(game_palette, "nothing") == "No commands in category nothing\n"


def test_get_command_help(game_palette):
    text = get_command_help(game_palette.commands.resolve("teleport"))
    assert text.splitlines()[:3] == [
        "Usage: tp <target:player> [x:number=0] [y:number=0]",
        "Aliases: teleport",
        "Category: game",
    ]
    assert text.endswith("Teleport a player\n")


class TestBuiltinCommands:
    def test_help(self, game_palette):
        result = game_palette.submit("help")
        assert result.success
        assert "game:" in result.output

    def test_help_command(self, game_palette):
        assert game_palette.submit("? give").output.startswith("Usage: give")
        assert game_palette.submit("help TELEPORT").output.startswith("Usage: tp")

    def test_help_unknown_command(self, game_palette):
        result = game_palette.submit("help fly")
        assert not result.success
        assert result.message == "Invalid value for argument 'command': fly"

    def test_commands_category(self, game_palette):
        assert "give" in game_palette.submit("commands GAME").output
        assert not game_palette.submit("commands nowhere").success

    def test_version(self, palette):
        assert palette.submit("version").output == f"{VERSION}\n"

    def test_command_type_suggestions(self, game_palette):
        result = game_palette.suggest("help t")
        assert result.kind == SuggestionKind.ARGUMENT
        assert list(result) == ["tp"]

    def test_category_type_suggestions(self, game_palette):
        game_palette.register_command("gardening", "water", [argument("plant")], [], "", print)
        assert list(game_palette.suggest("commands g")) == ["game", "gardening"]
        assert list(game_palette.suggest("commands B")) == ["built-in"]

    @pytest.mark.parametrize("line", ["help", "commands", "version"])
    def test_builtin_category(self, palette, line):
        assert palette.commands.resolve(line).category == "built-in"

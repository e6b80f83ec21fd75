"""Tests for the argument binder."""

import pytest

from cmdpalette.argtypes import TypeDescriptor, TypeRegistry, builtin_types
from cmdpalette.binder import bind, bind_partial
from cmdpalette.commands.models import ArgumentSpec, argument
from cmdpalette.commands.registry import make_definition
from cmdpalette.errors import FailureKind, InvalidArgument, MissingRequiredArgument, TooManyArguments, UnknownArgumentType
from cmdpalette.lexer import quote, tokenize
from cmdpalette.models import ABSENT


@pytest.fixture
def types():
    registry = TypeRegistry()
    for descriptor in builtin_types():
        registry.register(descriptor)
    registry.register(TypeDescriptor("player", validate=lookup_player))
    return registry


def lookup_player(raw):
    return {"alice": "alice", "bob": "bob"}[raw]  # KeyError for anyone else


def give(*_args):
    return None


GIVE = make_definition(
    "game",
    "give",
    [argument("target", "player"), argument("amount", "number"), argument("note", optional=True)],
    [],
    "",
    give,
)

TP = make_definition(
    "game",
    "tp",
    [
        argument("x", "number", default=0),
        ArgumentSpec("number", "y", optional=True, has_default=True, default="7", default_is_raw=True),
    ],
    [],
    "",
    give,
)


class TestBind:
    def test_all_slots(self, types):
        bound = bind(GIVE, tokenize("alice 5 thanks"), types)
        assert bound.values == ("alice", 5, "thanks")
        assert bound["amount"] == 5
        assert [argument.raw for argument in bound] == ["alice", "5", "thanks"]

    def test_strings_accepted(self, types):
        """Plain decoded strings work as tokens."""
        assert bind(GIVE, ["bob", "2"], types).values == ("bob", 2, ABSENT)

    def test_optional_absent(self, types):
        """An omitted optional slot without default binds ABSENT."""
        bound = bind(GIVE, tokenize("alice 5"), types)
        assert bound.values[2] is ABSENT
        assert list(bound)[2].is_absent
        assert list(bound)[2].raw is None

    def test_defaults(self, types):
        """Explicit defaults are used as is, raw text defaults go through the type."""
        assert bind(TP, [], types).values == (0, 7)
        assert bind(TP, ["3"], types).values == (3, 7)
        assert bind(TP, ["3", "4"], types).values == (3, 4)

    def test_quoted_token(self, types):
        bound = bind(GIVE, tokenize('bob 1 "many thanks"'), types)
        assert bound["note"] == "many thanks"

    def test_missing_required(self, types):
        with pytest.raises(MissingRequiredArgument) as excinfo:
            bind(GIVE, tokenize("alice"), types)
        assert excinfo.value.slot == "amount"
        assert excinfo.value.index == 1
        assert excinfo.value.kind == FailureKind.MISSING_REQUIRED_ARGUMENT
        assert str(excinfo.value) == "Missing required argument: amount"

    def test_invalid_argument(self, types):
        """A rejected token fails even if a later slot is fine."""
        with pytest.raises(InvalidArgument) as excinfo:
            bind(GIVE, tokenize("alice lots"), types)
        assert excinfo.value.slot == "amount"
        assert excinfo.value.raw_text == "lots"
        assert str(excinfo.value) == "Invalid value for argument 'amount': lots"

    def test_invalid_optional_does_not_fall_back(self, types):
        """A present but invalid token never falls back to the default."""
        with pytest.raises(InvalidArgument):
            bind(TP, ["nope"], types)

    def test_validator_crash_is_invalid(self, types):
        """Any validator exception rejects the value."""
        with pytest.raises(InvalidArgument):
            bind(GIVE, tokenize("zed 1"), types)

    def test_too_many(self, types):
        with pytest.raises(TooManyArguments) as excinfo:
            bind(GIVE, tokenize("alice 5 note extra"), types)
        assert excinfo.value.count == 4
        assert excinfo.value.expected == 3

    def test_too_many_checked_first(self, types):
        """Extra tokens are reported before validation errors."""
        with pytest.raises(TooManyArguments):
            bind(GIVE, ["nobody", "x", "y", "z"], types)

    def test_unknown_type(self, types):
        definition = make_definition("game", "spawn", [argument("what", "monster")], [], "", give)
        with pytest.raises(UnknownArgumentType) as excinfo:
            bind(definition, ["orc"], types)
        assert excinfo.value.type_name == "monster"

    def test_no_slots(self, types):
        definition = make_definition("game", "quit", [], [], "", give)
        assert bind(definition, [], types).values == ()
        with pytest.raises(TooManyArguments):
            bind(definition, ["now"], types)

    def test_late_type_registration(self, types):
        """Types are resolved at bind time."""
        definition = make_definition("game", "paint", [argument("color", "color")], [], "", give)
        with pytest.raises(UnknownArgumentType):
            bind(definition, ["red"], types)
        types.register(TypeDescriptor("color", validate=str.upper))
        assert bind(definition, ["red"], types).values == ("RED",)


class TestBindPartial:
    def test_leading_slots(self, types):
        assert bind_partial(GIVE, ["alice"], types) == ["alice"]
        assert bind_partial(GIVE, ["alice", "3"], types) == ["alice", 3]

    def test_invalid_as_absent(self, types):
        assert bind_partial(GIVE, ["zed", "3"], types) == [ABSENT, 3]

    def test_extra_tokens_ignored(self, types):
        assert bind_partial(GIVE, ["alice", "1", "x", "y"], types) == ["alice", 1, "x"]

    def test_unknown_type_as_absent(self, types):
        definition = make_definition("game", "spawn", [argument("what", "monster")], [], "", give)
        assert bind_partial(definition, ["orc"], types) == [ABSENT]


class TestExamples:
    PAIR = make_definition("tools", "pair", [argument("a"), argument("b", default="x")], [], "", give)

    def test_default_used(self, types):
        assert bind(self.PAIR, tokenize("given"), types).values == ("given", "x")

    def test_zero_tokens(self, types):
        with pytest.raises(MissingRequiredArgument) as excinfo:
            bind(self.PAIR, [], types)
        assert excinfo.value.slot == "a"

    def test_three_tokens(self, types):
        with pytest.raises(TooManyArguments):
            bind(self.PAIR, tokenize("one two three"), types)

    @pytest.mark.parametrize(
        "values",
        [("plain", "words"), ("with space", 'and "quotes"'), ("it's", "back\\slash"), ("", "\t tab"), ("«ü»", "a\\ b")],
    )
    def test_quoted_values_bind_back(self, types, values):
        """Values written with quote() bind back unchanged."""
        definition = make_definition("tools", "echo", [argument("first"), argument("second")], [], "", give)
        line = " ".join(quote(value) for value in values)
        assert bind(definition, tokenize(line), types).values == values

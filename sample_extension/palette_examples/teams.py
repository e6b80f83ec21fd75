"""Sample extension demonstrating cmdpalette extension development.

Exposes two commands:
- `roster <team:team>` lists the members of a team
- `pick <team:team> <member:teammate> [count:number=1]` picks a member

The `teammate` suggestions depend on the team typed in the previous slot, and
the roster is read through a TimedCache as an expensive source would be.
"""

from collections.abc import Sequence
from typing import Any, ClassVar

from cmdpalette.argtypes import TypeDescriptor
from cmdpalette.extensions.interface import Extension
from cmdpalette.utils import TimedCache

DEFAULT_ROSTER = {
    "red": ["alice", "arthur", "amelia"],
    "blue": ["bob", "bianca", "boris"],
}


class TeamsExtension(Extension):
    """Pick team members from the palette."""

    category = "teams"
    aliases: ClassVar[dict[str, list[str]]] = {"pick": ["choose"]}

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.picks: list[tuple[str, str, int]] = []
        self.roster = TimedCache(self._load_roster, retention_time=5.0)

    async def init(self) -> None:
        """Apply the cache duration from the configuration."""
        self.roster.retention_time = self.config.get_float("cache_seconds", 5.0)
        self.roster.invalidate()

    def _load_roster(self) -> dict[str, list[str]]:
        roster = self.config.get("roster")
        if isinstance(roster, dict) and roster:
            return {team: list(members) for team, members in roster.items()}
        return DEFAULT_ROSTER

    def get_argument_types(self) -> list[TypeDescriptor]:
        """Return the `team` and `teammate` types."""
        return [
            TypeDescriptor("team", validate=self._validate_team, suggest=self._suggest_team, color="ansired"),
            TypeDescriptor(
                "teammate",
                validate=self._validate_member,
                suggest=self._suggest_member,
                render=lambda member: (member, member.title()),
                color="ansiblue",
            ),
        ]

    def _validate_team(self, raw: str) -> str:
        team = raw.lower()
        if team not in self.roster.get():
            raise ValueError(f"no team {raw!r}")
        return team

    def _suggest_team(self, query: str, _previous: Sequence[Any]) -> list[str]:
        return sorted(team for team in self.roster.get() if team.startswith(query.lower()))

    def _validate_member(self, raw: str) -> str:
        member = raw.lower()
        if not any(member in members for members in self.roster.get().values()):
            raise ValueError(f"no member {raw!r}")
        return member

    def _suggest_member(self, query: str, previous: Sequence[Any]) -> list[str]:
        roster = self.roster.get()
        team = previous[0] if previous else None
        members = roster[team] if team in roster else [m for names in roster.values() for m in names]
        return [member for member in members if member.startswith(query.lower())]

    def run_roster(self, team: str) -> str:
        """<team:team> List the members of a team."""
        return ", ".join(self.roster.get()[team])

    def run_pick(self, team: str, member: str, count: int) -> str:
        """<team:team> <member:teammate> [count:number=1] Pick a team member.

        The member must belong to the team.
        """
        if member not in self.roster.get()[team]:
            msg = f"{member} is not in team {team}"
            raise ValueError(msg)
        self.picks.append((team, member, count))
        self.log.info("Picked %s from %s (%d)", member, team, count)
        return f"Picked {member} from {team} x{count}"

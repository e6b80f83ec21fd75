"""Common extension interface."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar

from ..config import Configuration
from ..logs import get_logger

if TYPE_CHECKING:
    from ..argtypes import TypeDescriptor
    from ..palette import Palette

__all__ = ["Extension"]


class Extension:
    """Base class for palette extensions.

    Commands are the `run_<name>` methods; the first docstring line declares the
    slots (`<name:type>` required, `[name:type=default]` optional) followed by the
    short description.
    """

    category: str = ""
    " Category of the commands, defaults to the extension name "

    aliases: ClassVar[dict[str, list[str]]] = {}
    " Command name -> aliases "

    argument_types: ClassVar[list[TypeDescriptor]] = []
    " Types registered before the commands "

    palette: Palette
    " The palette this extension was registered into "

    def __init__(self, name: str) -> None:
        """Create the extension `name` and the matching logger."""
        self.name = name
        self.log = get_logger(name)
        if not self.category:
            self.category = name
        self.config = Configuration(logger=self.log)

    # Functions to override

    async def init(self) -> None:
        """Prepare the extension before its commands and types are registered.

        Awaited once by `Palette.load_extensions`; this is where to wait for the
        host to be ready.
        """

    async def exit(self) -> None:
        """Release resources at the end of the session."""

    def get_argument_types(self) -> list[TypeDescriptor]:
        """Return the argument types to register."""
        return list(self.argument_types)

    # Generic implementations

    def load_config(self, config: dict[str, Any]) -> None:
        """Load this extension's section (named after the extension) from `config`."""
        self.config.clear()
        self.config.update(config.get(self.name, {}))

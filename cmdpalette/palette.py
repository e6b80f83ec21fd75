"""Palette - the engine facade.

Owns the command and type registries and wires the lexer, binder, suggestion
engine and executor together. Front-ends submit whole lines and stream
(line, cursor) pairs for suggestions; extensions register commands and types.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from typing import Any

from .argtypes import RenderCallback, SuggestCallback, TypeDescriptor, TypeRegistry, ValidateCallback, builtin_types
from .binder import BoundArguments, bind
from .commands.discovery import extract_commands_from_object
from .commands.models import ArgumentSpec, CommandDefinition
from .commands.registry import CommandRegistry, make_definition
from .config import Configuration
from .constants import CONFIG_SECTION, DEFAULT_MAX_SUGGESTIONS, STRICT_ERRORS
from .errors import DuplicateName, PaletteError, RegistrationError, UnknownCommand
from .executor import Executor
from .extensions.core import CoreExtension
from .extensions.interface import Extension
from .extensions.loader import extend_path, instantiate_extension
from .lexer import tokenize
from .logs import get_logger
from .models import CommandResult, SuggestionResult
from .schema import PALETTE_CONFIG_SCHEMA
from .suggestions import SuggestionEngine
from .validation import ConfigValidator

__all__ = ["Palette"]


class Palette:  # pylint: disable=too-many-instance-attributes
    """Main engine object.

    Args:
        config: Full configuration (the `[palette]` section holds the engine settings,
            other sections belong to the extensions of the same name)
        builtins: Register the built-in extension (help, commands, version)
    """

    def __init__(self, config: dict[str, Any] | None = None, builtins: bool = True) -> None:
        self.log = get_logger()
        self.config: dict[str, Any] = config or {}
        self.settings = Configuration(self.config.get(CONFIG_SECTION, {}), logger=self.log, schema=PALETTE_CONFIG_SCHEMA)
        self.config_errors = self._validate_settings()

        max_suggestions = self.settings.get_int("max_suggestions", DEFAULT_MAX_SUGGESTIONS)
        if max_suggestions < 1:
            max_suggestions = DEFAULT_MAX_SUGGESTIONS

        self.types = TypeRegistry()
        self.commands = CommandRegistry()
        self.extensions: dict[str, Extension] = {}
        self.executor = Executor(
            self.log,
            strict=STRICT_ERRORS or self.settings.get_bool("strict_errors"),
            colored=self.settings.get_bool("colored_handlers_log"),
        )
        self.engine = SuggestionEngine(self.commands, self.types, self.log, max_suggestions=max_suggestions)

        for descriptor in builtin_types():
            self.types.register(descriptor)
        if builtins:
            self.register_extension(CoreExtension("core"))

    def _validate_settings(self) -> list[str]:
        validator = ConfigValidator(self.settings, CONFIG_SECTION, self.log)
        errors = validator.validate(PALETTE_CONFIG_SCHEMA)
        for error in errors:
            self.log.error(error)
        validator.warn_unknown_keys(PALETTE_CONFIG_SCHEMA)
        return errors

    # Registration

    def register_type(self, descriptor: TypeDescriptor) -> TypeDescriptor:
        """Register an argument type.

        Raises:
            DuplicateName: if the type name is taken
        """
        self.types.register(descriptor)
        self.log.debug("Registered type %s", descriptor.name)
        return descriptor

    def register_arg_type(  # pylint: disable=too-many-arguments
        self,
        type_name: str,
        validate: ValidateCallback,
        suggest: SuggestCallback | None = None,
        render: RenderCallback | None = None,
        color: Any = None,  # noqa: ANN401
        description: str = "",
    ) -> TypeDescriptor:
        """Register an argument type from its callbacks.

        Raises:
            DuplicateName: if the type name is taken
        """
        return self.register_type(TypeDescriptor(type_name, validate, suggest, render, color, description))

    def register_definition(self, definition: CommandDefinition) -> CommandDefinition:
        """Register a command definition.

        Raises:
            DuplicateName: if the name or an alias is taken
            InvalidDefinition: if the definition breaks a registration rule
        """
        self.commands.register(definition)
        self.log.debug("Registered command %s (%s)", definition.name, definition.category)
        return definition

    def register_command(  # pylint: disable=too-many-arguments
        self,
        category: str,
        name: str,
        args: Sequence[ArgumentSpec],
        aliases: Sequence[str],
        description: str,
        handler: Callable[..., Any],
    ) -> CommandDefinition:
        """Register a command.

        Args:
            category: Grouping label
            name: Primary name (case-insensitive, no whitespace)
            args: Slots, in order; optional slots must come last
            aliases: Alternative names, unique across the whole registry
            description: Human-readable description
            handler: Called with one value per slot

        Raises:
            DuplicateName: if the name or an alias is taken
            InvalidDefinition: if the definition breaks a registration rule
        """
        return self.register_definition(make_definition(category, name, args, aliases, description, handler))

    def command(
        self,
        name: str,
        *args: ArgumentSpec,
        category: str = "",
        aliases: Sequence[str] = (),
        description: str | None = None,
    ) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Decorator registering the decorated function as a command.

        The description defaults to the function's docstring. The function is
        returned unchanged.
        """

        def _register(handler: Callable[..., Any]) -> Callable[..., Any]:
            text = description if description is not None else (handler.__doc__ or "").strip()
            self.register_command(category, name, args, aliases, text, handler)
            return handler

        return _register

    def register_extension(self, extension: Extension, configure: bool = True) -> list[RegistrationError]:
        """Register the types, then the commands, of an extension.

        A rejected registration is logged and collected; it does not stop the
        following ones.

        Args:
            extension: The extension instance
            configure: Load the extension's configuration section first

        Returns:
            The registration errors, empty when everything was registered
        """
        if extension.name in self.extensions:
            error = DuplicateName(extension.name)
            self.log.error("Extension %s is already loaded", extension.name)
            return [error]
        extension.palette = self
        if configure:
            extension.load_config(self.config)
        self.extensions[extension.name] = extension

        errors: list[RegistrationError] = []
        try:
            descriptors = extension.get_argument_types()
        except Exception:  # pylint: disable=broad-exception-caught
            self.log.exception("[%s] cannot list its argument types", extension.name)
            descriptors = []
        for descriptor in descriptors:
            try:
                self.register_type(descriptor)
            except RegistrationError as e:
                self.log.error("[%s] cannot register type %s: %s", extension.name, descriptor.name, e)
                errors.append(e)

        definitions, parse_errors = extract_commands_from_object(extension, extension.name, extension.category, extension.aliases)
        for error in parse_errors:
            self.log.error("[%s] %s", extension.name, error)
        errors.extend(parse_errors)
        for definition in definitions:
            try:
                self.register_definition(definition)
            except RegistrationError as e:
                self.log.error("[%s] cannot register command %s: %s", extension.name, definition.name, e)
                errors.append(e)
        return errors

    async def load_extensions(self, extensions: Iterable[Extension]) -> dict[str, list[RegistrationError]]:
        """Initialize and register extensions, in order.

        An extension whose `init()` raises is skipped; the others still load.

        Returns:
            Dict mapping each registered extension name to its registration errors
        """
        report: dict[str, list[RegistrationError]] = {}
        for extension in extensions:
            extension.load_config(self.config)
            try:
                await extension.init()
            except Exception:  # pylint: disable=broad-exception-caught
                self.log.exception("Error initializing extension %s:", extension.name)
                continue
            report[extension.name] = self.register_extension(extension, configure=False)
            extension.log.info("loaded")
        return report

    async def load_configured_extensions(self) -> dict[str, list[RegistrationError]]:
        """Import and load the extensions listed in the `extensions` setting.

        A module which cannot be imported or instantiated is logged and skipped.

        Returns:
            Same as `load_extensions`
        """
        extend_path(self.settings.get("extensions_paths") or [])
        extensions: list[Extension] = []
        for reference in self.settings.get("extensions") or []:
            try:
                extensions.append(instantiate_extension(reference))
            except ModuleNotFoundError:
                self.log.exception("Unable to locate extension '%s'", reference)
            except RegistrationError as e:
                self.log.error("Unable to load extension '%s': %s", reference, e)
            except Exception:  # pylint: disable=broad-exception-caught
                self.log.exception("Error loading extension '%s':", reference)
        return await self.load_extensions(extensions)

    async def exit_extensions(self) -> None:
        """Call `exit()` on every registered extension."""
        for extension in self.extensions.values():
            try:
                await extension.exit()
            except Exception:  # pylint: disable=broad-exception-caught
                self.log.exception("Error while exiting extension %s:", extension.name)

    # Command lines

    def parse(self, line: str) -> BoundArguments:
        """Tokenize, resolve and bind a command line without running it.

        Raises:
            LexError: on an unterminated quote
            UnknownCommand: if the first token matches no command (or the line is empty)
            MissingRequiredArgument, InvalidArgument, TooManyArguments, UnknownArgumentType:
                when binding fails
        """
        tokens = tokenize(line)
        if not tokens:
            raise UnknownCommand("")
        definition = self.commands.resolve(tokens[0].value)
        if definition is None:
            raise UnknownCommand(tokens[0].value)
        return bind(definition, tokens[1:], self.types, self.log)

    def _parse_for_submit(self, line: str) -> BoundArguments | CommandResult:
        try:
            return self.parse(line)
        except PaletteError as e:
            self.log.info("Rejected %r: %s", line, e)
            command = e.name if isinstance(e, UnknownCommand) else getattr(e, "command", "")
            return CommandResult(False, command, error=e)

    def submit(self, line: str) -> CommandResult:
        """Run a command line.

        Never raises for parse, bind or handler failures: they come back as a
        failed CommandResult, and no handler runs unless binding succeeded.
        """
        parsed = self._parse_for_submit(line)
        if isinstance(parsed, CommandResult):
            return parsed
        return self.executor.execute(parsed.command, parsed)

    async def asubmit(self, line: str) -> CommandResult:
        """Run a command line, awaiting asynchronous handlers."""
        parsed = self._parse_for_submit(line)
        if isinstance(parsed, CommandResult):
            return parsed
        return await self.executor.aexecute(parsed.command, parsed)

    # Suggestions

    def suggest(self, line: str, cursor: int | None = None) -> SuggestionResult:
        """Return the suggestions for `line`, the cursor defaulting to the end of the line."""
        return self.engine.suggest(line, len(line) if cursor is None else cursor)

    def render_suggestion(self, result: SuggestionResult, suggestion: Any) -> tuple[Any, Any] | None:  # noqa: ANN401
        """Render one suggestion of `result` through its type (see `SuggestionEngine.render`)."""
        return self.engine.render(result, suggestion)

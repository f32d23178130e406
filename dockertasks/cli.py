"""Minimal CLI framework for the docker-tasks command."""

import sys
from dataclasses import dataclass


@dataclass
class Command:
    """A CLI subcommand."""
    name: str
    help: str
    argument: str | None = None


@dataclass
class Option:
    """A CLI option."""
    name: str
    help: str
    takes_value: bool = True


class UsageError(Exception):
    pass


class CLI:
    """Simple CLI framework for consistent command structure."""

    def __init__(self, name: str, description: str):
        self.name = name
        self.description = description
        self.commands: list[Command] = []
        self.options: list[Option] = []
        self.examples: list[str] = []

    def add_command(self, name: str, help: str, argument: str | None = None) -> "CLI":
        """Add a subcommand, optionally taking one positional argument."""
        self.commands.append(Command(name, help, argument))
        return self

    def add_option(self, name: str, help: str, takes_value: bool = True) -> "CLI":
        """Add an option to the CLI."""
        self.options.append(Option(name, help, takes_value))
        return self

    def add_example(self, example: str) -> "CLI":
        """Add an example to the CLI."""
        self.examples.append(example)
        return self

    def print_usage(self, file=sys.stderr) -> None:
        """Print usage information."""
        print(f"Usage: {self.name} <command> [options]", file=file)
        print(file=file)
        print(self.description, file=file)
        print(file=file)
        print("Commands:", file=file)
        for cmd in self.commands:
            usage = f"{cmd.name} <{cmd.argument}>" if cmd.argument else cmd.name
            print(f"  {usage:<18}{cmd.help}", file=file)
        print(file=file)
        if self.options:
            print("Options:", file=file)
            for opt in self.options:
                usage = f"--{opt.name} <value>" if opt.takes_value else f"--{opt.name}"
                print(f"  {usage:<24}{opt.help}", file=file)
            print(file=file)
        if self.examples:
            print("Examples:", file=file)
            for ex in self.examples:
                print(f"  {self.name} {ex}", file=file)

    def parse_args(self, argv: list[str]) -> tuple[Command, str | None, dict[str, str | bool]]:
        """Parse command line arguments.

        Returns:
            Tuple of (command, positional argument or None, options dict)

        Raises:
            UsageError: on unknown commands, options or missing values
        """
        if not argv:
            raise UsageError("No command given")

        command = next((c for c in self.commands if c.name == argv[0]), None)
        if command is None:
            raise UsageError(f"Unknown command: {argv[0]}")

        argument: str | None = None
        opts: dict[str, str | bool] = {}

        args = argv[1:]
        i = 0
        while i < len(args):
            arg = args[i]
            if arg.startswith("--"):
                opt_name = arg[2:]
                opt = next((o for o in self.options if o.name == opt_name), None)
                if opt is None:
                    raise UsageError(f"Unknown option: {arg}")
                if opt.takes_value:
                    if i + 1 >= len(args):
                        raise UsageError(f"Option --{opt_name} requires a value")
                    opts[opt_name] = args[i + 1]
                    i += 2
                else:
                    opts[opt_name] = True
                    i += 1
            elif command.argument is not None and argument is None:
                argument = arg
                i += 1
            else:
                raise UsageError(f"Unknown argument: {arg}")

        if command.argument is not None and argument is None:
            raise UsageError(f"Command '{command.name}' requires <{command.argument}>")

        return command, argument, opts

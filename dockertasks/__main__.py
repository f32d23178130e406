import logging
import shlex
import sys
from pathlib import Path

from jinja2 import TemplateError

from dockertasks.cli import CLI, UsageError
from dockertasks.compose import write_compose_file
from dockertasks.config import ConfigLoader, BuildConfiguration, get_config_file, get_docker_binary
from dockertasks.errors import DockerTasksError
from dockertasks.plan import build_plan


def create_cli() -> CLI:
    return (
        CLI(
            name="docker-tasks",
            description="Resolve docker build, tag and push tasks from docker.yml.",
        )
        .add_command("tasks", "List all tasks with their dependencies")
        .add_command("command", "Print the command line of a task", argument="task")
        .add_command("compose", "Render the docker-compose template")
        .add_option("config", "Configuration file (default: <project-dir>/docker.yml)")
        .add_option("project-dir", "Project directory (default: current directory)")
        .add_option("verbose", "Enable debug logging", takes_value=False)
        .add_example("tasks")
        .add_example("command dockerTagLatest")
        .add_example("compose --project-dir ./service")
    )


def load_configuration(opts: dict[str, str | bool]) -> BuildConfiguration:
    project_dir = Path(str(opts.get("project-dir", ".")))
    config_path = Path(str(opts["config"])) if "config" in opts else project_dir / get_config_file()

    if not config_path.exists():
        raise FileNotFoundError(f"Docker configuration not found: {config_path}")

    return ConfigLoader.load(config_path).resolve(project_dir)


def print_tasks(config: BuildConfiguration) -> int:
    plan = build_plan(config, get_docker_binary())

    print(f"Docker tasks for {config.name}")
    print()
    for task in plan:
        print(f"{task.name} - {task.description}")
        if task.depends_on:
            print(f"    depends on: {', '.join(task.depends_on)}")
    return 0


def print_command(config: BuildConfiguration, task_name: str) -> int:
    task = build_plan(config, get_docker_binary()).get(task_name)
    if task.command is None:
        print(f"Error: Task '{task_name}' does not run a command", file=sys.stderr)
        return 1

    print(shlex.join(task.command))
    return 0


def write_compose(config: BuildConfiguration) -> int:
    write_compose_file(config)
    print(f"Compose file written to: {config.compose_file}")
    return 0


def run(argv: list[str]) -> int:
    cli = create_cli()

    if argv and argv[0] in ("--help", "-h"):
        cli.print_usage(file=sys.stdout)
        return 0

    try:
        command, argument, opts = cli.parse_args(argv)
    except UsageError as e:
        print(f"Error: {e}", file=sys.stderr)
        print(file=sys.stderr)
        cli.print_usage()
        return 1

    logging.basicConfig(
        level=logging.DEBUG if opts.get("verbose") else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_configuration(opts)
        if command.name == "tasks":
            return print_tasks(config)
        elif command.name == "command":
            return print_command(config, argument)
        else:
            return write_compose(config)
    except KeyError as e:
        print(f"Error: {e.args[0]}", file=sys.stderr)
        return 1
    except (DockerTasksError, FileNotFoundError, ValueError, TemplateError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def main() -> None:
    sys.exit(run(sys.argv[1:]))


if __name__ == "__main__":
    main()

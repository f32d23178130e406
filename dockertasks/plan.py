"""Named build actions handed to the orchestrator."""

from pydantic import dataclasses

from dockertasks.commandline import build_command_line
from dockertasks.config import BuildConfiguration, DEFAULT_DOCKER_BINARY
from dockertasks.tags import resolve_tags

GROUP = "Docker"


@dataclasses.dataclass(frozen=True)
class Task:
    """A single schedulable action. Tasks without a command are aggregates or staging steps."""
    name: str
    description: str
    command: tuple[str, ...] | None = None
    depends_on: tuple[str, ...] = ()
    group: str = GROUP


class Plan:
    """Ordered collection of tasks, unique by name"""

    def __init__(self, tasks: list[Task]):
        self._tasks = {task.name: task for task in tasks}

    def __iter__(self):
        return iter(self._tasks.values())

    def __contains__(self, name: str) -> bool:
        return name in self._tasks

    def names(self) -> list[str]:
        return list(self._tasks)

    def get(self, name: str) -> Task:
        try:
            return self._tasks[name]
        except KeyError:
            raise KeyError(f"Unknown task '{name}'. Available tasks: {', '.join(self._tasks)}") from None


def build_plan(config: BuildConfiguration, docker_binary: str = DEFAULT_DOCKER_BINARY) -> Plan:
    """
    Build the task plan for one image.

    Fails before returning anything if the build command line is invalid or
    two tags derive the same task name.
    """
    build_command = tuple(build_command_line(config, docker_binary))
    tags = resolve_tags(config)

    tag_tasks = []
    push_tasks = []
    for identifier, tag in tags.items():
        tag_task = Task(
            name=f"dockerTag{identifier}",
            description=f"Tags Docker image with tag '{tag.specification.display_name}'",
            command=(docker_binary, "tag", config.name, tag.reference),
            depends_on=("docker",),
        )
        push_task = Task(
            name=f"dockerPush{identifier}",
            description=(
                f"Pushes the Docker image with tag '{tag.specification.display_name}' "
                f"to configured Docker Hub"
            ),
            command=(docker_binary, "push", tag.reference),
            depends_on=(tag_task.name,),
        )
        tag_tasks.append(tag_task)
        push_tasks.append(push_task)

    tasks = [
        Task(name="dockerClean", description="Clean Docker build directory"),
        Task(name="dockerPrepare", description="Prepares Docker build directory.", depends_on=("dockerClean",)),
        Task(name="docker", description="Builds Docker image.", command=build_command, depends_on=("dockerPrepare",)),
        Task(
            name="dockerTag",
            description="Applies all tags to the Docker image.",
            depends_on=("docker", *(t.name for t in tag_tasks)),
        ),
        *tag_tasks,
        Task(
            name="dockerTagsPush",
            description="Pushes all tagged Docker images to configured Docker Hub.",
            depends_on=tuple(t.name for t in push_tasks),
        ),
        *push_tasks,
        Task(
            name="dockerPush",
            description="Pushes named Docker image to configured Docker Hub.",
            depends_on=("dockerTagsPush",),
        ),
        Task(name="dockerfileZip", description="Bundles the configured Dockerfile in a zip file"),
    ]
    return Plan(tasks)

import logging

from dockertasks.config import BuildConfiguration, DEFAULT_DOCKER_BINARY
from dockertasks.errors import ConfigurationError
from dockertasks.labels import validate_label_key

log = logging.getLogger(__name__)


def build_command_line(config: BuildConfiguration, program: str = DEFAULT_DOCKER_BINARY) -> list[str]:
    """
    Assemble the argument vector for building the image.

    The order of the arguments is fixed:
    program, build | buildx build [--platform] [--load] [--push] [--builder],
    --no-cache, --network, --build-arg..., --label..., --pull, -t <name> .

    Raises ConfigurationError for invalid label keys or when both push and
    load are requested in buildx mode.
    """
    command_line = [program]

    if config.buildx:
        command_line += ["buildx", "build"]
        if config.platforms:
            command_line += ["--platform", ",".join(config.platforms)]
        if config.load:
            command_line.append("--load")
        if config.push:
            if config.load:
                raise ConfigurationError("cannot combine 'push' and 'load' options")
            command_line.append("--push")
        if config.builder is not None:
            command_line += ["--builder", config.builder]
    else:
        command_line.append("build")

    if config.no_cache:
        command_line.append("--no-cache")

    if config.network is not None:
        command_line += ["--network", config.network]

    for key, value in config.build_args:
        command_line += ["--build-arg", f"{key}={value}"]

    for key, value in config.labels:
        validate_label_key(key)
        command_line += ["--label", f"{key}={value}"]

    if config.pull:
        command_line.append("--pull")

    command_line += ["-t", config.name, "."]

    log.debug("Using command line: %s", command_line)
    return command_line

"""Configuration loading from docker.yml and .docker-tasks.yml."""

import logging
import os
import re
from collections.abc import Mapping
from pathlib import Path

import yaml
from pydantic import BaseModel, dataclasses, field_validator
from pydantic_yaml import parse_yaml_file_as
from ruamel.yaml import YAMLError

from dockertasks.errors import ConfigurationError, MissingConfiguration
from dockertasks.naming import compute_name, generate_tag_task_name

log = logging.getLogger(__name__)

_settings_cache: dict | None = None

SETTINGS_FILE = ".docker-tasks.yml"
DEFAULT_DOCKER_BINARY = "docker"
DEFAULT_CONFIG_FILE = "docker.yml"
DEFAULT_DOCKERFILE = "Dockerfile"
DEFAULT_COMPOSE_TEMPLATE = "docker-compose.yml.template"
DEFAULT_COMPOSE_FILE = "docker-compose.yml"

ENV_VAR_PATTERN = re.compile(r'\$\{([^}]+)\}')


def clear_settings_cache() -> None:
    """Clear the settings cache. Useful for testing."""
    global _settings_cache
    _settings_cache = None


def expand_env_vars(value: str | None) -> str | None:
    """Expand ${VAR} references in a string value.

    Supports:
    - Pure env var: ${VAR}
    - Multiple env vars: ${USER}:${PASS}
    - Mixed content: registry.local/${IMAGE}

    Returns None if the value is None or any referenced env var is undefined.
    """
    if value is None:
        return None

    result = value
    for match in reversed(list(ENV_VAR_PATTERN.finditer(value))):
        env_value = os.environ.get(match.group(1))
        if env_value is None:
            return None
        result = result[:match.start()] + env_value + result[match.end():]

    return result


def load_settings() -> dict:
    """Load .docker-tasks.yml from current directory.

    Returns empty dict if file doesn't exist or is empty.
    Result is cached for the duration of the process.
    """
    global _settings_cache

    if _settings_cache is not None:
        return _settings_cache

    settings_path = Path.cwd() / SETTINGS_FILE

    if not settings_path.exists():
        _settings_cache = {}
        return _settings_cache

    try:
        _settings_cache = yaml.safe_load(settings_path.read_text()) or {}
    except yaml.YAMLError as e:
        log.warning("Ignoring unreadable %s: %s", settings_path, e)
        _settings_cache = {}

    return _settings_cache


def _setting(key: str, default: str) -> str:
    value = load_settings().get(key)
    if value is None:
        return default
    return expand_env_vars(str(value)) or default


def get_docker_binary() -> str:
    """Program used for build, tag and push command lines."""
    return _setting("docker_binary", DEFAULT_DOCKER_BINARY)


def get_config_file() -> str:
    return _setting("config_file", DEFAULT_CONFIG_FILE)


@dataclasses.dataclass(frozen=True)
class TagSpecification:
    """A tag to apply to the built image.

    Bare tags keep only the raw string ("latest", "task@repo:tag"); the
    reference is computed from the image name. Named tags carry an explicit
    task name and a reference that is used as-is.
    """
    spec: str
    reference: str | None = None

    @classmethod
    def named(cls, task_name: str, reference: str) -> "TagSpecification":
        return cls(spec=task_name, reference=reference)

    @property
    def is_named(self) -> bool:
        return self.reference is not None

    @property
    def display_name(self) -> str:
        return self.reference if self.reference is not None else self.spec

    def step_identifier(self) -> str:
        return generate_tag_task_name(self.spec)

    def resolve_reference(self, name: str) -> str:
        if self.reference is not None:
            return self.reference
        return compute_name(name, self.spec)


@dataclasses.dataclass(frozen=True)
class BuildConfiguration:
    """Resolved configuration of one image build.

    build_args and labels are kept as ordered (key, value) pairs; mappings
    passed in are converted in declaration order.
    """
    name: str
    dockerfile: Path | None = None
    files: tuple[Path, ...] = ()
    buildx: bool = False
    platforms: tuple[str, ...] = ()
    load: bool = False
    push: bool = False
    builder: str | None = None
    no_cache: bool = False
    network: str | None = None
    build_args: tuple[tuple[str, str], ...] = ()
    labels: tuple[tuple[str, str], ...] = ()
    pull: bool = False
    tags: tuple[TagSpecification, ...] = ()
    compose_template: Path | None = None
    compose_file: Path | None = None

    @field_validator("build_args", "labels", mode="before")
    @classmethod
    def mapping_as_items(cls, value):
        if isinstance(value, Mapping):
            return tuple(value.items())
        return value


class DockerConfig(BaseModel):
    """Root configuration from docker.yml

    All tag, label and build argument values are strings. Quote values YAML
    would read as numbers or booleans, e.g. tags: ["2.0"], VERSION: "1".
    """
    name: str | None = None
    dockerfile: str | None = None
    files: list[str] = []
    tags: list[str] = []
    named_tags: dict[str, str] = {}
    labels: dict[str, str] = {}
    build_args: dict[str, str] = {}
    pull: bool = False
    no_cache: bool = False
    network: str | None = None
    buildx: bool = False
    platform: list[str] = []
    load: bool = False
    push: bool = False
    builder: str | None = None
    docker_compose_template: str = DEFAULT_COMPOSE_TEMPLATE
    docker_compose_file: str = DEFAULT_COMPOSE_FILE

    def resolve(self, project_dir: Path) -> BuildConfiguration:
        """Validate required items and resolve paths against the project directory."""
        if not self.name:
            raise MissingConfiguration()

        project_dir = project_dir.absolute()

        build_args = {}
        for key, value in self.build_args.items():
            expanded = expand_env_vars(value)
            if expanded is None:
                raise ConfigurationError(
                    f"Build argument '{key}' references an undefined environment variable: {value}"
                )
            build_args[key] = expanded

        tags = [TagSpecification.named(task, ref) for task, ref in self.named_tags.items()]
        tags += [TagSpecification(spec=tag) for tag in dict.fromkeys(self.tags)]

        return BuildConfiguration(
            name=self.name,
            dockerfile=project_dir / (self.dockerfile or DEFAULT_DOCKERFILE),
            files=tuple(project_dir / f for f in self.files),
            buildx=self.buildx,
            platforms=tuple(dict.fromkeys(self.platform)),
            load=self.load,
            push=self.push,
            builder=self.builder,
            no_cache=self.no_cache,
            network=self.network,
            build_args=build_args,
            labels=dict(self.labels),
            pull=self.pull,
            tags=tuple(tags),
            compose_template=project_dir / self.docker_compose_template,
            compose_file=project_dir / self.docker_compose_file,
        )


class ConfigLoader:
    """Loads and validates docker.yml files"""

    @staticmethod
    def load(path: Path) -> DockerConfig:
        """Load and validate a docker.yml file"""
        try:
            return parse_yaml_file_as(DockerConfig, path)
        except YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

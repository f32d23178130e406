from jinja2 import Environment, StrictUndefined

from dockertasks.config import BuildConfiguration
from dockertasks.tags import resolve_tags


def render_compose(config: BuildConfiguration, template: str) -> str:
    """Render a docker-compose template for the configured image.

    Available variables: name, tags (task name -> reference), build_args, labels.
    """
    env = Environment(undefined=StrictUndefined, keep_trailing_newline=True)
    tpl = env.from_string(template)

    tags = {identifier: tag.reference for identifier, tag in resolve_tags(config).items()}
    return tpl.render(
        name=config.name,
        tags=tags,
        build_args=dict(config.build_args),
        labels=dict(config.labels),
    )


def write_compose_file(config: BuildConfiguration) -> None:
    """Render config.compose_template into config.compose_file."""
    if config.compose_template is None or config.compose_file is None:
        raise ValueError("compose template and compose file must be resolved first")
    if not config.compose_template.exists():
        raise FileNotFoundError(f"Compose template not found: {config.compose_template}")

    config.compose_file.write_text(render_compose(config, config.compose_template.read_text()))

import logging

from pydantic import dataclasses

from dockertasks.config import BuildConfiguration, TagSpecification
from dockertasks.errors import DuplicateStepIdentifier

log = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class ResolvedTag:
    """A tag specification together with its step identifier and concrete reference"""
    identifier: str
    reference: str
    specification: TagSpecification


def resolve_tags(config: BuildConfiguration) -> dict[str, ResolvedTag]:
    """
    Resolve every tag of a configuration, keyed by step identifier.

    Keys keep the declaration order of the tags. Two specifications that
    derive the same identifier raise DuplicateStepIdentifier.
    """
    resolved: dict[str, ResolvedTag] = {}

    for spec in config.tags:
        identifier = spec.step_identifier()
        if identifier in resolved:
            raise DuplicateStepIdentifier(identifier)

        reference = spec.resolve_reference(config.name)
        log.debug("Tag '%s' -> %s (%s)", spec.display_name, reference, identifier)
        resolved[identifier] = ResolvedTag(identifier=identifier, reference=reference, specification=spec)

    return resolved

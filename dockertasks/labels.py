import re

from dockertasks.errors import ConfigurationError

LABEL_KEY_PATTERN = re.compile(r'^[a-z0-9.-]*$')


def validate_label_key(key: str) -> str:
    """Return the key unchanged, or raise ConfigurationError if it is not a valid label key."""
    if not LABEL_KEY_PATTERN.fullmatch(key):
        raise ConfigurationError(
            f"Docker label '{key}' contains illegal characters. "
            f"Label keys must only contain lowercase alphanumeric, `.`, or `-` characters "
            f"(must match {LABEL_KEY_PATTERN.pattern})."
        )
    return key

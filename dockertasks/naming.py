from dockertasks.errors import InvalidTagSpecification


def _reference_part(tag: str) -> str:
    first_at = tag.find("@")
    if first_at > 0:
        return tag[first_at + 1:]
    return tag


def compute_name(name: str, tag: str) -> str:
    """
    Compute the image reference a tag specification points to.

    A tag containing ':' or '/' (after an optional "task@" prefix) is a
    complete reference and replaces the name. A bare tag replaces the tag
    part of the name, if any.

    Examples:
        ("v1", "latest") -> "v1:latest"
        ("host:port/v1:1", "latest") -> "host:port/v1:latest"
        ("v1", "name@host/v2:2") -> "host/v2:2"
    """
    tag_value = _reference_part(tag)

    if ":" in tag_value or "/" in tag_value:
        return tag_value

    last_colon = name.rfind(":")
    last_slash = name.rfind("/")

    # a colon before the last slash belongs to host:port
    end_index = last_colon if last_colon > last_slash else len(name)

    return name[:end_index] + ":" + tag_value


def generate_tag_task_name(tag: str) -> str:
    """
    Derive the task name fragment for a tag specification.

    "latest" -> "Latest"
    "withTaskName@2.0" -> "WithTaskName"

    Raises InvalidTagSpecification if the task name part is empty or if a
    full reference is given without an explicit task name.
    """
    first_at = tag.find("@")

    if first_at > 0:
        task_name = tag[:first_at]
    elif first_at == 0 or not tag:
        raise InvalidTagSpecification(tag, f"Task name of docker tag '{tag}' must not be empty.")
    elif ":" in tag or "/" in tag:
        raise InvalidTagSpecification(tag, f"Docker tag '{tag}' must have a task name.")
    else:
        task_name = tag

    return task_name[0].upper() + task_name[1:]

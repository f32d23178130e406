import pytest

from dockertasks.errors import InvalidTagSpecification
from dockertasks.naming import compute_name, generate_tag_task_name

NAMES = ["v1", "v1:1", "host/v1", "host/v1:1", "host:port/v1", "host:port/v1:1"]


@pytest.mark.parametrize(
    "name, tag, expected",
    [
        ("v1", "latest", "v1:latest"),
        ("v1:1", "latest", "v1:latest"),
        ("host/v1", "latest", "host/v1:latest"),
        ("host/v1:1", "latest", "host/v1:latest"),
        ("host:port/v1", "latest", "host:port/v1:latest"),
        ("host:port/v1:1", "latest", "host:port/v1:latest"),
        ("v1", "name@latest", "v1:latest"),
        ("v1:1", "name@latest", "v1:latest"),
        ("host/v1", "name@latest", "host/v1:latest"),
        ("host/v1:1", "name@latest", "host/v1:latest"),
        ("host:port/v1", "name@latest", "host:port/v1:latest"),
        ("host:port/v1:1", "name@latest", "host:port/v1:latest"),
    ],
)
def test_compute_name_replaces_tag_part(name, tag, expected):
    """Test a bare tag replaces the tag part of the name, never the port"""
    assert compute_name(name, tag) == expected


@pytest.mark.parametrize("name", NAMES)
@pytest.mark.parametrize(
    "tag, expected",
    [
        ("name@v2:latest", "v2:latest"),
        ("name@host/v2", "host/v2"),
        ("name@host/v2:2", "host/v2:2"),
        ("name@host:port/v2:2", "host:port/v2:2"),
    ],
)
def test_compute_name_uses_full_reference(name, tag, expected):
    """Test a reference with repository or registry replaces the whole name"""
    assert compute_name(name, tag) == expected


@pytest.mark.parametrize("tag", ["v2:latest", "host/v2", "host:port/v2:2"])
def test_compute_name_without_task_name_returns_tag(tag):
    """Test a qualified reference without '@' is returned unchanged"""
    assert compute_name("v1:1", tag) == tag


def test_compute_name_is_pure():
    """Test calling twice yields the same result and does not depend on call order"""
    assert compute_name("host:port/v1:1", "latest") == compute_name("host:port/v1:1", "latest")


def test_generate_tag_task_name_is_pure():
    """Test calling twice yields the same result"""
    assert generate_tag_task_name("withTaskName@2.0") == generate_tag_task_name("withTaskName@2.0")
    assert generate_tag_task_name("latest") == generate_tag_task_name("latest") == "Latest"


def test_generate_tag_task_name_capitalizes():
    """Test only the first letter is uppercased"""
    assert generate_tag_task_name("latest") == "Latest"
    assert generate_tag_task_name("another") == "Another"
    assert generate_tag_task_name("alreadyUpper") == "AlreadyUpper"
    assert generate_tag_task_name("1.0") == "1.0"


def test_generate_tag_task_name_uses_part_before_at():
    """Test the task name is taken from before the first '@'"""
    assert generate_tag_task_name("withTaskName@2.0") == "WithTaskName"
    assert generate_tag_task_name("newImageName@host:port/img:latest") == "NewImageName"
    assert generate_tag_task_name("a@b@c") == "A"


def test_generate_tag_task_name_rejects_empty_task_name():
    """Test a leading '@' is rejected"""
    with pytest.raises(InvalidTagSpecification) as e:
        generate_tag_task_name("@x")

    assert e.value.spec == "@x"
    assert str(e.value) == "Task name of docker tag '@x' must not be empty."


def test_generate_tag_task_name_rejects_empty_tag():
    with pytest.raises(InvalidTagSpecification):
        generate_tag_task_name("")


@pytest.mark.parametrize("tag", ["host/v1", "v1:latest", "host:port/v1:1"])
def test_generate_tag_task_name_requires_task_name_for_reference(tag):
    """Test a full reference without '@' has no usable task name"""
    with pytest.raises(InvalidTagSpecification) as e:
        generate_tag_task_name(tag)

    assert str(e.value) == f"Docker tag '{tag}' must have a task name."

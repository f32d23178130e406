"""Errors raised while resolving a docker configuration."""


class DockerTasksError(Exception):
    """Base class for all configuration mistakes."""


class MissingConfiguration(DockerTasksError):
    def __init__(self, message: str = "name is a required docker configuration item."):
        super().__init__(message)


class InvalidTagSpecification(DockerTasksError):
    def __init__(self, spec: str, message: str):
        super().__init__(message)
        self.spec = spec


class DuplicateStepIdentifier(DockerTasksError):
    def __init__(self, identifier: str):
        super().__init__(f"Task name '{identifier}' already exists.")
        self.identifier = identifier


class ConfigurationError(DockerTasksError):
    pass

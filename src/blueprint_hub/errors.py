"""Exception hierarchy for the blueprint pipeline."""


class BlueprintHubError(Exception):
    """Base class for all errors raised by blueprint_hub."""


class InvalidPromptError(BlueprintHubError):
    """The prompt is missing or empty after normalization."""


class BlueprintGenerationError(BlueprintHubError):
    """The AI generator failed to produce a usable blueprint."""


class WorkspaceBuildError(BlueprintHubError):
    """The workspace root page could not be created; nothing was built."""


class TemplateNotFoundError(BlueprintHubError):
    """No curated template exists with the requested id."""

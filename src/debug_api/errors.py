"""Error types raised while building debug API requests.

The builder never logs or retries: every failure is raised to the caller,
which decides how to present it.
"""


class DebugApiError(Exception):
    """Base class for all debug API errors."""


class MissingRequiredParam(DebugApiError):
    """A path placeholder or required query param has no value."""

    def __init__(self, param: str, template: str | None = None):
        self.param = param
        self.template = template
        if template is not None:
            message = f"missing required parameter: path: {template}, param: {param}"
        else:
            message = f"missing required parameter: query param: {param}"
        super().__init__(message)


class InvalidParam(DebugApiError):
    """A transform stage rejected the value supplied for a parameter."""

    def __init__(self, param: str, cause: Exception):
        self.param = param
        self.cause = cause
        super().__init__(f"invalid parameter {param}: {cause}")


class TemplateError(DebugApiError):
    """A path template is malformed or disagrees with its declared params."""


class CatalogError(DebugApiError):
    """The endpoint catalog could not be loaded or queried."""


class ParamFormatError(ValueError):
    """Raised by parameter model transforms for malformed input."""

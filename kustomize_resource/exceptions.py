"""Exceptions related to kustomize-resource."""

__all__ = [
    "ResourceException",
    "InputException",
    "ParseException",
    "TypeMismatchError",
    "CardinalityError",
    "PatchParseError",
    "LoadException",
    "GeneratorException",
    "ContractViolation",
]


class ResourceException(Exception):
    """Generic base exception used for this library."""


class InputException(ResourceException):
    """Raised when the input documents are not formatted as expected."""


class ParseException(InputException):
    """Raised when raw content cannot be converted to a structured document."""


class TypeMismatchError(InputException):
    """Raised when the items of a List document are not a sequence."""

    def __init__(self, observed_type: str) -> None:
        super().__init__(f"items in List is type {observed_type}, expected array")
        self.observed_type = observed_type


class CardinalityError(InputException):
    """Raised when content did not contain exactly one resource."""

    def __init__(self, count: int, content: bytes) -> None:
        super().__init__(f"expected 1 resource, found {count} in {content!r}")
        self.count = count
        self.content = content


class PatchParseError(InputException):
    """Raised when a patch file contains content that could not be parsed."""

    def __init__(self, path: str, message: str) -> None:
        super().__init__(f"Patch file '{path}' encounters a format error: {message}")
        self.path = path


class LoadException(ResourceException):
    """Raised when a path cannot be resolved to content."""


class GeneratorException(ResourceException):
    """Raised when a ConfigMap or Secret cannot be generated."""


class ContractViolation(ResourceException):
    """Raised when a caller passes a missing document to the factory."""

"""Representation of a resource produced from a configuration document."""

from dataclasses import dataclass, field
from typing import Any

from .kunstructured import Kunstructured
from .manifest import GenerationBehavior, GeneratorArgs, GeneratorOptions

__all__ = [
    "Resource",
    "GenerationOptions",
]


@dataclass(frozen=True)
class GenerationOptions:
    """Describes how a generated resource was produced.

    Resources loaded from manifests have empty generation options. Downstream
    stages use the options of generated resources to decide on name suffix
    hashing and on merge or replace reconciliation.
    """

    args: GeneratorArgs | None = None
    """The generator arguments, only the behavior is meaningful here."""

    options: GeneratorOptions | None = None
    """The options shared by all generators."""

    @property
    def is_empty(self) -> bool:
        """Return True if the resource was not produced by a generator."""
        return self.args is None and self.options is None

    @property
    def behavior(self) -> GenerationBehavior:
        """Return how the resource is reconciled with an existing one."""
        if self.args is None:
            return GenerationBehavior.UNSPECIFIED
        return self.args.generation_behavior

    @property
    def needs_hash_suffix(self) -> bool:
        """Return True if a content hash should be appended to the name."""
        return self.args is not None and (
            self.options is None or not self.options.disable_name_suffix_hash
        )


@dataclass(frozen=True)
class Resource:
    """A document with optional generation metadata.

    A resource never wraps a List document, those are always expanded into
    their items first.
    """

    document: Kunstructured
    """The wrapped document."""

    generation_options: GenerationOptions = field(default_factory=GenerationOptions)
    """How the resource was generated, empty for loaded resources."""

    @property
    def kind(self) -> str:
        """Return the kind of the resource."""
        return self.document.kind

    @property
    def name(self) -> str:
        """Return the name of the resource."""
        return self.document.name

    @property
    def namespace(self) -> str | None:
        """Return the namespace of the resource."""
        return self.document.namespace

    @property
    def behavior(self) -> GenerationBehavior:
        """Return how the resource is reconciled with an existing one."""
        return self.generation_options.behavior

    @property
    def needs_hash_suffix(self) -> bool:
        """Return True if a content hash should be appended to the name."""
        return self.generation_options.needs_hash_suffix

    def get_field_value(self, path: str) -> Any:
        """Return the value of the document at the dotted path."""
        return self.document.get_field_value(path)

    def map(self) -> dict[str, Any]:
        """Return the raw map representation of the document."""
        return self.document.map()

    def __str__(self) -> str:
        """Return the kind and namespaced name as an id."""
        if self.namespace:
            return f"{self.kind}/{self.namespace}/{self.name}"
        return f"{self.kind}/{self.name}"

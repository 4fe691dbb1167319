"""Structured representation of a single configuration document.

`Kunstructured` is the interface the rest of the library uses to inspect a
document without depending on how it is stored. `KunstructuredFactory` is the
document store: it parses raw bytes or maps into documents and produces the
bodies of generated ConfigMaps and Secrets.

```python
from kustomize_resource.kunstructured import KunstructuredFactory

for doc in KunstructuredFactory().slice_from_bytes(content):
    print(f"Found object {doc.kind} {doc.name}")
```
"""

from abc import ABC, abstractmethod
import copy
import logging
from typing import Any

import yaml

from .exceptions import ParseException
from .generator import make_config_map, make_secret
from .loader import Loader
from .manifest import (
    LIST_KIND_SUFFIX,
    ConfigMapArgs,
    GeneratorOptions,
    SecretArgs,
)

__all__ = [
    "Kunstructured",
    "UnstructuredDocument",
    "KunstructuredFactory",
]

_LOGGER = logging.getLogger(__name__)


class Kunstructured(ABC):
    """A single configuration document."""

    @property
    @abstractmethod
    def kind(self) -> str:
        """Return the kind of the document."""

    @property
    @abstractmethod
    def api_version(self) -> str:
        """Return the apiVersion of the document."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the metadata.name of the document."""

    @property
    @abstractmethod
    def namespace(self) -> str | None:
        """Return the metadata.namespace of the document, if any."""

    @property
    @abstractmethod
    def labels(self) -> dict[str, str]:
        """Return the labels of the document."""

    @property
    @abstractmethod
    def annotations(self) -> dict[str, str]:
        """Return the annotations of the document."""

    @abstractmethod
    def get_field_value(self, path: str) -> Any:
        """Return the value at the dotted path e.g. `metadata.name`.

        Returns None when any element of the path is missing.
        """

    @abstractmethod
    def map(self) -> dict[str, Any]:
        """Return the raw map representation of the document."""

    @abstractmethod
    def set_map(self, value: dict[str, Any]) -> None:
        """Replace the contents of the document."""

    @abstractmethod
    def copy(self) -> "Kunstructured":
        """Return a deep copy of the document."""


class UnstructuredDocument(Kunstructured):
    """A document backed by a plain dictionary."""

    def __init__(self, obj: dict[str, Any]) -> None:
        """Initialize UnstructuredDocument."""
        self._obj = obj

    @property
    def kind(self) -> str:
        """Return the kind of the document."""
        return str(self._obj.get("kind") or "")

    @property
    def api_version(self) -> str:
        """Return the apiVersion of the document."""
        return str(self._obj.get("apiVersion") or "")

    def _metadata(self) -> dict[str, Any]:
        if isinstance(metadata := self._obj.get("metadata"), dict):
            return metadata
        return {}

    @property
    def name(self) -> str:
        """Return the metadata.name of the document."""
        return str(self._metadata().get("name") or "")

    @property
    def namespace(self) -> str | None:
        """Return the metadata.namespace of the document, if any."""
        return self._metadata().get("namespace")

    @property
    def labels(self) -> dict[str, str]:
        """Return the labels of the document."""
        return self._metadata().get("labels") or {}

    @property
    def annotations(self) -> dict[str, str]:
        """Return the annotations of the document."""
        return self._metadata().get("annotations") or {}

    def get_field_value(self, path: str) -> Any:
        """Return the value at the dotted path e.g. `metadata.name`."""
        value: Any = self._obj
        for key in path.split("."):
            if not isinstance(value, dict) or key not in value:
                return None
            value = value[key]
        return value

    def map(self) -> dict[str, Any]:
        """Return the raw map representation of the document."""
        return self._obj

    def set_map(self, value: dict[str, Any]) -> None:
        """Replace the contents of the document."""
        self._obj = value

    def copy(self) -> "UnstructuredDocument":
        """Return a deep copy of the document."""
        return UnstructuredDocument(copy.deepcopy(self._obj))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UnstructuredDocument):
            return NotImplemented
        return self._obj == other._obj

    def __repr__(self) -> str:
        return f"UnstructuredDocument({self._obj!r})"


def _validate(obj: dict[str, Any]) -> None:
    """Check the minimum fields needed to identify a document."""
    if not (kind := obj.get("kind")):
        raise ParseException(f"missing kind in object {obj}")
    if str(kind).endswith(LIST_KIND_SUFFIX):
        return
    if not isinstance(metadata := obj.get("metadata"), dict) or not metadata.get(
        "name"
    ):
        raise ParseException(f"missing metadata.name in object {obj}")


class KunstructuredFactory:
    """Creates Kunstructured documents from raw content."""

    def from_map(self, obj: dict[str, Any]) -> Kunstructured:
        """Return a document wrapping the map."""
        return UnstructuredDocument(obj)

    def slice_from_bytes(self, content: bytes) -> list[Kunstructured]:
        """Parse a stream of YAML or JSON documents.

        Empty documents in the stream are skipped.
        """
        result: list[Kunstructured] = []
        try:
            for doc in yaml.safe_load_all(content):
                if doc is None or doc == {}:
                    continue
                if not isinstance(doc, dict):
                    raise ParseException(
                        f"Invalid document is type {type(doc).__name__}, expected object: {doc!r}"
                    )
                _validate(doc)
                result.append(UnstructuredDocument(doc))
        except yaml.YAMLError as err:
            raise ParseException(f"Unable to parse document: {err}") from err
        _LOGGER.debug("Parsed %d documents", len(result))
        return result

    def make_config_map(
        self, loader: Loader, options: GeneratorOptions | None, args: ConfigMapArgs
    ) -> Kunstructured:
        """Return a generated ConfigMap document."""
        return UnstructuredDocument(make_config_map(loader, options, args))

    def make_secret(
        self, loader: Loader, options: GeneratorOptions | None, args: SecretArgs
    ) -> Kunstructured:
        """Return a generated Secret document."""
        return UnstructuredDocument(make_secret(loader, options, args))

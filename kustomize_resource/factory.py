"""Library for constructing resources from configuration documents.

The factory is the entry point for turning raw content into a flat list of
resources. Any `List` documents are expanded into their items, including
nested lists, so that every returned resource wraps a single object:

```python
from kustomize_resource.factory import ResourceFactory
from kustomize_resource.kunstructured import KunstructuredFactory

factory = ResourceFactory(KunstructuredFactory())
for resource in factory.slice_from_bytes(content):
    print(f"Found resource {resource}")
```

Patch files referenced by a kustomization are loaded and flattened together:

```python
from kustomize_resource.loader import FileLoader

resources = factory.slice_from_patches(
    FileLoader(Path("/path/to/kustomization")),
    ["patch-deployment.yaml", "patch-service.yaml"],
)
```
"""

from collections import deque
from collections.abc import Iterable
import logging
from typing import Any

import yaml

from .exceptions import (
    CardinalityError,
    ContractViolation,
    InputException,
    PatchParseError,
    TypeMismatchError,
)
from .kunstructured import Kunstructured, KunstructuredFactory
from .loader import Loader
from .manifest import (
    LIST_KIND_SUFFIX,
    ConfigMapArgs,
    GeneratorArgs,
    GeneratorOptions,
    SecretArgs,
)
from .resource import GenerationOptions, Resource

__all__ = [
    "ResourceFactory",
]

_LOGGER = logging.getLogger(__name__)

ITEMS_FIELD = "items"


class ResourceFactory:
    """Makes instances of Resource."""

    def __init__(self, kf: KunstructuredFactory) -> None:
        """Initialize ResourceFactory."""
        self._kf = kf

    def from_map(self, obj: dict[str, Any]) -> Resource:
        """Return a new Resource for the map."""
        return Resource(self._kf.from_map(obj))

    def from_map_and_option(
        self,
        obj: dict[str, Any],
        args: GeneratorArgs | None,
        options: GeneratorOptions | None,
    ) -> Resource:
        """Return a new Resource for the map with the generation options."""
        return Resource(
            self._kf.from_map(obj),
            GenerationOptions(args=args, options=options),
        )

    def from_kunstructured(self, document: Kunstructured | None) -> Resource:
        """Return a new Resource wrapping the document."""
        if document is None:
            raise ContractViolation("Kunstructured document must not be None")
        return Resource(document)

    def slice_from_patches(
        self, loader: Loader, paths: Iterable[str]
    ) -> list[Resource]:
        """Return the resources of all patch files referenced by a kustomization.

        A failure in any file aborts loading the remaining files.
        """
        result: list[Resource] = []
        for path in paths:
            content = loader.load(path)
            try:
                resources = self.slice_from_bytes(content)
            except InputException as err:
                raise PatchParseError(path, str(err)) from err
            _LOGGER.debug("Loaded %d resources from patch %s", len(resources), path)
            result.extend(resources)
        return result

    def from_bytes(self, content: bytes) -> Resource:
        """Return the single Resource in the content."""
        result = self.slice_from_bytes(content)
        if len(result) != 1:
            raise CardinalityError(len(result), content)
        return result[0]

    def slice_from_bytes(self, content: bytes) -> list[Resource]:
        """Return the resources in the content, expanding any List documents.

        Items of a List are appended to the end of the queue of documents
        waiting to be processed, so nested lists are expanded breadth first.
        """
        queue = deque(self._kf.slice_from_bytes(content))
        result: list[Resource] = []
        while queue:
            document = queue.popleft()
            if not document.kind.endswith(LIST_KIND_SUFFIX):
                result.append(self.from_kunstructured(document))
                continue
            items = document.map().get(ITEMS_FIELD)
            if items is None:
                _LOGGER.debug("Skipping %s with no items", document.kind)
                continue
            if not isinstance(items, list):
                raise TypeMismatchError(type(items).__name__)
            for item in items:
                item_yaml = yaml.safe_dump(item, sort_keys=False).encode()
                queue.extend(self._kf.slice_from_bytes(item_yaml))
        return result

    def make_config_map(
        self, loader: Loader, options: GeneratorOptions | None, args: ConfigMapArgs
    ) -> Resource:
        """Return a new Resource for a generated ConfigMap."""
        document = self._kf.make_config_map(loader, options, args)
        return Resource(
            document,
            GenerationOptions(GeneratorArgs(behavior=args.behavior), options),
        )

    def make_secret(
        self, loader: Loader, options: GeneratorOptions | None, args: SecretArgs
    ) -> Resource:
        """Return a new Resource for a generated Secret."""
        document = self._kf.make_secret(loader, options, args)
        return Resource(
            document,
            GenerationOptions(GeneratorArgs(behavior=args.behavior), options),
        )

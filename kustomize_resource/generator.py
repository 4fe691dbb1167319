"""Library for generating ConfigMap and Secret documents.

A generator combines literal values, files and env files into the data of a
single object. File and env sources are read through a `Loader` so they are
resolved relative to the kustomization root:

```python
from kustomize_resource import generator
from kustomize_resource.loader import FileLoader
from kustomize_resource.manifest import ConfigMapArgs

doc = generator.make_config_map(
    FileLoader(Path("/path/to/kustomization")),
    None,
    ConfigMapArgs(name="app-config", literals=["LOG_LEVEL=debug"]),
)
```
"""

import base64
from collections.abc import Iterable
import logging
import os
from pathlib import PurePosixPath
import re
from typing import Any

from .exceptions import GeneratorException, LoadException
from .loader import Loader
from .manifest import (
    CONFIG_MAP_KIND,
    SECRET_KIND,
    ConfigMapArgs,
    GeneratorArgs,
    GeneratorOptions,
    SecretArgs,
)

__all__ = [
    "make_config_map",
    "make_secret",
]

_LOGGER = logging.getLogger(__name__)

API_VERSION = "v1"

# Keys of ConfigMap and Secret data must be valid file names
_KEY_RE = re.compile(r"^[-._a-zA-Z0-9]+$")


def _validate_key(key: str) -> None:
    """Raise an error if the key is not usable as a data key."""
    if not _KEY_RE.match(key):
        raise GeneratorException(
            f"Invalid key '{key}': must consist of alphanumeric characters, '-', '_' or '.'"
        )


def _remove_quotes(value: str) -> str:
    """Strip a single pair of matching surrounding quotes."""
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def _parse_literal(source: str) -> tuple[str, bytes]:
    """Parse a literal source in the form `key=value`."""
    key, sep, value = source.partition("=")
    if not sep or not key:
        raise GeneratorException(
            f"Invalid literal source '{source}', expected key=value"
        )
    return key, _remove_quotes(value).encode()


def _load(loader: Loader, path: str) -> bytes:
    """Load the path wrapping failures as a generator error."""
    try:
        return loader.load(path)
    except LoadException as err:
        raise GeneratorException(f"Unable to load source '{path}': {err}") from err


def _parse_file(loader: Loader, source: str) -> tuple[str, bytes]:
    """Parse a file source in the form `path` or `key=path`."""
    key, sep, path = source.partition("=")
    if not sep:
        path = source
        key = PurePosixPath(source).name
    if not key or not path:
        raise GeneratorException(
            f"Invalid file source '{source}', expected path or key=path"
        )
    return key, _load(loader, path)


def _parse_env_file(loader: Loader, path: str) -> Iterable[tuple[str, bytes]]:
    """Parse the `KEY=VALUE` lines of an env file."""
    content = _load(loader, path)
    try:
        text = content.decode("utf-8")
    except UnicodeDecodeError as err:
        raise GeneratorException(f"Env file '{path}' is not valid utf-8") from err
    for lineno, line in enumerate(text.splitlines(), start=1):
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        key, sep, value = line.partition("=")
        if any(c.isspace() for c in key):
            raise GeneratorException(
                f"Invalid env file '{path}' line {lineno}: key '{key}' may not contain whitespace"
            )
        if not sep:
            # A bare key takes its value from the current environment
            value = os.environ.get(key, "")
        yield key, value.encode()


def _collect_data(loader: Loader, args: GeneratorArgs) -> dict[str, bytes]:
    """Return the combined data of all sources in the arguments."""
    pairs: list[tuple[str, bytes]] = []
    for literal in args.literals:
        pairs.append(_parse_literal(literal))
    for file_source in args.files:
        pairs.append(_parse_file(loader, file_source))
    for env_path in args.envs:
        pairs.extend(_parse_env_file(loader, env_path))

    data: dict[str, bytes] = {}
    for key, value in pairs:
        _validate_key(key)
        if key in data:
            raise GeneratorException(
                f"cannot add key {key}, another key by that name already exists"
            )
        data[key] = value
    return data


def _make_object(
    kind: str, options: GeneratorOptions | None, args: GeneratorArgs
) -> dict[str, Any]:
    """Return the skeleton of a generated object with its metadata."""
    if not args.name:
        raise GeneratorException(f"A {kind} generator must have a name: {args}")
    metadata: dict[str, Any] = {"name": args.name}
    if args.namespace:
        metadata["namespace"] = args.namespace
    if options is not None:
        if options.labels:
            metadata["labels"] = dict(options.labels)
        if options.annotations:
            metadata["annotations"] = dict(options.annotations)
    obj: dict[str, Any] = {
        "apiVersion": API_VERSION,
        "kind": kind,
        "metadata": metadata,
    }
    if options is not None and options.immutable:
        obj["immutable"] = True
    return obj


def make_config_map(
    loader: Loader, options: GeneratorOptions | None, args: ConfigMapArgs
) -> dict[str, Any]:
    """Generate a ConfigMap document from the arguments."""
    obj = _make_object(CONFIG_MAP_KIND, options, args)
    data: dict[str, str] = {}
    binary_data: dict[str, str] = {}
    for key, value in _collect_data(loader, args).items():
        try:
            data[key] = value.decode("utf-8")
        except UnicodeDecodeError:
            binary_data[key] = base64.b64encode(value).decode()
    if data:
        obj["data"] = data
    if binary_data:
        obj["binaryData"] = binary_data
    _LOGGER.debug(
        "Generated ConfigMap %s with %d keys", args.name, len(data) + len(binary_data)
    )
    return obj


def make_secret(
    loader: Loader, options: GeneratorOptions | None, args: SecretArgs
) -> dict[str, Any]:
    """Generate a Secret document from the arguments."""
    obj = _make_object(SECRET_KIND, options, args)
    obj["type"] = args.type
    data = {
        key: base64.b64encode(value).decode()
        for key, value in _collect_data(loader, args).items()
    }
    if data:
        obj["data"] = data
    _LOGGER.debug("Generated Secret %s with %d keys", args.name, len(data))
    return obj

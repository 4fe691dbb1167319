"""Representation of the generator settings found in a kustomization.

These objects mirror the `configMapGenerator`, `secretGenerator` and
`generatorOptions` fields of a kustomization file and may be parsed directly
from the raw document:

```python
from kustomize_resource.manifest import ConfigMapArgs, GeneratorOptions

args = ConfigMapArgs.from_dict(doc["configMapGenerator"][0])
options = GeneratorOptions.from_dict(doc.get("generatorOptions", {}))
```
"""

from dataclasses import dataclass, field
from enum import Enum
import logging
from typing import Any, Optional

from mashumaro import DataClassDictMixin, field_options
from mashumaro.config import BaseConfig

from .exceptions import InputException

__all__ = [
    "GenerationBehavior",
    "GeneratorOptions",
    "GeneratorArgs",
    "ConfigMapArgs",
    "SecretArgs",
    "CONFIG_MAP_KIND",
    "SECRET_KIND",
    "LIST_KIND_SUFFIX",
    "parse_generators",
]

_LOGGER = logging.getLogger(__name__)


CONFIG_MAP_KIND = "ConfigMap"
SECRET_KIND = "Secret"
SECRET_TYPE_OPAQUE = "Opaque"

# Any kind with this suffix is a container for other documents under `items`
LIST_KIND_SUFFIX = "List"


class GenerationBehavior(str, Enum):
    """How a generated object is reconciled with an existing one of the same name."""

    UNSPECIFIED = "unspecified"
    CREATE = "create"
    MERGE = "merge"
    REPLACE = "replace"

    @classmethod
    def parse(cls, value: str | None) -> "GenerationBehavior":
        """Return the behavior for the string value, or UNSPECIFIED."""
        if not value:
            return cls.UNSPECIFIED
        try:
            return cls(value)
        except ValueError:
            _LOGGER.debug("Unknown generation behavior '%s'", value)
            return cls.UNSPECIFIED


@dataclass
class BaseArgs(DataClassDictMixin):
    """Base class for generator settings."""

    class Config(BaseConfig):
        omit_none = True
        serialize_by_alias = True


@dataclass
class GeneratorOptions(BaseArgs):
    """Options that change how all generated objects are presented."""

    labels: Optional[dict[str, str]] = None
    """Labels added to every generated object."""

    annotations: Optional[dict[str, str]] = None
    """Annotations added to every generated object."""

    disable_name_suffix_hash: bool = field(
        metadata=field_options(alias="disableNameSuffixHash"), default=False
    )
    """Do not append a content hash to the name of generated objects."""

    immutable: bool = False
    """Mark the generated objects as immutable."""


@dataclass
class GeneratorArgs(BaseArgs):
    """Arguments common to ConfigMap and Secret generators."""

    name: Optional[str] = None
    """The name of the generated object."""

    namespace: Optional[str] = None
    """The namespace of the generated object."""

    behavior: Optional[str] = None
    """One of create, merge or replace."""

    literals: list[str] = field(default_factory=list)
    """Literal sources in the form `key=value`."""

    files: list[str] = field(default_factory=list)
    """File sources in the form `path` or `key=path`."""

    envs: list[str] = field(default_factory=list)
    """Paths to files containing `KEY=VALUE` lines."""

    env: Optional[str] = field(metadata={"serialize": "omit"}, default=None)
    """Single env file, an older spelling of `envs`."""

    def __post_init__(self) -> None:
        """Fold the single env file into the list of env files."""
        if self.env and self.env not in self.envs:
            self.envs = [self.env, *self.envs]

    @property
    def generation_behavior(self) -> GenerationBehavior:
        """Return the parsed behavior."""
        return GenerationBehavior.parse(self.behavior)


@dataclass
class ConfigMapArgs(GeneratorArgs):
    """Arguments for generating a ConfigMap."""


@dataclass
class SecretArgs(GeneratorArgs):
    """Arguments for generating a Secret."""

    type: str = SECRET_TYPE_OPAQUE
    """The type of the Secret."""


def parse_generators(
    doc: dict[str, Any],
) -> tuple[GeneratorOptions, list[ConfigMapArgs], list[SecretArgs]]:
    """Parse the generator fields of a raw kustomization document."""
    try:
        options = GeneratorOptions.from_dict(doc.get("generatorOptions") or {})
        config_maps = [
            ConfigMapArgs.from_dict(entry)
            for entry in doc.get("configMapGenerator") or ()
        ]
        secrets = [
            SecretArgs.from_dict(entry) for entry in doc.get("secretGenerator") or ()
        ]
    except (ValueError, TypeError) as err:
        raise InputException(f"Invalid generator in kustomization: {err}") from err
    valid_behaviors = {
        b.value for b in GenerationBehavior if b != GenerationBehavior.UNSPECIFIED
    }
    for args in [*config_maps, *secrets]:
        if args.behavior and args.behavior not in valid_behaviors:
            raise InputException(
                f"Invalid behavior '{args.behavior}' for generator {args.name}, "
                "must be one of create, merge or replace"
            )
    return options, config_maps, secrets

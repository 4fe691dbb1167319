"""Helpers for writing resources produced by the command line tool."""

from collections.abc import Iterable

import yaml

from kustomize_resource.resource import Resource


def write_resources(resources: Iterable[Resource], output_file: str) -> None:
    """Write the resources as a stream of YAML documents."""
    content = yaml.dump_all(
        [resource.map() for resource in resources],
        sort_keys=False,
        explicit_start=True,
    )
    with open(output_file, "w") as file:
        file.write(content)

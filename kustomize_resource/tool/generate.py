"""Kustomize-resource generate action."""

from argparse import ArgumentParser, _SubParsersAction as SubParsersAction
import logging
import pathlib
from typing import cast

import yaml

from kustomize_resource.exceptions import InputException
from kustomize_resource.factory import ResourceFactory
from kustomize_resource.kunstructured import KunstructuredFactory
from kustomize_resource.loader import FileLoader
from kustomize_resource.manifest import parse_generators
from kustomize_resource.resource import Resource

from .output import write_resources

_LOGGER = logging.getLogger(__name__)


class GenerateAction:
    """Kustomize-resource generate action."""

    @classmethod
    def register(
        cls, subparsers: SubParsersAction  # type: ignore[type-arg]
    ) -> ArgumentParser:
        """Register the subparser commands."""
        args = cast(
            ArgumentParser,
            subparsers.add_parser(
                "generate",
                help="Generate ConfigMaps and Secrets from a kustomization",
                description="""Reads the configMapGenerator, secretGenerator
                    and generatorOptions fields of a kustomization file and
                    writes the generated objects as YAML documents.""",
            ),
        )
        args.add_argument(
            "kustomization",
            type=pathlib.Path,
            help="Path to the kustomization file",
        )
        args.add_argument(
            "--root",
            type=pathlib.Path,
            default=None,
            help=(
                "Directory that sources must be within, defaults to the "
                "kustomization directory"
            ),
        )
        args.add_argument(
            "--output-file",
            type=str,
            default="/dev/stdout",
            help="Output file for the results of the command",
        )
        args.set_defaults(cls=cls)
        return args

    def run(  # type: ignore[no-untyped-def]
        self,
        kustomization: pathlib.Path,
        root: pathlib.Path | None,
        output_file: str,
        **kwargs,  # pylint: disable=unused-argument
    ) -> None:
        """Action implementation."""
        loader = FileLoader(root or kustomization.parent)
        content = loader.load(str(kustomization.resolve()))
        try:
            doc = yaml.safe_load(content)
        except yaml.YAMLError as err:
            raise InputException(
                f"Unable to parse kustomization {kustomization}: {err}"
            ) from err
        if not isinstance(doc, dict):
            raise InputException(f"Invalid kustomization {kustomization}: {doc}")

        options, config_maps, secrets = parse_generators(doc)
        factory = ResourceFactory(KunstructuredFactory())
        resources: list[Resource] = []
        for config_map_args in config_maps:
            resources.append(factory.make_config_map(loader, options, config_map_args))
        for secret_args in secrets:
            resources.append(factory.make_secret(loader, options, secret_args))
        _LOGGER.info("Generated %d resources from %s", len(resources), kustomization)
        write_resources(resources, output_file)

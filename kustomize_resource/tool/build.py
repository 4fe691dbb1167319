"""Kustomize-resource build action."""

from argparse import ArgumentParser, _SubParsersAction as SubParsersAction
import logging
import pathlib
from typing import cast

from kustomize_resource.factory import ResourceFactory
from kustomize_resource.kunstructured import KunstructuredFactory
from kustomize_resource.loader import FileLoader

from .output import write_resources

_LOGGER = logging.getLogger(__name__)


class BuildAction:
    """Kustomize-resource build action."""

    @classmethod
    def register(
        cls, subparsers: SubParsersAction  # type: ignore[type-arg]
    ) -> ArgumentParser:
        """Register the subparser commands."""
        args = cast(
            ArgumentParser,
            subparsers.add_parser(
                "build",
                help="Flatten manifest files into a list of resources",
                description="""Reads each file in order, expands any List
                    documents into their items and writes the resulting
                    resources as a stream of YAML documents.""",
            ),
        )
        args.add_argument(
            "paths", nargs="+", type=str, help="Manifest files, relative to the root"
        )
        args.add_argument(
            "--root",
            type=pathlib.Path,
            default=pathlib.Path("."),
            help="Directory that all files must be within",
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
        paths: list[str],
        root: pathlib.Path,
        output_file: str,
        **kwargs,  # pylint: disable=unused-argument
    ) -> None:
        """Action implementation."""
        loader = FileLoader(root)
        factory = ResourceFactory(KunstructuredFactory())
        resources = factory.slice_from_patches(loader, paths)
        _LOGGER.info("Built %d resources from %d files", len(resources), len(paths))
        write_resources(resources, output_file)

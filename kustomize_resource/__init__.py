"""
Library for turning kustomize manifests into a flat list of resources.

The main entry point is `kustomize_resource.factory.ResourceFactory` which
expands `List` documents, aggregates patch files and wraps generated
ConfigMaps and Secrets with the metadata needed to regenerate them.
"""

__all__ = [
    "factory",
    "resource",
    "kunstructured",
    "loader",
    "generator",
    "manifest",
    "exceptions",
    # Note this is exposed for CLI documentation, not to be used as a library
    "tool",
]

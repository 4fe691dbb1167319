"""Command line tool for flattening and generating kustomize resources."""

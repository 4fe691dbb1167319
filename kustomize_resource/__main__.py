"""Run the kustomize-resource command line tool with `python -m`."""

from kustomize_resource.tool.kustomize_resource import main

if __name__ == "__main__":
    main()

"""Tests for the generator argument library."""

import pytest
import yaml

from kustomize_resource.exceptions import InputException
from kustomize_resource.manifest import (
    ConfigMapArgs,
    GenerationBehavior,
    GeneratorOptions,
    SecretArgs,
    parse_generators,
)

KUSTOMIZATION = """---
apiVersion: kustomize.config.k8s.io/v1beta1
kind: Kustomization
generatorOptions:
  disableNameSuffixHash: true
  labels:
    app: podinfo
configMapGenerator:
- name: podinfo-values
  behavior: merge
  files:
  - values.yaml
- name: podinfo-env
  env: podinfo.env
  envs:
  - extra.env
secretGenerator:
- name: podinfo-creds
  type: kubernetes.io/basic-auth
  literals:
  - username=admin
"""


def test_parse_generators() -> None:
    """Test parsing the generator fields of a kustomization."""
    options, config_maps, secrets = parse_generators(yaml.safe_load(KUSTOMIZATION))
    assert options == GeneratorOptions(
        labels={"app": "podinfo"}, disable_name_suffix_hash=True
    )
    assert config_maps == [
        ConfigMapArgs(name="podinfo-values", behavior="merge", files=["values.yaml"]),
        ConfigMapArgs(
            name="podinfo-env", env="podinfo.env", envs=["podinfo.env", "extra.env"]
        ),
    ]
    assert config_maps[0].generation_behavior == GenerationBehavior.MERGE
    assert secrets == [
        SecretArgs(
            name="podinfo-creds",
            type="kubernetes.io/basic-auth",
            literals=["username=admin"],
        )
    ]


def test_parse_generators_empty() -> None:
    """Test a kustomization without generators."""
    options, config_maps, secrets = parse_generators({"resources": ["a.yaml"]})
    assert options == GeneratorOptions()
    assert config_maps == []
    assert secrets == []


def test_parse_generators_invalid() -> None:
    """Test a generator with an invalid field."""
    with pytest.raises(InputException, match="Invalid generator"):
        parse_generators({"configMapGenerator": [{"name": "a", "literals": 5}]})


@pytest.mark.parametrize("generator", ["configMapGenerator", "secretGenerator"])
@pytest.mark.parametrize("behavior", ["bogus", "unspecified", "Merge"])
def test_parse_generators_invalid_behavior(generator: str, behavior: str) -> None:
    """Test a generator with an unknown behavior is rejected."""
    with pytest.raises(InputException, match=f"Invalid behavior '{behavior}'"):
        parse_generators({generator: [{"name": "a", "behavior": behavior}]})


@pytest.mark.parametrize("behavior", ["create", "merge", "replace"])
def test_parse_generators_behavior(behavior: str) -> None:
    """Test a generator with a known behavior is accepted."""
    _, config_maps, _ = parse_generators(
        {"configMapGenerator": [{"name": "a", "behavior": behavior}]}
    )
    assert config_maps[0].generation_behavior == GenerationBehavior(behavior)


def test_env_folded_once() -> None:
    """Test the single env file is not duplicated."""
    args = ConfigMapArgs(name="a", env="a.env", envs=["a.env"])
    assert args.envs == ["a.env"]


def test_options_to_dict() -> None:
    """Test options serialize with kustomization field names."""
    data = GeneratorOptions(disable_name_suffix_hash=True).to_dict()
    assert data["disableNameSuffixHash"] is True
    assert "labels" not in data


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("create", GenerationBehavior.CREATE),
        ("merge", GenerationBehavior.MERGE),
        ("replace", GenerationBehavior.REPLACE),
        ("unspecified", GenerationBehavior.UNSPECIFIED),
        ("", GenerationBehavior.UNSPECIFIED),
        (None, GenerationBehavior.UNSPECIFIED),
        ("upsert", GenerationBehavior.UNSPECIFIED),
    ],
)
def test_generation_behavior(value: str | None, expected: GenerationBehavior) -> None:
    """Test parsing generation behaviors."""
    assert GenerationBehavior.parse(value) == expected

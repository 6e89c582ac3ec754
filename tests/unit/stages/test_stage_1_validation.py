"""
Unit-тесты для Stage 1: Validation.
"""

import pytest

from contracts.manifest_dto import Manifest
from manifest_engine.domain.exceptions import StructuralError
from manifest_engine.stages.stage_1_validation import ManifestValidator


@pytest.fixture
def validator():
    return ManifestValidator(strict=False)


@pytest.mark.parametrize("data", [{"numero_escale": "E1"}, "manifest", 42, None])
def test_root_must_be_array(validator, data):
    with pytest.raises(StructuralError, match="array"):
        validator.validate(data)


def test_empty_array_rejected(validator):
    with pytest.raises(StructuralError, match="empty"):
        validator.validate([])


def test_first_element_must_be_object(validator):
    with pytest.raises(StructuralError, match="object"):
        validator.validate(["not a manifest"])


def test_first_element_requires_identity_key(validator):
    with pytest.raises(StructuralError, match="numero_escale"):
        validator.validate([{"nom_navire": "MSC ANNA"}])


@pytest.mark.parametrize("first", [
    {"numero_escale": "E1"},
    {"connaissements": []},
])
def test_either_identity_key_is_enough(validator, first):
    manifests = validator.validate([first])
    assert len(manifests) == 1
    assert isinstance(manifests[0], Manifest)


def test_only_first_element_sampled_by_default(validator):
    manifests = validator.validate([
        {"numero_escale": "E1"},
        {"nom_navire": "NO KEYS"},
        "garbage",
    ])

    assert len(manifests) == 3
    assert manifests[1].nom_navire == "NO KEYS"
    # Не-объект превращается в пустой манифест и даст 0 строк
    assert manifests[2] == Manifest()


def test_strict_mode_checks_every_element():
    validator = ManifestValidator(strict=True)
    with pytest.raises(StructuralError, match=r"\[1\]"):
        validator.validate([{"numero_escale": "E1"}, {"nom_navire": "NO KEYS"}])


def test_error_names_component(validator):
    with pytest.raises(StructuralError) as exc_info:
        validator.validate([])
    assert exc_info.value.component == "ManifestValidator"
    assert "Component: ManifestValidator" in str(exc_info.value)

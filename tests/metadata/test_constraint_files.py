# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Constraint declarations loaded from YAML/JSON files."""

import json
import textwrap

import pytest

from fieldguard.config import CONSTRAINT_FILE_ENV, load_settings, reload_settings
from fieldguard.exceptions import ConfigurationError, ValidationFailure
from fieldguard.metadata import get_metadata, is_validatable, unregister, validatable
from fieldguard.metadata.files import (
    iter_constraint_candidates,
    load_constraint_document,
    load_constraint_file,
    locate_constraint_file,
    resolve_type,
)
from fieldguard.validation import ArgumentValidator, Length, Pattern, Required


class Shipment:
    """Declared in files only; carries no annotations of its own."""

    def __init__(self, code, weight):
        self.code = code
        self.weight = weight


class Outer:
    class Inner:
        pass


class Account:
    """Base type whose fields are declared in a constraint file."""

    code: str

    def __init__(self, code):
        self.code = code


@validatable
class SavingsAccount(Account):
    rate: str

    def __init__(self, code, rate="1"):
        super().__init__(code)
        self.rate = rate


YAML_DOCUMENT = textwrap.dedent(
    f"""
    types:
      - type: {__name__}:Shipment
        fields:
          code:
            - required
            - pattern: {{regexp: "^[A-Z]{{3}}$", message: "bad code"}}
          weight:
            - non_zero: {{}}
            - length: {{max: 4}}
    """
)


def test_yaml_file_registers_types(tmp_path):
    path = tmp_path / "constraints.yaml"
    path.write_text(YAML_DOCUMENT)

    [metadata] = load_constraint_file(path)

    assert metadata.type is Shipment
    assert is_validatable(Shipment)
    assert get_metadata(Shipment).get_field("code").constraints == (
        Required(),
        Pattern(regexp="^[A-Z]{3}$", message="bad code"),
    )
    assert get_metadata(Shipment).get_field("weight").constraints[1] == Length(max=4)


def test_file_declared_constraints_are_enforced(tmp_path):
    path = tmp_path / "constraints.yaml"
    path.write_text(YAML_DOCUMENT)
    load_constraint_file(path)
    validator = ArgumentValidator()

    validator.validate([Shipment("ABC", "12")])
    with pytest.raises(ValidationFailure) as exc:
        validator.validate([Shipment("abc", "12")])
    assert exc.value.description == "bad code"

    with pytest.raises(ValidationFailure) as exc:
        validator.validate([Shipment("ABC", 0)])
    assert exc.value.description == "weight must not be zero"


def test_json_file_is_supported(tmp_path):
    path = tmp_path / "fieldguard.json"
    path.write_text(
        json.dumps({"types": [{"type": f"{__name__}.Shipment", "fields": {"code": ["required"]}}]})
    )

    load_constraint_file(path)

    assert get_metadata(Shipment).get_field("code").constraints == (Required(),)


def test_locate_constraint_file_prefers_explicit(tmp_path):
    path = tmp_path / "custom.yaml"
    path.write_text("types: []\n")

    assert locate_constraint_file(path) == path


def test_locate_constraint_file_missing_explicit_path(tmp_path):
    with pytest.raises(ConfigurationError):
        locate_constraint_file(tmp_path / "absent.yaml")


def test_locate_constraint_file_uses_env_override(tmp_path, monkeypatch):
    override = tmp_path / "override.yml"
    override.write_text("types: []\n")
    monkeypatch.setenv(CONSTRAINT_FILE_ENV, str(override))
    reload_settings()

    assert locate_constraint_file() == override
    assert list(iter_constraint_candidates(tmp_path))[0] == override


def test_locate_constraint_file_uses_default_candidates(tmp_path, monkeypatch):
    config_root = tmp_path / "config"
    (config_root / "fieldguard").mkdir(parents=True)
    default_file = config_root / "fieldguard" / "fieldguard.yaml"
    default_file.write_text("types: []\n")
    monkeypatch.delenv(CONSTRAINT_FILE_ENV, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_root))
    monkeypatch.chdir(tmp_path)
    reload_settings()

    assert locate_constraint_file() == default_file


def test_locate_constraint_file_rejects_multiple_defaults(tmp_path, monkeypatch):
    monkeypatch.delenv(CONSTRAINT_FILE_ENV, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.chdir(tmp_path)
    reload_settings()
    (tmp_path / "fieldguard.yaml").write_text("types: []\n")
    (tmp_path / "fieldguard.json").write_text('{"types": []}')

    with pytest.raises(ConfigurationError):
        locate_constraint_file()


def test_no_constraint_file_loads_nothing(tmp_path, monkeypatch):
    monkeypatch.delenv(CONSTRAINT_FILE_ENV, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.chdir(tmp_path)
    reload_settings()

    assert load_constraint_file() == []


def test_resolve_type_handles_nested_classes():
    assert resolve_type(f"{__name__}:Outer.Inner") is Outer.Inner
    assert resolve_type(f"{__name__}.Shipment") is Shipment


@pytest.mark.parametrize(
    "reference",
    ["nope", "no_such_module_xyz:Thing", f"{__name__}:Missing", f"{__name__}:YAML_DOCUMENT"],
)
def test_resolve_type_errors(reference):
    with pytest.raises(ConfigurationError):
        resolve_type(reference)


@pytest.mark.parametrize(
    "document",
    [
        ["not", "a", "mapping"],
        {"types": {"type": "x"}},
        {"types": [{"fields": {}}]},
        {"types": [{"type": f"{__name__}:Shipment", "fields": ["code"]}]},
        {"types": [{"type": f"{__name__}:Shipment", "fields": {"code": ["unique"]}}]},
    ],
)
def test_malformed_documents_are_configuration_errors(document):
    with pytest.raises(ConfigurationError):
        load_constraint_document(document)


def test_unparseable_yaml_is_a_configuration_error(tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text("types: [unclosed\n")

    with pytest.raises(ConfigurationError):
        load_constraint_file(path)


def test_settings_carry_the_env_override(tmp_path, monkeypatch):
    monkeypatch.delenv(CONSTRAINT_FILE_ENV, raising=False)
    reload_settings()
    override = tmp_path / "override.yml"
    override.write_text("types: []\n")
    monkeypatch.setenv(CONSTRAINT_FILE_ENV, str(override))

    # Cached settings do not see the new environment until reloaded.
    assert load_settings().constraint_file is None
    reload_settings()

    assert load_settings().constraint_file == override
    assert locate_constraint_file() == override


def test_file_declared_parent_constraints_apply_to_validatable_subclass(tmp_path):
    """
    GIVEN a validatable subclass whose parent is declared in a constraint file
    WHEN the file is loaded after the subclass was registered
    THEN the parent's constraints are enforced on the subclass
    """
    validator = ArgumentValidator()
    validator.validate([SavingsAccount("")])

    path = tmp_path / "constraints.yaml"
    path.write_text(f"types:\n  - type: {__name__}:Account\n    fields:\n      code: [required]\n")
    load_constraint_file(path)

    with pytest.raises(ValidationFailure) as exc:
        validator.validate([SavingsAccount("")])
    assert exc.value.description == "code must not be empty"
    assert get_metadata(SavingsAccount).get_field("code").owner is Account


def test_subclass_defined_after_file_load_inherits_declarations(tmp_path):
    path = tmp_path / "constraints.yaml"
    path.write_text(f"types:\n  - type: {__name__}:Account\n    fields:\n      code: [required]\n")
    load_constraint_file(path)

    @validatable
    class CheckingAccount(Account):
        pass

    with pytest.raises(ValidationFailure):
        ArgumentValidator().validate([CheckingAccount("")])


def test_unregistering_file_declared_parent_releases_subclass(tmp_path):
    path = tmp_path / "constraints.yaml"
    path.write_text(f"types:\n  - type: {__name__}:Account\n    fields:\n      code: [required]\n")
    load_constraint_file(path)

    unregister(Account)

    ArgumentValidator().validate([SavingsAccount("")])
    assert get_metadata(SavingsAccount).get_field("code").has_constraints is False

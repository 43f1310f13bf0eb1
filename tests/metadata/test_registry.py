# Copyright (c) 2025 Artoo Corporation
# Licensed under the Business Source License 1.1 (see LICENSE).
# Change Date: 2029-09-08  •  Change License: LGPL-3.0-or-later

"""Registration-time metadata: own fields, inherited public fields, marker."""

from typing import Annotated, ClassVar

import pytest

from fieldguard.exceptions import ConfigurationError
from fieldguard.metadata import get_metadata, is_validatable, register, unregister, validatable
from fieldguard.validation import FieldWalker, Length, NonZero, Pattern, Required


class Base:
    tenant: Annotated[str, Required()]
    _internal: Annotated[str, Required()]
    region: str


class Middle(Base):
    account: Annotated[str, Pattern(r"\d+")]


@validatable
class Order(Middle):
    code: Annotated[str, Required(), Length(exact=3)]
    _secret: Annotated[str, NonZero()]
    note: str
    kind: ClassVar[str] = "order"


def _names(specs):
    return [spec.name for spec in specs]


def test_own_fields_include_private_names_in_declaration_order():
    metadata = get_metadata(Order)

    assert _names(metadata.own_fields) == ["code", "_secret", "note"]
    assert metadata.get_field("code").constraints == (Required(), Length(exact=3))
    assert metadata.get_field("code").owner is Order


def test_inherited_fields_are_public_only_nearest_ancestor_first():
    metadata = get_metadata(Order)

    assert _names(metadata.inherited_fields) == ["account", "tenant", "region"]
    assert metadata.get_field("tenant").owner is Base


def test_unconstrained_fields_are_recorded_without_constraints():
    metadata = get_metadata(Order)

    assert metadata.get_field("note").has_constraints is False
    assert metadata.get_field("region").has_constraints is False
    assert metadata.get_field("code").has_constraints is True


def test_class_vars_are_not_fields():
    with pytest.raises(ConfigurationError):
        get_metadata(Order).get_field("kind")


def test_redeclared_field_is_taken_from_the_subclass():
    @validatable()
    class Override(Base):
        tenant: Annotated[str, Length(max=3)]

    metadata = get_metadata(Override)

    assert _names(metadata.own_fields) == ["tenant"]
    assert "tenant" not in _names(metadata.inherited_fields)
    assert metadata.get_field("tenant").constraints == (Length(max=3),)


def test_marker_is_not_inherited_by_subclasses():
    class Child(Order):
        pass

    assert is_validatable(Order)
    assert is_validatable(Order.__new__(Order))
    assert not is_validatable(Child)
    assert not is_validatable(Base)


def test_non_constraint_annotated_metadata_is_ignored():
    @validatable
    class Doc:
        title: Annotated[str, "a description", Required()]

    assert get_metadata(Doc).get_field("title").constraints == (Required(),)


def test_register_appends_extra_constraints():
    class Plain(Base):
        name: Annotated[str, Required()]

    metadata = register(Plain, {"name": [Length(max=5)], "tenant": [NonZero()], "extra": [Required()]})

    assert metadata.get_field("name").constraints == (Required(), Length(max=5))
    assert metadata.get_field("tenant").constraints == (Required(), NonZero())
    assert _names(metadata.own_fields) == ["name", "extra"]


def test_register_rejects_non_constraints():
    class Plain:
        name: str

    with pytest.raises(ConfigurationError):
        register(Plain, {"name": ["required"]})


def test_register_rejects_non_classes():
    with pytest.raises(ConfigurationError):
        register("not a class")  # type: ignore[arg-type]


def test_unparseable_string_annotation_is_a_configuration_error():
    class Broken:
        value: "Annotated[str,"  # noqa: F722

    with pytest.raises(ConfigurationError):
        register(Broken)


def test_walker_yields_own_then_inherited_fields():
    instance = Order.__new__(Order)
    names = _names(FieldWalker().walk(instance))

    assert names == ["code", "_secret", "note", "account", "tenant", "region"]


def test_walker_yields_nothing_for_unregistered_types():
    assert list(FieldWalker().walk(object())) == []


def test_unknown_field_lookup_is_a_configuration_error():
    with pytest.raises(ConfigurationError) as exc:
        get_metadata(Order).get_field("missing")
    assert "missing" in str(exc.value)


def test_constraints_declared_for_an_ancestor_reach_registered_subclasses():
    class Parent:
        code: str
        _token: str

    @validatable
    class Child(Parent):
        name: Annotated[str, Required()]

    register(Parent, {"code": [Required()], "_token": [Required()], "label": [Length(max=3)]})

    metadata = get_metadata(Child)
    assert metadata.get_field("code").constraints == (Required(),)
    assert metadata.get_field("code").owner is Parent
    assert metadata.get_field("label").constraints == (Length(max=3),)
    assert "_token" not in _names(metadata.inherited_fields)


def test_subclass_registered_after_ancestor_declarations_sees_them():
    class Parent:
        code: Annotated[str, Pattern("^[A-Z]+$")]

    register(Parent, {"code": [Length(exact=3)]})

    @validatable
    class Child(Parent):
        pass

    assert get_metadata(Child).get_field("code").constraints == (Pattern("^[A-Z]+$"), Length(exact=3))


def test_redeclared_field_ignores_ancestor_declarations():
    class Parent:
        code: str

    register(Parent, {"code": [Required()]})

    @validatable
    class Child(Parent):
        code: Annotated[str, Length(max=5)]

    assert get_metadata(Child).get_field("code").constraints == (Length(max=5),)


def test_unregistering_an_ancestor_drops_its_declarations_from_subclasses():
    class Parent:
        code: str

    @validatable
    class Child(Parent):
        pass

    register(Parent, {"code": [Required()]})
    assert get_metadata(Child).get_field("code").has_constraints

    unregister(Parent)

    assert get_metadata(Child).get_field("code").has_constraints is False

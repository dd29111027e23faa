"""Tests for the state model, flattening and value rendering."""

import json

import pytest

from tfexplorer.errors import DecodeError
from tfexplorer.models.terraform_state import (
    EntryKind,
    ListValue,
    Module,
    OpaqueValue,
    StringValue,
    TerraformState,
    flatten,
    module_prefix,
    read_state,
    to_display_string,
    to_dynamic,
)

from conftest import SAMPLE_STATE


class TestModulePrefix:
    def test_root_is_empty(self):
        assert module_prefix(Module(path=["root"])) == ""

    def test_child(self):
        assert module_prefix(Module(path=["root", "child"])) == "module.child."

    def test_nested(self):
        assert module_prefix(Module(path=["root", "a", "b"])) == "module.a.module.b."


class TestFlatten:
    def test_root_output(self, sample_state):
        flat = flatten(sample_state)
        entry = flat["foo"]
        assert entry.kind is EntryKind.OUTPUT
        assert entry.value_type == "string"
        assert entry.value == StringValue(value="bar")

    def test_resource_attribute(self, sample_state):
        flat = flatten(sample_state)
        entry = flat["aws_instance.web.id"]
        assert entry.kind is EntryKind.ATTRIBUTE
        assert entry.value_type == "string"
        assert to_display_string(entry.value) == "i-123"

    def test_child_module_keys(self, sample_state):
        flat = flatten(sample_state)
        assert to_display_string(flat["module.child.vpc_id"].value) == "vpc-1"
        assert (
            to_display_string(flat["module.child.aws_vpc.main.cidr_block"].value)
            == "10.0.0.0/16"
        )

    def test_null_primary_contributes_nothing(self, sample_state):
        flat = flatten(sample_state)
        assert not any(key.startswith("data.aws_ami.pending") for key in flat)

    def test_key_set(self, sample_state):
        assert set(flatten(sample_state)) == {
            "foo",
            "subnets",
            "tags",
            "aws_instance.web.id",
            "aws_instance.web.ami",
            "module.child.vpc_id",
            "module.child.aws_vpc.main.cidr_block",
        }

    def test_deterministic_under_reordering(self):
        reordered = json.loads(json.dumps(SAMPLE_STATE))
        for module in reordered["modules"]:
            module["outputs"] = dict(reversed(list(module["outputs"].items())))
            module["resources"] = dict(reversed(list(module["resources"].items())))
        assert flatten(TerraformState.model_validate(reordered)) == flatten(
            TerraformState.model_validate(SAMPLE_STATE)
        )

    def test_later_collision_overwrites(self):
        state = TerraformState.model_validate(
            {
                "modules": [
                    {"path": ["root"], "outputs": {"x": {"type": "string", "value": "first"}}},
                    {"path": ["root"], "outputs": {"x": {"type": "string", "value": "second"}}},
                ]
            }
        )
        assert to_display_string(flatten(state)["x"].value) == "second"

    def test_empty_state(self):
        assert flatten(TerraformState()) == {}


class TestDisplayString:
    def test_string(self):
        assert to_display_string(to_dynamic("bar")) == "bar"

    def test_list(self):
        assert to_display_string(to_dynamic(["a", "b"])) == "a,b"

    def test_nested_list(self):
        assert to_display_string(to_dynamic(["a", ["b", "c"]])) == "a,b,c"

    def test_map_falls_back_to_json(self):
        value = to_dynamic({"b": "2", "a": "1"})
        assert isinstance(value, OpaqueValue)
        assert to_display_string(value) == '{"a": "1", "b": "2"}'

    def test_number(self):
        assert to_display_string(to_dynamic(3)) == "3"

    def test_to_dynamic_cases(self):
        assert isinstance(to_dynamic("x"), StringValue)
        assert isinstance(to_dynamic([]), ListValue)
        assert isinstance(to_dynamic(None), OpaqueValue)


class TestReadState:
    def test_reads_bytes(self):
        state = read_state(json.dumps(SAMPLE_STATE).encode())
        assert state.serial == 42
        assert state.lineage.startswith("5a1f0c3e")
        assert state.modules[0].resources["aws_instance.web"].provider == "provider.aws"

    def test_null_maps_decode_as_empty(self):
        state = read_state('{"version": 3, "modules": [{"path": ["root"], "outputs": null, "resources": null}]}')
        assert state.modules[0].outputs == {}
        assert state.modules[0].resources == {}

    def test_numeric_attributes_become_strings(self):
        state = read_state(
            '{"modules": [{"path": ["root"], "resources": {"r.x": {"primary": {"id": "1", "attributes": {"count": 2}}}}}]}'
        )
        assert flatten(state)["r.x.count"].value == StringValue(value="2")

    def test_invalid_json(self):
        with pytest.raises(DecodeError):
            read_state(b"<html>not json</html>")

    def test_wrong_shape(self):
        with pytest.raises(DecodeError):
            read_state('{"modules": "nope"}')

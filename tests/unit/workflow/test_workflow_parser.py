"""Unit tests for workflow YAML parsing and serialization."""

import pytest

from sysflow_core.errors import CatalogError
from sysflow_core.workflow import (
    StepDefinition,
    parse_workflow_dict,
    parse_workflow_yaml,
    workflow_to_dict,
)

GROUPED_YAML = """
id: 00000000-0000-0000-0000-00000000abcd
system_slug: grouped
name: Grouped
description: Start step feeding a parallel group
version: 2
input_schema:
  type: object
  properties:
    items: {type: array}
block_groups:
  - temp_id: g1
    name: Fan Out
    type: parallel
    config: {max_concurrent: 2}
steps:
  - {temp_id: step_1, name: Start, type: start, trigger_type: manual}
  - {temp_id: step_2, name: Work, type: function, block_group_temp_id: g1, position_x: 120}
  - {temp_id: step_3, name: After, type: function}
edges:
  - {source_temp_id: step_1, target_group_temp_id: g1, source_port: output, target_port: group-input}
  - {source_group_temp_id: g1, target_temp_id: step_3, source_port: out}
  - {source_temp_id: step_3, target_temp_id: step_1, source_port: true}
"""


class TestParseWorkflowYaml:
    """Tests for parse_workflow_yaml."""

    def test_parse_complete_document(self):
        workflow = parse_workflow_yaml(GROUPED_YAML)

        assert workflow.system_slug == "grouped"
        assert workflow.version == 2
        assert workflow.is_system is True
        assert workflow.input_schema["properties"]["items"] == {"type": "array"}
        assert len(workflow.steps) == 3
        assert len(workflow.edges) == 3
        assert workflow.block_groups[0].config == {"max_concurrent": 2}

    def test_sections_are_tuples(self):
        workflow = parse_workflow_yaml(GROUPED_YAML)
        assert isinstance(workflow.steps, tuple)
        assert isinstance(workflow.edges, tuple)
        assert isinstance(workflow.block_groups, tuple)

    def test_step_fields(self):
        workflow = parse_workflow_yaml(GROUPED_YAML)
        step = workflow.get_step("step_2")
        assert step == StepDefinition(
            temp_id="step_2",
            name="Work",
            type="function",
            block_group_temp_id="g1",
            position_x=120,
        )

    def test_group_edges(self):
        workflow = parse_workflow_yaml(GROUPED_YAML)
        into_group, out_of_group, _ = workflow.edges
        assert into_group.target_group_temp_id == "g1"
        assert into_group.target_temp_id is None
        assert out_of_group.source_group_temp_id == "g1"
        assert out_of_group.source_port == "out"

    def test_boolean_port_becomes_label(self):
        """Unquoted true is read back as the port label "true"."""
        workflow = parse_workflow_yaml(GROUPED_YAML)
        assert workflow.edges[2].source_port == "true"

    def test_invalid_yaml(self):
        with pytest.raises(CatalogError) as exc_info:
            parse_workflow_yaml("steps: [unclosed")
        assert exc_info.value.code == "INPUT_INVALID"
        assert "Invalid YAML" in exc_info.value.detail

    def test_non_mapping_document(self):
        with pytest.raises(CatalogError) as exc_info:
            parse_workflow_yaml("- just\n- a list\n")
        assert exc_info.value.code == "INPUT_INVALID"

    def test_source_path_in_error(self, tmp_path):
        path = tmp_path / "broken.yaml"
        with pytest.raises(CatalogError) as exc_info:
            parse_workflow_yaml("[]", source_path=path)
        assert exc_info.value.source_path == str(path)


class TestParseWorkflowDict:
    """Tests for parse_workflow_dict."""

    def test_missing_fields_become_empty(self):
        """Missing identity fields are left for the validator to report."""
        workflow = parse_workflow_dict({"steps": [{"type": "start"}]})
        assert workflow.system_slug == ""
        assert workflow.name == ""
        assert workflow.steps[0].temp_id == ""
        assert workflow.steps[0].name == ""

    def test_unknown_workflow_key(self):
        with pytest.raises(CatalogError) as exc_info:
            parse_workflow_dict({"system_slug": "x", "triggers": []})
        assert exc_info.value.code == "INPUT_INVALID"
        assert "triggers" in exc_info.value.detail

    def test_unknown_step_key(self):
        with pytest.raises(CatalogError) as exc_info:
            parse_workflow_dict({"steps": [{"temp_id": "a", "name": "A", "type": "start", "color": 1}]})
        assert exc_info.value.detail == "Unknown key(s) in steps[0]: color"

    def test_section_must_be_list(self):
        with pytest.raises(CatalogError) as exc_info:
            parse_workflow_dict({"edges": {"source_temp_id": "a"}})
        assert exc_info.value.detail == "edges must be a list"

    def test_section_item_must_be_mapping(self):
        with pytest.raises(CatalogError) as exc_info:
            parse_workflow_dict({"block_groups": ["g1"]})
        assert exc_info.value.detail == "block_groups[0] must be a dictionary"

    @pytest.mark.parametrize("version", ["1", 1.5, True])
    def test_version_must_be_integer(self, version):
        with pytest.raises(CatalogError) as exc_info:
            parse_workflow_dict({"version": version})
        assert exc_info.value.code == "INPUT_INVALID"

    def test_is_system_read_from_document(self):
        assert parse_workflow_dict({"is_system": False}).is_system is False

    @pytest.mark.parametrize("is_system", ["false", 0, "yes"])
    def test_is_system_must_be_boolean(self, is_system):
        """A quoted "false" is rejected rather than read as true."""
        with pytest.raises(CatalogError) as exc_info:
            parse_workflow_dict({"is_system": is_system})
        assert exc_info.value.code == "INPUT_INVALID"
        assert "is_system" in exc_info.value.detail

    @pytest.mark.parametrize(
        ("section", "item", "field"),
        [
            ("steps", {"temp_id": ["a"], "name": "A", "type": "start"}, "steps[0].temp_id"),
            ("steps", {"temp_id": "a", "name": 7, "type": "start"}, "steps[0].name"),
            ("steps", {"temp_id": "a", "name": "A", "type": "start", "config": [1]}, "steps[0].config"),
            ("steps", {"temp_id": "a", "name": "A", "type": "start", "position_x": "10"}, "steps[0].position_x"),
            ("steps", {"temp_id": "a", "name": "A", "type": "start", "block_group_temp_id": {"g": 1}}, "steps[0].block_group_temp_id"),
            ("edges", {"source_temp_id": 1, "target_temp_id": "b"}, "edges[0].source_temp_id"),
            ("edges", {"source_temp_id": "a", "target_group_temp_id": ["g"]}, "edges[0].target_group_temp_id"),
            ("edges", {"source_temp_id": "a", "target_temp_id": "b", "source_port": 3}, "edges[0].source_port"),
            ("block_groups", {"temp_id": "g", "name": "G", "type": "while", "parent_temp_id": 5}, "block_groups[0].parent_temp_id"),
            ("block_groups", {"temp_id": "g", "name": "G", "type": "while", "width": True}, "block_groups[0].width"),
        ],
    )
    def test_field_types_checked(self, section, item, field):
        with pytest.raises(CatalogError) as exc_info:
            parse_workflow_dict({section: [item]})
        assert exc_info.value.code == "INPUT_INVALID"
        assert exc_info.value.detail.startswith(field)

    @pytest.mark.parametrize("key", ["system_slug", "name", "description", "id"])
    def test_workflow_text_fields_checked(self, key):
        with pytest.raises(CatalogError) as exc_info:
            parse_workflow_dict({key: ["x"]})
        assert exc_info.value.detail.startswith(key)

    def test_null_port_becomes_empty(self):
        workflow = parse_workflow_dict({"edges": [{"source_temp_id": "a", "source_port": None}]})
        assert workflow.edges[0].source_port == ""


class TestWorkflowToDict:
    """Tests for workflow_to_dict."""

    def test_uses_document_field_names(self):
        data = workflow_to_dict(parse_workflow_yaml(GROUPED_YAML))
        assert data["system_slug"] == "grouped"
        assert data["steps"][1]["block_group_temp_id"] == "g1"
        assert data["edges"][0]["target_group_temp_id"] == "g1"
        assert data["block_groups"][0]["temp_id"] == "g1"

    def test_parse_of_serialized_definition_is_equal(self):
        workflow = parse_workflow_yaml(GROUPED_YAML)
        assert parse_workflow_dict(workflow_to_dict(workflow)) == workflow

    def test_payloads_are_detached(self):
        """Changing the dict never reaches the definition."""
        workflow = parse_workflow_yaml(GROUPED_YAML)
        data = workflow_to_dict(workflow)

        data["block_groups"][0]["config"]["max_concurrent"] = 99
        data["input_schema"]["properties"].clear()

        assert workflow.block_groups[0].config == {"max_concurrent": 2}
        assert "items" in workflow.input_schema["properties"]

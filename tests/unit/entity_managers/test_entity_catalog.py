##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Tests for the `entity_catalog.py` module.
"""

import json
import os
from unittest.mock import MagicMock

import pytest

from entityhub.common.enums import CodeFormat, DataFormat, FlowType
from entityhub.entity_managers.entity_catalog import EntityCatalog
from entityhub.flows.collaborators import FlowLister, Scaffolding
from entityhub.models.entity_definition import EntityDefinition
from entityhub.models.flow_definition import FlowDefinition
from tests.fixture_types import FixtureCallable, FixtureEnv, FixtureStr
from tests.utils import entity_node, read_json, write_entity_file, write_file


# pylint: disable=redefined-outer-name


@pytest.fixture
def catalog(project_env: FixtureEnv) -> EntityCatalog:
    """
    A catalog over the current-format test project using the default directory collaborators.

    Args:
        project_env: An environment for a current-format server.

    Returns:
        The catalog.
    """
    return EntityCatalog(project_env)


@pytest.fixture
def write_flow(project_dir: FixtureStr) -> FixtureCallable:
    """
    Factory that scaffolds a flow directory by hand.

    Args:
        project_dir: The project root.

    Returns:
        A function writing a flow's properties file.
    """

    def _write_flow(entity_dir: str, flow_type: str, flow_name: str, code_format: str = "sjs"):
        flow_dir = os.path.join(project_dir, "plugins", "entities", entity_dir, flow_type, flow_name)
        write_file(os.path.join(flow_dir, f"{flow_name}.properties"), f"codeFormat={code_format}\ndataFormat=json\n")
        return flow_dir

    return _write_flow


class TestGetEntities:
    """
    Tests for `EntityCatalog.get_entities`.
    """

    def test_attaches_ui_metadata_and_flows(
        self, catalog: EntityCatalog, project_dir: FixtureStr, project_env: FixtureEnv, write_flow: FixtureCallable
    ):
        """
        Test that every entity gets its UI metadata, or an empty one, and its flows.

        Args:
            catalog: The catalog under test.
            project_dir: The project root.
            project_env: An environment for a current-format server.
            write_flow: Factory that scaffolds a flow directory.
        """
        write_entity_file(project_dir, "Customer", entity_node("Customer"))
        write_entity_file(project_dir, "Order", entity_node("Order"))
        write_file(project_env.ui_layout_file, json.dumps({"Customer": {"x": 1}, "Unrelated": {"x": 9}}))
        write_flow("Customer", "input", "load")
        write_flow("Customer", "harmonize", "clean", code_format="xqy")

        entities = catalog.get_entities()

        customer, order = entities
        assert customer.hub_ui == {"x": 1}
        assert order.hub_ui == {}
        assert [flow.flow_name for flow in customer.input_flows] == ["load"]
        assert [flow.flow_name for flow in customer.harmonize_flows] == ["clean"]
        assert customer.harmonize_flows[0].code_format == CodeFormat.XQUERY
        assert order.input_flows == [] and order.harmonize_flows == []

    def test_one_record_per_file_and_malformed_isolated(
        self, catalog: EntityCatalog, project_dir: FixtureStr, project_env: FixtureEnv
    ):
        """
        Test that a directory with two definition files yields two entities and a
        malformed file elsewhere doesn't hide its siblings.

        Args:
            catalog: The catalog under test.
            project_dir: The project root.
            project_env: An environment for a current-format server.
        """
        write_entity_file(project_dir, "Sales", entity_node("Invoice"), filename="invoice.entity.json")
        write_entity_file(project_dir, "Sales", entity_node("Receipt"), filename="receipt.entity.json")
        write_file(os.path.join(project_env.entities_dir, "Broken", "Broken.entity.json"), "{nope")
        write_entity_file(project_dir, "Customer", entity_node("Customer"))

        entities = catalog.get_entities()

        assert sorted(entity.title for entity in entities) == ["Customer", "Invoice", "Receipt"]
        assert {entity.entity_name for entity in entities if entity.title in ("Invoice", "Receipt")} == {"Sales"}
        assert len(catalog.store.last_errors) == 1

    def test_undecodable_file_isolated(self, catalog: EntityCatalog, project_dir: FixtureStr, project_env: FixtureEnv):
        """
        Test that a definition file that isn't UTF-8 is skipped like any other malformed file.

        Args:
            catalog: The catalog under test.
            project_dir: The project root.
            project_env: An environment for a current-format server.
        """
        bad_file = write_file(
            os.path.join(project_env.entities_dir, "Broken", "Broken.entity.json"), b'{"info":{"title":"Caf\xe9"}}'
        )
        write_entity_file(project_dir, "Customer", entity_node("Customer"))

        assert [entity.title for entity in catalog.get_entities()] == ["Customer"]
        assert [error.path for error in catalog.store.last_errors] == [bad_file]

    def test_legacy_never_attaches_ui_metadata(self, project_legacy_env: FixtureEnv, write_flow: FixtureCallable):
        """
        Test that a legacy server never gets UI metadata even when the layout file has matching titles.

        Args:
            project_legacy_env: An environment for a legacy server.
            write_flow: Factory that scaffolds a flow directory.
        """
        os.makedirs(os.path.join(project_legacy_env.entities_dir, "Customer"))
        write_file(project_legacy_env.ui_layout_file, json.dumps({"Customer": {"x": 1}}))
        write_flow("Customer", "input", "load")

        entities = EntityCatalog(project_legacy_env).get_entities()

        assert len(entities) == 1
        assert entities[0].hub_ui is None
        assert [flow.flow_name for flow in entities[0].input_flows] == ["load"]

    def test_legacy_ignores_malformed_layout(self, project_legacy_env: FixtureEnv):
        """
        Test that a legacy server never reads the layout file at all.

        Args:
            project_legacy_env: An environment for a legacy server.
        """
        os.makedirs(os.path.join(project_legacy_env.entities_dir, "Customer"))
        write_file(project_legacy_env.ui_layout_file, "{broken")
        assert [entity.title for entity in EntityCatalog(project_legacy_env).get_entities()] == ["Customer"]

    def test_flows_listed_under_directory_name(self, project_env: FixtureEnv, project_dir: FixtureStr):
        """
        Test that the flow lister is asked for the entity's directory, not its title.

        Args:
            project_env: An environment for a current-format server.
            project_dir: The project root.
        """
        write_entity_file(project_dir, "customer-dir", entity_node("Customer"))
        flow_lister = MagicMock(spec=FlowLister)
        flow_lister.get_flows.return_value = []

        EntityCatalog(project_env, flow_lister=flow_lister).get_entities()

        assert {call.args[1] for call in flow_lister.get_flows.call_args_list} == {"customer-dir"}


class TestGetEntity:
    """
    Tests for `EntityCatalog.get_entity`.
    """

    def test_not_found(self, catalog: EntityCatalog, project_dir: FixtureStr):
        """
        Test that looking up a missing title gives `None`.

        Args:
            catalog: The catalog under test.
            project_dir: The project root.
        """
        write_entity_file(project_dir, "Customer", entity_node("Customer"))
        assert catalog.get_entity("orders") is None

    def test_found_with_flows(self, catalog: EntityCatalog, project_dir: FixtureStr, write_flow: FixtureCallable):
        """
        Test that looking up an existing title gives the entity with its flows.

        Args:
            catalog: The catalog under test.
            project_dir: The project root.
            write_flow: Factory that scaffolds a flow directory.
        """
        write_entity_file(project_dir, "orders", entity_node("orders"))
        write_flow("orders", "input", "load-orders")

        entity = catalog.get_entity("orders")

        assert entity is not None
        assert entity.title == "orders"
        assert [flow.flow_name for flow in entity.input_flows] == ["load-orders"]


class TestEntityLifecycle:
    """
    Tests for creating, saving and deleting entities through the catalog.
    """

    def test_create_entity_scaffolds_flows(self, catalog: EntityCatalog):
        """
        Test that creating an entity scaffolds it and every flow in the template.

        Args:
            catalog: The catalog under test.
        """
        template = EntityDefinition(
            title="Customer",
            input_flows=[FlowDefinition(flow_name="load", code_format="xqy", data_format="xml")],
            harmonize_flows=[FlowDefinition(flow_name="clean", flow_type=FlowType.HARMONIZE)],
        )

        created = catalog.create_entity(template)

        assert created.title == "Customer"
        assert [(flow.flow_name, flow.code_format, flow.data_format) for flow in created.input_flows] == [
            ("load", CodeFormat.XQUERY, DataFormat.XML)
        ]
        assert [flow.flow_name for flow in created.harmonize_flows] == ["clean"]

    def test_create_entity_delegates_to_scaffolding(self, project_env: FixtureEnv):
        """
        Test that scaffolding is called with each flow's name and formats.

        Args:
            project_env: An environment for a current-format server.
        """
        scaffolding = MagicMock(spec=Scaffolding)
        catalog = EntityCatalog(project_env, scaffolding=scaffolding)
        template = EntityDefinition(
            title="Customer",
            harmonize_flows=[FlowDefinition(flow_name="clean", code_format="sjs", data_format="json")],
        )

        assert catalog.create_entity(template) is None

        scaffolding.create_entity.assert_called_once_with("Customer")
        scaffolding.create_flow.assert_called_once_with(
            "Customer", "clean", FlowType.HARMONIZE, CodeFormat.JAVASCRIPT, DataFormat.JSON
        )

    def test_save_round_trips_payload(self, catalog: EntityCatalog):
        """
        Test that a saved payload is read back unchanged.

        Args:
            catalog: The catalog under test.
        """
        payload = entity_node("Customer", properties={"id": {"datatype": "string"}, "tags": [1, "two", None]})
        entity = EntityDefinition(title="Customer", definition=payload)

        assert catalog.save_entity(entity) is entity
        assert catalog.get_entity("Customer").definition == payload

    def test_delete_entity_is_idempotent(self, catalog: EntityCatalog, project_dir: FixtureStr, project_env):
        """
        Test that deleting removes the directory and deleting again is a no-op.

        Args:
            catalog: The catalog under test.
            project_dir: The project root.
            project_env: An environment for a current-format server.
        """
        write_entity_file(project_dir, "Customer", entity_node("Customer"))

        catalog.delete_entity("Customer")
        assert not os.path.exists(os.path.join(project_env.entities_dir, "Customer"))
        catalog.delete_entity("Customer")
        assert catalog.get_entities() == []


class TestFlows:
    """
    Tests for the flow operations of the catalog.
    """

    def test_get_flow(self, catalog: EntityCatalog, project_dir: FixtureStr, write_flow: FixtureCallable):
        """
        Test that flows are found by type and name.

        Args:
            catalog: The catalog under test.
            project_dir: The project root.
            write_flow: Factory that scaffolds a flow directory.
        """
        write_entity_file(project_dir, "Customer", entity_node("Customer"))
        write_flow("Customer", "harmonize", "clean")

        assert catalog.get_flow("Customer", FlowType.HARMONIZE, "clean").flow_name == "clean"
        assert catalog.get_flow("Customer", FlowType.INPUT, "clean") is None
        assert catalog.get_flow("Ghost", FlowType.HARMONIZE, "clean") is None

    def test_create_flow(self, catalog: EntityCatalog, project_dir: FixtureStr):
        """
        Test that a created flow is returned as read back from disk.

        Args:
            catalog: The catalog under test.
            project_dir: The project root.
        """
        write_entity_file(project_dir, "Customer", entity_node("Customer"))
        new_flow = FlowDefinition(flow_name="load", code_format="xqy", use_es_model=True)

        created = catalog.create_flow("Customer", FlowType.INPUT, new_flow)

        assert new_flow.entity_name == "Customer"
        assert created.flow_name == "load"
        assert created.code_format == CodeFormat.XQUERY
        assert created.use_es_model is True

    def test_delete_flow(self, catalog: EntityCatalog, project_dir: FixtureStr, write_flow: FixtureCallable):
        """
        Test that deleting a flow removes its directory and deleting again is a no-op.

        Args:
            catalog: The catalog under test.
            project_dir: The project root.
            write_flow: Factory that scaffolds a flow directory.
        """
        write_entity_file(project_dir, "Customer", entity_node("Customer"))
        flow_dir = write_flow("Customer", "input", "load")

        catalog.delete_flow("Customer", "load", FlowType.INPUT)
        assert not os.path.exists(flow_dir)
        catalog.delete_flow("Customer", "load", FlowType.INPUT)
        assert catalog.get_entity("Customer").input_flows == []


class TestUIData:
    """
    Tests for storing UI metadata through the catalog.
    """

    def test_save_all_ui_data_preserves_unrelated(self, catalog: EntityCatalog, project_env: FixtureEnv):
        """
        Test that saving UI metadata keeps unrelated titles and round-trips through `load_all`.

        Args:
            catalog: The catalog under test.
            project_env: An environment for a current-format server.
        """
        write_file(project_env.ui_layout_file, json.dumps({"Unrelated": {"x": 9}}))

        catalog.save_all_ui_data(
            [EntityDefinition(title="Customer", hub_ui={"x": 1}), EntityDefinition(title="Order", hub_ui={"x": 2})]
        )

        assert catalog.ui_store.load_all() == {"Unrelated": {"x": 9}, "Customer": {"x": 1}, "Order": {"x": 2}}

    def test_save_entity_ui_data(self, catalog: EntityCatalog, project_env: FixtureEnv):
        """
        Test that a single entity's UI metadata is stored.

        Args:
            catalog: The catalog under test.
            project_env: An environment for a current-format server.
        """
        catalog.save_entity_ui_data(EntityDefinition(title="Customer", hub_ui={"collapsed": True}))
        assert read_json(project_env.ui_layout_file) == {"Customer": {"collapsed": True}}

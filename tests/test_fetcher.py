"""
Tests for resource adapters, value lookup and the generic fetch path.
"""

from unittest.mock import MagicMock

import pytest

from operadash.client import EngineClient, ProcessDefinition, ProcessInstance, Variable
from operadash.dashboard.fetcher import (
    DefinitionsAdapter,
    FetchRequest,
    GenericFetcher,
    InstancesAdapter,
    VariablesAdapter,
    format_cell,
    lookup_value,
)


@pytest.fixture
def fetcher(config):
    return GenericFetcher(config)


@pytest.fixture
def client():
    return MagicMock(spec=EngineClient)


class TestLookupValue:
    """Test suite for lookup_value."""

    @pytest.mark.parametrize('key', ['processInstanceId', 'processinstanceid', 'process_instance_id', 'process-instance-id'])
    def test_spelling_variants(self, key):
        assert lookup_value({'processInstanceId': 'p1'}, key) == 'p1'

    def test_snake_case_record(self):
        assert lookup_value({'business_key': 'b1'}, 'businessKey') == 'b1'

    def test_missing_is_none(self):
        assert lookup_value({'id': 1}, 'name') is None


class TestFormatCell:
    """Test suite for format_cell."""

    @pytest.mark.parametrize(
        'value, expected',
        [
            (None, ''),
            (True, 'true'),
            (False, 'false'),
            (3, '3'),
            (1.5, '1.5'),
            ({'a': [1, 2]}, '{"a":[1,2]}'),
            ([1, 'x'], '[1,"x"]'),
            ('text', 'text'),
        ],
    )
    def test_formatting(self, value, expected):
        assert format_cell(value) == expected


class TestAdapters:
    """Test suite for the typed resource adapters."""

    def test_adapter_lookup_accepts_both_spellings(self, fetcher):
        assert isinstance(fetcher.adapter_for('process-definition'), DefinitionsAdapter)
        assert isinstance(fetcher.adapter_for('process-instances'), InstancesAdapter)
        assert isinstance(fetcher.adapter_for('variables'), VariablesAdapter)
        assert fetcher.adapter_for('job') is None

    def test_definitions_paged_with_count(self, fetcher, client):
        client.fetch_definitions.return_value = [ProcessDefinition(id='d1', key='k1', name='Invoice', version=2)]
        client.fetch_count.return_value = 31

        loaded = fetcher.fetch(client, FetchRequest('process-definitions', offset=20, limit=10, generation=4))

        client.fetch_definitions.assert_called_once_with({}, 20, 10)
        client.fetch_count.assert_called_once_with('process-definition', {})
        assert loaded.count == 31
        assert loaded.generation == 4
        assert loaded.records[0]['key'] == 'k1'

    def test_instances_filtered_with_same_filter_for_count(self, fetcher, client):
        client.fetch_instances.return_value = [ProcessInstance(id='i1', definition_id='d1', business_key='b1')]
        client.fetch_count.return_value = 1

        request = FetchRequest('process-instances', limit=10, filter_param='processDefinitionKey', filter_value='k1')
        loaded = fetcher.fetch(client, request)

        client.fetch_instances.assert_called_once_with({'processDefinitionKey': 'k1'}, 0, 10)
        client.fetch_count.assert_called_once_with('process-instance', {'processDefinitionKey': 'k1'})
        assert loaded.records[0]['businessKey'] == 'b1'

    def test_instances_translate_definition_key_to_id(self, fetcher, client):
        client.fetch_instances.return_value = []

        request = FetchRequest(
            'process-instances',
            limit=10,
            filter_param='processDefinitionId',
            filter_value='invoice',
            definition_ids=(('invoice', 'invoice:3:abc'),),
        )
        fetcher.fetch(client, request)

        client.fetch_instances.assert_called_once_with({'processDefinitionId': 'invoice:3:abc'}, 0, 10)

    def test_variables_sorted_and_paged_locally(self, fetcher, client):
        client.fetch_variables.return_value = [
            Variable('c', 3, 'Integer'),
            Variable('a', 1, 'Integer'),
            Variable('b', True, 'Boolean'),
        ]

        loaded = fetcher.fetch(client, FetchRequest('process-variables', offset=1, limit=1, filter_value='i1'))

        client.fetch_variables.assert_called_once_with('i1')
        assert [r['name'] for r in loaded.records] == ['b']
        assert loaded.count == 3

    def test_variables_without_instance_fetch_nothing(self, fetcher, client):
        loaded = fetcher.fetch(client, FetchRequest('process-variables', limit=10))

        client.fetch_variables.assert_not_called()
        assert loaded.records == []


class TestGenericPath:
    """Test suite for resources without an adapter."""

    def test_generic_fetch_uses_collection_endpoint(self, fetcher, client):
        client.fetch_collection.return_value = ([{'id': 'j1', 'retries': 3}], 12)

        loaded = fetcher.fetch(client, FetchRequest('job', offset=10, limit=5, filter_param='processInstanceId', filter_value='p1'))

        client.fetch_collection.assert_called_once_with('job', {'processInstanceId': 'p1'}, 10, 5)
        assert loaded.records == [{'id': 'j1', 'retries': 3}]
        assert loaded.count == 12

    def test_columns_from_table_definition(self, fetcher):
        columns = fetcher.columns_for('process-definitions', [], 80)

        assert [c.key for c in columns] == ['key', 'name', 'version']

    def test_columns_inferred_from_first_record(self, fetcher):
        records = [{'name': 'n', 'assignee': 'demo', 'id': 't1'}]

        columns = fetcher.columns_for('task', records, 60)

        assert [c.title for c in columns] == ['ASSIGNEE', 'ID', 'NAME']

    def test_columns_for_adapter_without_table_definition(self, fetcher, config):
        config.tables = [t for t in config.tables if t.name != 'process-instances']

        columns = fetcher.columns_for('process-instances', [], 80)

        assert [c.key for c in columns] == ['id', 'definitionId', 'businessKey', 'startTime']

    def test_rows_follow_column_keys(self, fetcher):
        columns = fetcher.columns_for('job', [], 40)
        records = [{'retries': 0, 'id': 'j1'}, {'id': 'j2'}]

        rows = fetcher.rows_for(columns, records)

        assert rows == [['j1', '0'], ['j2', '']]

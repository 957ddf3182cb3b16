"""
Tests for the REST client, with the HTTP session mocked out.
"""

from unittest.mock import MagicMock

import pytest
import requests

from operadash.client import EngineClient, EngineError, Variable
from operadash.configuration import Environment

BASE = 'http://engine/engine-rest'


def _response(status=200, body=None, text=''):
    response = MagicMock()
    response.status_code = status
    response.text = text
    if isinstance(body, Exception):
        response.json.side_effect = body
    else:
        response.json.return_value = body
    return response


@pytest.fixture
def session():
    session = MagicMock()
    session.headers = {}
    session.auth = None
    return session


@pytest.fixture
def client(session):
    return EngineClient(Environment(url=BASE + '/'), session=session)


class TestSetup:
    """Test suite for session configuration."""

    def test_accept_header_set(self, client, session):
        assert session.headers['Accept'] == 'application/json'

    def test_trailing_slash_stripped(self, client):
        assert client.base_url == BASE

    def test_basic_auth_when_username_set(self, session):
        EngineClient(Environment(url=BASE, username='demo', password='secret'), session=session)

        assert session.auth == ('demo', 'secret')

    def test_no_auth_without_username(self, client, session):
        assert session.auth is None


class TestFetchLists:
    """Test suite for definition and instance listing."""

    def test_fetch_definitions_sends_paging(self, client, session):
        session.request.return_value = _response(body=[{'id': 'a:1', 'key': 'a', 'name': 'A', 'version': 3}])

        definitions = client.fetch_definitions({'latestVersion': 'true'}, 20, 10)

        session.request.assert_called_once_with(
            'GET',
            BASE + '/process-definition',
            timeout=10.0,
            params={'latestVersion': 'true', 'firstResult': 20, 'maxResults': 10},
        )
        assert definitions[0].key == 'a'
        assert definitions[0].version == 3

    def test_zero_max_results_omitted(self, client, session):
        session.request.return_value = _response(body=[])

        client.fetch_instances({}, 0, 0)

        assert session.request.call_args.kwargs['params'] == {'firstResult': 0}

    def test_instance_definition_id_from_either_key(self, client, session):
        session.request.return_value = _response(
            body=[{'id': 'i1', 'definitionId': 'a:1'}, {'id': 'i2', 'processDefinitionId': 'b:1'}]
        )

        instances = client.fetch_instances()

        assert [i.definition_id for i in instances] == ['a:1', 'b:1']

    def test_http_error_carries_status(self, client, session):
        session.request.return_value = _response(status=500, text='boom')

        with pytest.raises(EngineError) as excinfo:
            client.fetch_definitions()

        assert excinfo.value.status_code == 500
        assert 'HTTP 500 boom' in str(excinfo.value)

    def test_connection_error(self, client, session):
        session.request.side_effect = requests.exceptions.ConnectionError('refused')

        with pytest.raises(EngineError, match='refused'):
            client.fetch_definitions()

    def test_timeout(self, client, session):
        session.request.side_effect = requests.exceptions.Timeout()

        with pytest.raises(EngineError, match='timed out'):
            client.fetch_instances()

    def test_invalid_json(self, client, session):
        session.request.return_value = _response(body=ValueError('Expecting value'))

        with pytest.raises(EngineError, match='invalid JSON'):
            client.fetch_definitions()

    def test_non_array_body(self, client, session):
        session.request.return_value = _response(body={'id': 'x'})

        with pytest.raises(EngineError, match='expected a JSON array'):
            client.fetch_definitions()


class TestCount:
    """Test suite for best-effort count lookups."""

    def test_count_uses_short_timeout(self, client, session):
        session.request.return_value = _response(body={'count': 42})

        assert client.fetch_count('process-instance', {'processDefinitionKey': 'a'}) == 42
        session.request.assert_called_once_with(
            'GET', BASE + '/process-instance/count', timeout=5.0, params={'processDefinitionKey': 'a'}
        )

    def test_count_failure_is_unknown(self, client, session):
        session.request.return_value = _response(status=404)

        assert client.fetch_count('task') == -1

    def test_count_missing_field_is_unknown(self, client, session):
        session.request.return_value = _response(body={})

        assert client.fetch_count('task') == -1


class TestVariables:
    """Test suite for variable reads and writes."""

    def test_variables_as_map(self, client, session):
        session.request.return_value = _response(
            body={'amount': {'value': 10, 'type': 'Integer'}, 'note': {'value': 'hi', 'type': 'String'}}
        )

        variables = client.fetch_variables('i1')

        assert session.request.call_args.args == ('GET', BASE + '/process-instance/i1/variables')
        assert variables == [Variable('amount', 10, 'Integer'), Variable('note', 'hi', 'String')]

    def test_variables_as_array(self, client, session):
        session.request.return_value = _response(body=[{'name': 'flag', 'value': True, 'type': 'Boolean'}, 'junk'])

        assert client.fetch_variables('i1') == [Variable('flag', True, 'Boolean')]

    def test_unexpected_variables_payload(self, client, session):
        session.request.return_value = _response(body='nope')

        with pytest.raises(EngineError):
            client.fetch_variables('i1')

    def test_set_variable_body(self, client, session):
        session.request.return_value = _response(status=204)

        client.set_variable('i1', 'amount', 42, 'Integer')

        session.request.assert_called_once_with(
            'PUT', BASE + '/process-instance/i1/variables/amount', timeout=10.0, json={'value': 42, 'type': 'Integer'}
        )

    def test_set_variable_without_type(self, client, session):
        session.request.return_value = _response(status=204)

        client.set_variable('i1', 'note', 'x')

        assert session.request.call_args.kwargs['json'] == {'value': 'x'}


class TestDeleteAndCollections:
    """Test suite for deletion and generic resources."""

    @pytest.mark.parametrize('status', [200, 204])
    def test_delete_accepts_success(self, client, session, status):
        session.request.return_value = _response(status=status)

        client.delete_instance('i1')

        assert session.request.call_args.args == ('DELETE', BASE + '/process-instance/i1')

    def test_delete_rejects_other_success_codes(self, client, session):
        session.request.return_value = _response(status=202)

        with pytest.raises(EngineError) as excinfo:
            client.delete_instance('i1')

        assert excinfo.value.status_code == 202

    def test_delete_not_found(self, client, session):
        session.request.return_value = _response(status=404, text='not found')

        with pytest.raises(EngineError) as excinfo:
            client.delete_instance('i1')

        assert excinfo.value.status_code == 404

    def test_fetch_collection_with_count(self, client, session):
        session.request.side_effect = [
            _response(body=[{'id': 'j1', 'retries': 3}, 'scalar']),
            _response(body={'count': 7}),
        ]

        records, count = client.fetch_collection('job', {'active': 'true'}, 0, 10)

        assert records == [{'id': 'j1', 'retries': 3}, {'value': 'scalar'}]
        assert count == 7
        count_call = session.request.call_args_list[1]
        assert count_call.args == ('GET', BASE + '/job/count')
        assert count_call.kwargs['params'] == {'active': 'true'}

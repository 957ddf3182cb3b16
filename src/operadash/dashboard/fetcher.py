"""
Loading table content for any engine resource.

Process definitions, instances and variables go through small typed
adapters; every other resource is fetched as a plain list of JSON objects
and its columns are inferred from the records.
"""

import json
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from operadash import labels
from operadash.client import EngineClient
from operadash.configuration import ConfigProvider
from operadash.constants import (
    DEFINITION_ALIASES,
    INSTANCE_ALIASES,
    PATH_PROCESS_DEFINITION,
    PATH_PROCESS_INSTANCE,
    UNKNOWN_TOTAL,
    VARIABLE_ALIASES,
)
from operadash.dashboard.layout import Column, Row, auto_columns, build_columns
from operadash.dashboard.messaging import DataLoaded
from operadash.logger import Logger

log = Logger().setup_logger('Fetcher')

Record = Dict[str, Any]
Query = Dict[str, Any]

_SEPARATORS = re.compile(r'[_\-]')


@dataclass(frozen=True)
class FetchRequest:
    """Everything a fetch task needs; tasks never look at controller state."""

    resource: str
    offset: int = 0
    limit: int = 0
    filter_param: str = ''
    filter_value: str = ''
    generation: int = 0
    definition_ids: Tuple[Tuple[str, str], ...] = ()  # (key, id) of the last loaded definitions


class ResourceAdapter(ABC):
    """Typed access to one well-known resource."""

    names: frozenset = frozenset()
    default_columns: Tuple[str, ...] = ()

    def apply_filter(self, query: Query, name: str, value: str) -> Query:
        if name and value:
            query[name] = value
        return query

    @abstractmethod
    def fetch(self, client: EngineClient, request: FetchRequest) -> Tuple[List[Record], int]:
        """Return the records of the requested page and the total count (-1 when unknown)."""


class DefinitionsAdapter(ResourceAdapter):
    names = DEFINITION_ALIASES
    default_columns = ('id', 'key', 'name', 'version')

    def fetch(self, client, request):
        query = self.apply_filter({}, request.filter_param, request.filter_value)
        definitions = client.fetch_definitions(query, request.offset, request.limit)
        count = client.fetch_count(PATH_PROCESS_DEFINITION, query)
        return [d.to_record() for d in definitions], count


class InstancesAdapter(ResourceAdapter):
    names = INSTANCE_ALIASES
    default_columns = ('id', 'definitionId', 'businessKey', 'startTime')

    DEFINITION_ID_PARAM = 'processDefinitionId'

    def apply_filter(self, query, name, value, definition_ids: Optional[Mapping[str, str]] = None):
        # a definition key handed over as processDefinitionId is swapped for the real id
        if name == self.DEFINITION_ID_PARAM and definition_ids:
            value = definition_ids.get(value, value)
        return super().apply_filter(query, name, value)

    def fetch(self, client, request):
        query = self.apply_filter({}, request.filter_param, request.filter_value, dict(request.definition_ids))
        instances = client.fetch_instances(query, request.offset, request.limit)
        count = client.fetch_count(PATH_PROCESS_INSTANCE, query)
        return [i.to_record() for i in instances], count


class VariablesAdapter(ResourceAdapter):
    """Variables of one instance; the engine returns them all, pages are cut locally."""

    names = VARIABLE_ALIASES
    default_columns = ('name', 'value', 'type')

    def fetch(self, client, request):
        if not request.filter_value:
            return [], UNKNOWN_TOTAL
        variables = sorted(client.fetch_variables(request.filter_value), key=lambda v: v.name)
        records = [v.to_record() for v in variables]
        if request.limit > 0:
            return records[request.offset:request.offset + request.limit], len(records)
        return records, len(records)


def squash(key: str) -> str:
    return _SEPARATORS.sub('', key).lower()


def lookup_value(record: Mapping[str, Any], key: str) -> Any:
    """Value of key in record, matching case-insensitively and across camelCase, snake_case and kebab-case."""
    if key in record:
        return record[key]
    lowered = key.lower()
    for name, value in record.items():
        if name.lower() == lowered:
            return value
    squashed = squash(key)
    for name, value in record.items():
        if squash(name) == squashed:
            return value
    return None


def format_cell(value: Any) -> str:
    if value is None:
        return ''
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(',', ':'), default=str)
    return str(value)


class GenericFetcher:
    """Fetches any resource and turns its records into columns and rows."""

    def __init__(self, config: ConfigProvider) -> None:
        self.config = config
        self._adapters: List[ResourceAdapter] = [DefinitionsAdapter(), InstancesAdapter(), VariablesAdapter()]

    def adapter_for(self, resource: str) -> Optional[ResourceAdapter]:
        for adapter in self._adapters:
            if resource in adapter.names:
                return adapter
        return None

    def fetch(self, client: EngineClient, request: FetchRequest) -> DataLoaded:
        """Blocking; runs inside a task."""
        log.debug(
            labels.LOG_FETCH.format(
                request.resource,
                request.offset,
                request.limit,
                request.filter_param,
                request.filter_value,
                request.generation,
            )
        )
        adapter = self.adapter_for(request.resource)
        if adapter is not None:
            records, count = adapter.fetch(client, request)
        else:
            query = {request.filter_param: request.filter_value} if request.filter_param and request.filter_value else {}
            records, count = client.fetch_collection(request.resource, query, request.offset, request.limit)
        return DataLoaded(resource=request.resource, records=records, count=count, generation=request.generation)

    def columns_for(self, resource: str, records: Sequence[Mapping[str, Any]], width: int) -> List[Column]:
        """Columns from the table definition, else the adapter defaults, else the first record's keys."""
        table_def = self.config.find_table_def(resource)
        if table_def is not None and table_def.columns:
            return build_columns(table_def.visible_columns, width)
        adapter = self.adapter_for(resource)
        if adapter is not None:
            return auto_columns(adapter.default_columns, width)
        if records:
            return auto_columns(sorted(records[0].keys()), width)
        return build_columns([], width)

    @staticmethod
    def rows_for(columns: Sequence[Column], records: Sequence[Mapping[str, Any]]) -> List[Row]:
        return [[format_cell(lookup_value(record, c.key)) if c.key else '' for c in columns] for record in records]

from typing import Any, Dict, List, Mapping, Optional, Tuple

import requests

from operadash import labels
from operadash.client._errors import EngineError
from operadash.client._models import ProcessDefinition, ProcessInstance, Variable
from operadash.configuration import Environment
from operadash.constants import (
    COUNT_TIMEOUT,
    PATH_COUNT_SUFFIX,
    PATH_PROCESS_DEFINITION,
    PATH_PROCESS_INSTANCE,
    REQUEST_TIMEOUT,
    UNKNOWN_TOTAL,
)
from operadash.logger import Logger

log = Logger().setup_logger('EngineClient')

Params = Dict[str, Any]


class EngineClient:
    """
    Thin REST client for one engine environment.

    Every request failure (transport error, timeout, non-2xx status, body that
    is not JSON) is raised as EngineError. Count lookups are best-effort and
    return UNKNOWN_TOTAL instead.
    """

    def __init__(
        self,
        env: Environment,
        timeout: float = REQUEST_TIMEOUT,
        count_timeout: float = COUNT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = env.url.rstrip('/')
        self.timeout = timeout
        self.count_timeout = count_timeout
        self.session = session or requests.Session()
        self.session.headers.update({'Accept': 'application/json'})
        if env.username:
            self.session.auth = (env.username, env.password)

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _request(self, method: str, path: str, timeout: Optional[float] = None, **kwargs) -> requests.Response:
        url = self._url(path)
        log.debug(labels.LOG_REQUEST.format(method, url, kwargs.get('params')))
        try:
            response = self.session.request(method, url, timeout=timeout or self.timeout, **kwargs)
        except requests.exceptions.Timeout as e:
            raise EngineError(f"{method} {url}: request timed out") from e
        except requests.exceptions.RequestException as e:
            raise EngineError(f"{method} {url}: {e}") from e

        if response.status_code >= 400:
            detail = response.text.strip()[:200]
            raise EngineError(
                f"{method} {url}: HTTP {response.status_code} {detail}".rstrip(),
                status_code=response.status_code,
            )
        return response

    def _get_json(self, path: str, params: Optional[Params] = None, timeout: Optional[float] = None) -> Any:
        response = self._request('GET', path, timeout=timeout, params=params)
        try:
            return response.json()
        except ValueError as e:
            raise EngineError(f"GET {self._url(path)}: invalid JSON response: {e}") from e

    def fetch_count(self, path: str, params: Optional[Params] = None) -> int:
        """GET {path}/count, returning UNKNOWN_TOTAL when the lookup fails."""
        count_path = f"{path.rstrip('/')}/{PATH_COUNT_SUFFIX}"
        try:
            data = self._get_json(count_path, params=params, timeout=self.count_timeout)
            return int(data['count'])
        except (EngineError, KeyError, TypeError, ValueError) as e:
            log.debug(labels.LOG_COUNT_UNAVAILABLE.format(count_path, e))
            return UNKNOWN_TOTAL

    @staticmethod
    def _page_params(query: Optional[Params], first_result: int, max_results: int) -> Params:
        params = dict(query or {})
        params['firstResult'] = max(0, first_result)
        if max_results > 0:
            params['maxResults'] = max_results
        return params

    def _get_list(self, path: str, params: Params) -> List[Any]:
        data = self._get_json(path, params=params)
        if not isinstance(data, list):
            raise EngineError(f"GET {self._url(path)}: expected a JSON array")
        return data

    def fetch_definitions(
        self, query: Optional[Params] = None, first_result: int = 0, max_results: int = 0
    ) -> List[ProcessDefinition]:
        params = self._page_params(query, first_result, max_results)
        return [ProcessDefinition.from_json(d) for d in self._get_list(PATH_PROCESS_DEFINITION, params)]

    def fetch_instances(
        self, query: Optional[Params] = None, first_result: int = 0, max_results: int = 0
    ) -> List[ProcessInstance]:
        params = self._page_params(query, first_result, max_results)
        return [ProcessInstance.from_json(d) for d in self._get_list(PATH_PROCESS_INSTANCE, params)]

    def fetch_variables(self, instance_id: str) -> List[Variable]:
        """Variables of one instance; the engine answers with a name→value map or an array."""
        path = f"{PATH_PROCESS_INSTANCE}/{instance_id}/variables"
        data = self._get_json(path)
        if isinstance(data, Mapping):
            return [Variable.from_json(name, value) for name, value in data.items()]
        if isinstance(data, list):
            variables = []
            for item in data:
                if isinstance(item, Mapping):
                    variables.append(Variable.from_json(str(item.get('name', '')), item))
            return variables
        raise EngineError(f"GET {self._url(path)}: unexpected variables payload")

    def set_variable(self, instance_id: str, name: str, value: Any, value_type: str = '') -> None:
        body: Dict[str, Any] = {'value': value}
        if value_type:
            body['type'] = value_type
        self._request('PUT', f"{PATH_PROCESS_INSTANCE}/{instance_id}/variables/{name}", json=body)

    def delete_instance(self, instance_id: str) -> None:
        response = self._request('DELETE', f"{PATH_PROCESS_INSTANCE}/{instance_id}")
        if response.status_code not in (200, 204):
            raise EngineError(
                f"DELETE {PATH_PROCESS_INSTANCE}/{instance_id}: unexpected HTTP {response.status_code}",
                status_code=response.status_code,
            )

    def fetch_collection(
        self, resource: str, query: Optional[Params] = None, first_result: int = 0, max_results: int = 0
    ) -> Tuple[List[Dict[str, Any]], int]:
        """Generic GET /{resource} plus best-effort /{resource}/count with the same filter."""
        params = self._page_params(query, first_result, max_results)
        records = []
        for item in self._get_list(resource, params):
            if isinstance(item, Mapping):
                records.append(dict(item))
            else:
                records.append({'value': item})
        return records, self.fetch_count(resource, dict(query or {}))

"""
Shared fixtures: an in-memory configuration, a mocked engine client and a
task runner that executes tasks synchronously on the calling thread.
"""

import os
import tempfile

# the log file handler is created on first import of the package
os.environ.setdefault('OPERADASH_LOG_DIR', tempfile.mkdtemp(prefix='operadash-logs-'))

import pytest  # noqa: E402
from unittest.mock import MagicMock  # noqa: E402

from operadash.client import EngineClient  # noqa: E402
from operadash.configuration import ConfigProvider  # noqa: E402
from operadash.dashboard.controller import NavigationController  # noqa: E402
from operadash.dashboard.messaging import MessageBus, TaskRunner  # noqa: E402

ENV_DATA = {
    'environments': {
        'local': {'url': 'http://localhost:8080/engine-rest', 'username': 'demo', 'password': 'demo'},
        'staging': {'url': 'http://staging/engine-rest', 'ui_color': 'magenta'},
    },
    'active': 'local',
}

APP_DATA = {
    'tables': [
        {
            'name': 'process-definitions',
            'columns': [
                {'name': 'key', 'width': '40%'},
                {'name': 'name', 'width': '40%'},
                {'name': 'version'},
                {'name': 'id', 'visible': False},
            ],
            'drilldown': [{'target': 'process-instances', 'param': 'processDefinitionKey', 'column': 'key'}],
        },
        {
            'name': 'process-instances',
            'columns': [
                {'name': 'id', 'width': '50%'},
                {'name': 'businessKey'},
            ],
            'drilldown': [{'target': 'process-variables', 'column': 'id'}],
        },
        {
            'name': 'process-variables',
            'columns': [
                {'name': 'name', 'width': '40%'},
                {'name': 'value', 'width': '40%', 'editable': True, 'input_type': 'auto'},
                {'name': 'type'},
            ],
        },
        {
            'name': 'job',
            'columns': [{'name': 'id'}, {'name': 'retries'}],
            'drilldown': [{'target': 'incident', 'param': 'jobId'}],
        },
    ]
}


class SyncTaskRunner(TaskRunner):
    """TaskRunner that runs tasks inline and records scheduled messages instead of starting timers.

    With defer set, submitted tasks are parked in pending until run_pending() is called.
    """

    def __init__(self):
        super().__init__(MessageBus(), max_workers=1)
        self.scheduled = []
        self.pending = []
        self.defer = False

    def submit(self, fn, *args):
        with self._lock:
            self._in_flight += 1
        if self.defer:
            self.pending.append((fn, args))
        else:
            self._run(fn, *args)

    def run_pending(self, index=0):
        fn, args = self.pending.pop(index)
        self._run(fn, *args)

    def schedule(self, delay, message):
        self.scheduled.append((delay, message))


@pytest.fixture
def config():
    return ConfigProvider(ENV_DATA, APP_DATA)


@pytest.fixture
def runner():
    task_runner = SyncTaskRunner()
    yield task_runner
    task_runner.shutdown()


@pytest.fixture
def engine():
    """Mocked EngineClient with empty answers for every call."""
    client = MagicMock(spec=EngineClient)
    client.fetch_definitions.return_value = []
    client.fetch_instances.return_value = []
    client.fetch_variables.return_value = []
    client.fetch_collection.return_value = ([], -1)
    client.fetch_count.return_value = -1
    return client


@pytest.fixture
def controller(config, runner, engine):
    nav = NavigationController(config, runner, client_factory=lambda env: engine)
    nav.resize(80, 10)
    return nav

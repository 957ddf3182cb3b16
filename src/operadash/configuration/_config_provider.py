import os
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import jmespath  # http://jmespath.org/tutorial.html
from ruamel.yaml import YAML, YAMLError

from operadash import labels
from operadash.configuration._environment import Environment
from operadash.configuration._table_def import TableDef
from operadash.constants import BUILTIN_ROOT_CONTEXTS
from operadash.logger import Logger

log = Logger().setup_logger('Configuration')

DEFAULT_ENV_PATH = 'operadash-env.yaml'
DEFAULT_APP_PATH = 'operadash-cfg.yaml'

PathLike = Union[str, Path]


class ConfigError(Exception):
    """Raised when a configuration file is missing or cannot be parsed."""


def _read_yaml(path: Path, what: str) -> Dict[str, Any]:
    try:
        with open(path, encoding='utf-8') as yaml_file:
            data = YAML(typ='safe').load(yaml_file)
    except FileNotFoundError as e:
        raise ConfigError(f"failed to read {what} config file {path}: file not found") from e
    except OSError as e:
        raise ConfigError(f"failed to read {what} config file {path}: {e}") from e
    except YAMLError as e:
        raise ConfigError(f"failed to parse {what} config file {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"failed to parse {what} config file {path}: top level must be a mapping")
    return data


class ConfigProvider:
    """
    Environment and table configuration for the dashboard.

    Usage examples:
        config = ConfigProvider.load('operadash-env.yaml', 'operadash-cfg.yaml')

        # jmespath queries over the combined raw data
        url = config.get('environments.local.url')
        names = config.get('tables[].name')

        # Flexible table lookup (exact, singular/plural, prefix)
        table_def = config.find_table_def('process-definition')

    The table file is static: the program only ever writes the environment
    file, and only to persist the active environment.
    """

    def __init__(
        self,
        env_data: Optional[Mapping[str, Any]] = None,
        app_data: Optional[Mapping[str, Any]] = None,
        env_path: Optional[PathLike] = None,
    ) -> None:
        self._env_data: Dict[str, Any] = dict(env_data or {})
        self._app_data: Dict[str, Any] = dict(app_data or {})
        self._env_path = Path(env_path) if env_path else None

        raw_envs = jmespath.search('environments', self._env_data) or {}
        self.environments: Dict[str, Environment] = {
            str(name): Environment.from_dict(values or {}) for name, values in raw_envs.items()
        }
        self.active: str = str(self._env_data.get('active') or '')
        self.tables: List[TableDef] = [TableDef.from_dict(t) for t in self._app_data.get('tables') or []]

        for table_def in self.tables:
            for target in table_def.unsupported_targets:
                log.warning(labels.LOG_UNSUPPORTED_DRILL.format(table_def.name, target))

    @classmethod
    def load(cls, env_path: PathLike = DEFAULT_ENV_PATH, app_path: PathLike = DEFAULT_APP_PATH) -> 'ConfigProvider':
        """Load the environment file and the table file."""
        env_path = Path(env_path)
        app_path = Path(app_path)
        env_data = _read_yaml(env_path, 'env')
        app_data = _read_yaml(app_path, 'app')
        provider = cls(env_data, app_data, env_path=env_path)
        log.info(labels.LOG_CONFIG_LOADED.format(env_path, app_path))
        provider.list_tables()
        return provider

    def list_tables(self) -> None:
        log.info(labels.LOG_CONFIG_TABLES.format(', '.join(t.name for t in self.tables)))

    def get(self, search_pattern: str) -> Any:
        """Query the combined environment and table data with a jmespath expression."""
        result = jmespath.search(search_pattern, {**self._app_data, **self._env_data})
        log.debug(search_pattern + ': ' + str(result))
        return result

    @property
    def environment_names(self) -> List[str]:
        return sorted(self.environments)

    def environment(self, name: str) -> Optional[Environment]:
        return self.environments.get(name)

    def initial_environment(self) -> str:
        """The active environment when it exists, otherwise the first one by name."""
        if self.active in self.environments:
            return self.active
        names = self.environment_names
        return names[0] if names else ''

    def find_table_def(self, name: str) -> Optional[TableDef]:
        """Find a table by exact name, then singular/plural variants, then prefix."""
        if not name:
            return None
        by_name = {t.name: t for t in self.tables}
        if name in by_name:
            return by_name[name]

        variants = [name[:-1]] if name.endswith('s') else [name + 's']
        for variant in variants:
            if variant in by_name:
                return by_name[variant]

        base = name[:-1] if name.endswith('s') else name
        for table_def in self.tables:
            if table_def.name.startswith(base):
                return table_def
        return None

    def root_contexts(self) -> List[str]:
        """Resources offered by the context popup: built-ins plus configured tables."""
        names = set(BUILTIN_ROOT_CONTEXTS)
        names.update(t.name for t in self.tables if t.name)
        return sorted(names)

    def save_active_environment(self, name: str) -> None:
        """Persist the active environment to the environment file (mode 0600)."""
        self.active = name
        self._env_data['active'] = name
        if self._env_path is None:
            return

        data = {
            'environments': {n: env.to_dict() for n, env in self.environments.items()},
            'active': name,
        }
        yaml = YAML(typ='safe')
        yaml.default_flow_style = False
        fd = os.open(self._env_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, 'w', encoding='utf-8') as outfile:
            yaml.dump(data, outfile)
        os.chmod(self._env_path, 0o600)

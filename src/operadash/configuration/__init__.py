from ._config_provider import DEFAULT_APP_PATH, DEFAULT_ENV_PATH, ConfigError, ConfigProvider
from ._environment import Environment
from ._table_def import ColumnDef, DrillDownDef, DrillTargetKind, TableDef

__all__ = [
    "ConfigProvider",
    "ConfigError",
    "Environment",
    "ColumnDef",
    "DrillDownDef",
    "DrillTargetKind",
    "TableDef",
    "DEFAULT_ENV_PATH",
    "DEFAULT_APP_PATH",
]

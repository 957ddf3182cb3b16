### Resource Names ###
# Canonical resource keys used in breadcrumbs and paging state
RESOURCE_PROCESS_DEFINITIONS = 'process-definitions'
RESOURCE_PROCESS_INSTANCES = 'process-instances'
RESOURCE_PROCESS_VARIABLES = 'process-variables'
RESOURCE_TASKS = 'task'
RESOURCE_JOBS = 'job'
RESOURCE_EXTERNAL_TASKS = 'external-task'
RESOURCE_DEPLOYMENTS = 'deployment'
RESOURCE_DECISION_DEFINITIONS = 'decision-definition'
RESOURCE_HISTORIC_PROCESS_INSTANCES = 'historic-process-instance'

BUILTIN_ROOT_CONTEXTS = (
    RESOURCE_PROCESS_DEFINITIONS,
    RESOURCE_PROCESS_INSTANCES,
    RESOURCE_PROCESS_VARIABLES,
    RESOURCE_TASKS,
    RESOURCE_JOBS,
    RESOURCE_EXTERNAL_TASKS,
    RESOURCE_DEPLOYMENTS,
    RESOURCE_DECISION_DEFINITIONS,
    RESOURCE_HISTORIC_PROCESS_INSTANCES,
)

# Spellings accepted for the well-known resources
DEFINITION_ALIASES = frozenset({'process-definition', 'process-definitions'})
INSTANCE_ALIASES = frozenset({'process-instance', 'process-instances'})
VARIABLE_ALIASES = frozenset({'process-variables', 'variables', 'variable-instance', 'variable-instances'})

# REST paths of the well-known resources
PATH_PROCESS_DEFINITION = 'process-definition'
PATH_PROCESS_INSTANCE = 'process-instance'
PATH_COUNT_SUFFIX = 'count'

# Default drill parameters for configurations without drilldown rules
DEFAULT_DEFINITION_PARAM = 'processDefinitionKey'
DEFAULT_DEFINITION_COLUMN = 'key'
DEFAULT_DRILL_COLUMN = 'id'

### Network ###
REQUEST_TIMEOUT = 10.0
COUNT_TIMEOUT = 5.0
MAX_WORKERS = 4

### Table Layout ###
MIN_COLUMN_WIDTH = 3
EDITABLE_MARKER = ' ✎'
DEFAULT_PAGE_SIZE = 10
UNKNOWN_TOTAL = -1

### Timing (seconds) ###
REFRESH_INTERVAL = 5.0
ERROR_DISPLAY_TIME = 4.0
DRILL_ERROR_DISPLAY_TIME = 3.0
NOTICE_DISPLAY_TIME = 2.0
INPUT_POLL_MS = 100

### Screen Layout ###
# header (4 rows), context line (1), footer (1)
HEADER_LINES = 4
CONTEXT_LINES = 1
FOOTER_LINES = 1
MIN_CONTENT_HEIGHT = 3
TABLE_FRAME_WIDTH = 4
MIN_TABLE_WIDTH = 10

__all__ = [
    'RESOURCE_PROCESS_DEFINITIONS',
    'RESOURCE_PROCESS_INSTANCES',
    'RESOURCE_PROCESS_VARIABLES',
    'RESOURCE_TASKS',
    'RESOURCE_JOBS',
    'RESOURCE_EXTERNAL_TASKS',
    'RESOURCE_DEPLOYMENTS',
    'RESOURCE_DECISION_DEFINITIONS',
    'RESOURCE_HISTORIC_PROCESS_INSTANCES',
    'BUILTIN_ROOT_CONTEXTS',
    'DEFINITION_ALIASES',
    'INSTANCE_ALIASES',
    'VARIABLE_ALIASES',
    'PATH_PROCESS_DEFINITION',
    'PATH_PROCESS_INSTANCE',
    'PATH_COUNT_SUFFIX',
    'DEFAULT_DEFINITION_PARAM',
    'DEFAULT_DEFINITION_COLUMN',
    'DEFAULT_DRILL_COLUMN',
    'REQUEST_TIMEOUT',
    'COUNT_TIMEOUT',
    'MAX_WORKERS',
    'MIN_COLUMN_WIDTH',
    'EDITABLE_MARKER',
    'DEFAULT_PAGE_SIZE',
    'UNKNOWN_TOTAL',
    'REFRESH_INTERVAL',
    'ERROR_DISPLAY_TIME',
    'DRILL_ERROR_DISPLAY_TIME',
    'NOTICE_DISPLAY_TIME',
    'INPUT_POLL_MS',
    'HEADER_LINES',
    'CONTEXT_LINES',
    'FOOTER_LINES',
    'MIN_CONTENT_HEIGHT',
    'TABLE_FRAME_WIDTH',
    'MIN_TABLE_WIDTH',
]

"""
User-facing strings for the operadash dashboard.

This module contains all messages shown in the header, footer, modals and
log output. Centralizing them here keeps the controller free of literals.
"""

# Application
APP_TITLE = "operadash"
APP_STARTING = "Starting operadash"
APP_TERMINATED = "operadash terminated"

# Error messages for terminal size
MSG_TERMINAL_TOO_SMALL = "Terminal too small!"
MSG_RESIZE_CONTINUE = "Please resize to continue"

# Header
HDR_ENVIRONMENT = "env: {}"
HDR_AUTO_REFRESH_ON = "auto-refresh: on"
HDR_AUTO_REFRESH_OFF = "auto-refresh: off"
HDR_ACTIVITY = "●"
HDR_BREADCRUMB_ITEM = "{}:{}"
HDR_BREADCRUMB_SEPARATOR = " > "
HDR_PAGE_INFO = "rows {}-{} of {}"
HDR_PAGE_INFO_UNKNOWN = "rows {}-{}"

# Key hints (key, description)
KEY_HINTS = (
    ("enter", "drill"),
    ("esc", "back"),
    ("pgdn/pgup", "page"),
    ("1-9", "crumb"),
    (":", "context"),
    ("e", "edit"),
    ("^d", "delete"),
    ("^e", "env"),
    ("r", "refresh"),
    ("?", "help"),
    ("^c", "quit"),
)

# Footer messages
MSG_DRILL_UNSUPPORTED = "Drill target '{}' not supported in UI yet"
MSG_INVALID_BREADCRUMB = "Invalid breadcrumb index"
MSG_NO_DEFINITION_SELECTED = "No definition selected to show instances"
MSG_NO_INSTANCE_SELECTED = "No instance selected to show variables"
MSG_UNKNOWN_ROOT = "Unknown context '{}'"
MSG_NO_ENVIRONMENT = "No environment configured"
MSG_NO_EDITABLE_COLUMNS = "No editable columns"
MSG_NO_ROW_SELECTED = "No row selected"
MSG_CANCELLED = "Cancelled"
MSG_SAVED = "Saved"
MSG_DELETED = "Deleted {}"
MSG_RENDER_ERROR = "Error rendering {}: {}"
MSG_VARIABLES_NEED_INSTANCE = "Select an instance to show its variables"

# Edit modal
EDIT_TITLE = "Edit {}"
EDIT_FIELD = "{} ({})"
EDIT_HELP = "Enter save · Tab next · Esc cancel"
EDIT_HELP_SAVE_DISABLED = "[save disabled] · Tab next · Esc cancel"
EDIT_SUGGESTIONS = "Suggestions: {}"
EDIT_BOOL_HELP = "Space toggles true/false"
EDIT_NO_SELECTION = "No selection"
EDIT_VARIABLE_NOT_FOUND = "Variable name not found"
EDIT_NOT_SUPPORTED = "Editing not supported for this table"
EDIT_MISSING_TARGET = "missing instance or variable name"

# Delete modal
DELETE_TITLE = "Delete instance"
DELETE_QUESTION = "Delete process instance {}?"
DELETE_CONFIRM = "Ctrl+D confirms, any other key cancels"

# Help modal
HELP_TITLE = "Keyboard shortcuts"
HELP_LINES = (
    "↑/↓ j/k      move cursor",
    "Enter        drill into the selected row",
    "Esc / b      back to the previous view",
    "PgDn / ^F    next page",
    "PgUp / ^B    previous page",
    "1-9          jump to breadcrumb level",
    ":            switch context (Tab completes)",
    "e            edit the selected row",
    "^D           delete the selected instance",
    "^E           next environment",
    "r / ^R       toggle auto-refresh",
    "^C           quit",
)
HELP_DISMISS = "Press any key to close"

# Root popup
POPUP_PROMPT = ":"

# Log messages
LOG_CONFIG_LOADED = "Configuration loaded from {} and {}"
LOG_CONFIG_TABLES = "Detected table definitions: {}"
LOG_UNSUPPORTED_DRILL = "Table '{}' declares drill target '{}' which has no view"
LOG_SAVE_ENV_FAILED = "warning: failed to save active environment: {}"
LOG_STALE_RESULT = "discarding stale result for {} (generation {} != {})"
LOG_FETCH = "fetch {} offset={} limit={} filter={}={} generation={}"
LOG_NORMALIZED_ROWS = "normalized table rows: cols={} rows_before={} rows_after={}"
LOG_RENDER_FAILED = "table population failed for {}"
LOG_TASK_FAILED = "task {} failed: {}"
LOG_COUNT_UNAVAILABLE = "count lookup {} unavailable: {}"
LOG_REQUEST = "{} {} params={}"

# CLI
CLI_DESCRIPTION = "Terminal dashboard for a workflow-engine REST service"
CLI_CONFIG_ERROR = "Configuration error: {}"
CLI_CONFIG_HINT = "Create '{}' (environments) and '{}' (table definitions), see config/ for examples."
CLI_NO_ENVIRONMENTS = "No environments configured. Define at least one environment in '{}'."
CLI_PICK_ENV_TITLE = "Select the environment to connect to"

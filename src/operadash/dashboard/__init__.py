from .layout import Column, build_columns, default_columns, normalize_rows
from .pagination import PageState, PaginationManager
from .state import NavigationStack, TableModel, ViewMode, ViewState
from .drilldown import Drilldown, DrilldownResolver
from .fetcher import FetchRequest, GenericFetcher
from .controller import NavigationController

__all__ = [
    "Column",
    "build_columns",
    "default_columns",
    "normalize_rows",
    "PageState",
    "PaginationManager",
    "NavigationStack",
    "TableModel",
    "ViewMode",
    "ViewState",
    "Drilldown",
    "DrilldownResolver",
    "FetchRequest",
    "GenericFetcher",
    "NavigationController",
]

"""Custom filter list engine.

Provides the filter store, domain decomposition, list parsing and the
hot-reload controller.
"""

from customlists.core.filtering.custom_lists import (
    CustomFilterLists,
    UPDATE_SUCCESS_MESSAGE,
)
from customlists.core.filtering.domains import (
    public_suffix,
    split_domain,
)
from customlists.core.filtering.filter_store import (
    FilterListStore,
    ReadWriteLock,
)
from customlists.core.filtering.parser import (
    FilterListParseError,
    classify_entry,
    parse_file,
)
from customlists.core.filtering.reload_controller import (
    CHECK_INTERVAL,
    INITIAL_CHECK_DELAY,
    ReloadController,
)

__all__ = [
    "CustomFilterLists",
    "UPDATE_SUCCESS_MESSAGE",
    "public_suffix",
    "split_domain",
    "FilterListStore",
    "ReadWriteLock",
    "FilterListParseError",
    "classify_entry",
    "parse_file",
    "CHECK_INTERVAL",
    "INITIAL_CHECK_DELAY",
    "ReloadController",
]

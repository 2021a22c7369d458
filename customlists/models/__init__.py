# Data models package

from customlists.models.filter_list import (
    FilterListStats,
    FilterListType,
    FilterSets,
    ParseResult,
    ReloadState,
    CUSTOMLIST_DECODE_ERROR,
    CUSTOMLIST_FILE_NOT_FOUND,
    CUSTOMLIST_INVALID_REQUEST,
    CUSTOMLIST_NOT_INITIALIZED,
    CUSTOMLIST_READ_ERROR,
)

__all__ = [
    "FilterListStats",
    "FilterListType",
    "FilterSets",
    "ParseResult",
    "ReloadState",
    "CUSTOMLIST_DECODE_ERROR",
    "CUSTOMLIST_FILE_NOT_FOUND",
    "CUSTOMLIST_INVALID_REQUEST",
    "CUSTOMLIST_NOT_INITIALIZED",
    "CUSTOMLIST_READ_ERROR",
]

from enum import Enum


class SessionState(str, Enum):
    empty = "empty"
    ready = "ready"
    merging = "merging"
    done = "done"
    failed = "failed"


class SortDirection(str, Enum):
    ascending = "asc"
    descending = "desc"

"""
recordkit - reflection utilities for dataclass and pydantic records.

Sub-packages:
- recordkit.core: Errors, logging, settings and timestamp helpers
- recordkit.records: Diff, inherit/overwrite, env binding, query flattening
- recordkit.execution: Retry loops with incremental backoff
"""

__version__ = "0.1.0"

from recordkit.records import *  # noqa

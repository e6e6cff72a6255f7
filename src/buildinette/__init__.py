"""Buildinette - project skeleton generator for C and C++ school projects.

By default, buildinette's internal logging is disabled when used as a library.
Library users can enable logging by calling buildinette.enable_logging().
"""

from buildinette.common import disable_library_logging, enable_library_logging

disable_library_logging()

enable_logging = enable_library_logging

__all__ = [
    "enable_logging",
]

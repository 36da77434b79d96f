"""
LS2 course copy web service.

Exposes section, activity, block and filter duplication of an LMS host
to remote callers, driving the host's backup/restore engine.
"""

__version__ = '0.1.0'

# Plugin build number, date based (YYYYMMDDXX).
PLUGIN_VERSION = 2025040900

"""
asroute Exit Codes

asroute sits in shell pipelines (`traceroute -a host | asroute`), so the exit
status is the only signal a calling script gets. Lookup and parse failures
never change it; only a broken input stream does.
"""

from enum import IntEnum


class ASRouteExitCodes(IntEnum):
    """
    Exit codes for asroute

    Exit codes follow UNIX conventions:
    - 0: Success
    - 1-2: Input/usage errors
    - 128+: Signal termination
    """

    SUCCESS = 0
    INPUT_READ_FAILED = 1
    INVALID_USAGE = 2

    SIGNAL_BASE = 128
    SIGINT_TERMINATION = 130   # Ctrl+C (SIGINT = 2, 128+2)
    SIGTERM_TERMINATION = 143  # SIGTERM = 15, 128+15

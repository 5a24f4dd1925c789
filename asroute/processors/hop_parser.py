#!/usr/bin/env python3
"""
Trace Hop Line Parsing

Classifies traceroute/lft hop lines and pulls out the bracketed AS token
that `traceroute -a` prints in front of each responding hop:

    12  [AS13335] 172.67.6.216 (172.67.6.216)  17.510 ms  16.734 ms  15.266 ms

All functions here are pure and work on normalized (upper-cased) lines.
"""

from typing import Optional

from asroute.models import HopClassification, HopKind


NO_RESPONSE_MARKER = "*"
RESERVED_MARKERS = ("[AS0]", "[AS?]")

NO_RESPONSE_OUTPUT = "-> *"
RESERVED_OUTPUT = "-> AS0 (Reserved)"


def normalize_line(line: str) -> str:
    """Upper-case a raw line and drop its line terminator."""
    return line.rstrip("\r\n").upper()


def classify_line(line: str) -> HopClassification:
    """
    Classify a normalized hop line.

    The no-response check runs first, so a line holding both `*` and a
    reserved marker is NO_RESPONSE.
    """
    if NO_RESPONSE_MARKER in line:
        return HopClassification(HopKind.NO_RESPONSE)

    if any(marker in line for marker in RESERVED_MARKERS):
        return HopClassification(HopKind.RESERVED)

    return HopClassification(HopKind.CANDIDATE, line)


def extract_as_token(line: str) -> Optional[str]:
    """
    Return the text between the first '[' and the first ']' of a line.

    The token is not validated here. Returns None when either bracket is
    missing, or when the first ']' comes before the first '['.
    """
    start = line.find("[")
    end = line.find("]")

    if start == -1 or end == -1 or end < start:
        return None

    return line[start + 1:end]


def marker_output(classification: HopClassification) -> Optional[str]:
    """Fixed output line for marker hops, None for candidates."""
    if classification.kind is HopKind.NO_RESPONSE:
        return NO_RESPONSE_OUTPUT
    if classification.kind is HopKind.RESERVED:
        return RESERVED_OUTPUT
    return None

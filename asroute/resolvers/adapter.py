#!/usr/bin/env python3
"""
Resolver Adapter

Turns a raw bracketed token such as `AS13335` into a display name by way
of whichever resolver was injected.
"""

import re
import time
from typing import Callable, List

from asroute.models import ASRecord, MAX_AS_NUMBER
from asroute.utils.error_handling import (
    InvalidIdentifierError, LookupFailedError, ResolverError
)
from asroute.utils.logging import get_logger


Resolver = Callable[[int], List[ASRecord]]

AS_MARKER = "AS"
UNKNOWN_NAME = "?"

_DIGITS_PATTERN = re.compile(r"\+?[0-9]+")


class ResolverAdapter:
    """Parse AS tokens and map resolver results to display names"""

    def __init__(self, resolver: Resolver):
        self.resolver = resolver
        self.logger = get_logger("asroute.resolver")

    @staticmethod
    def parse_identifier(token: str) -> int:
        """
        Parse an AS token into a 32-bit AS number.

        Every occurrence of "AS" is removed before parsing, not just a
        leading one, so "AS13335" and "13AS335" both give 13335.

        Raises:
            InvalidIdentifierError: the remainder is not an unsigned
                decimal that fits in 32 bits
        """
        digits = token.replace(AS_MARKER, "")

        if not digits:
            raise InvalidIdentifierError(token, "cannot parse integer from empty string")
        if not _DIGITS_PATTERN.fullmatch(digits):
            raise InvalidIdentifierError(token, f"invalid digit found in '{digits}'")

        as_number = int(digits)
        if as_number > MAX_AS_NUMBER:
            raise InvalidIdentifierError(
                token, f"number too large to fit in target type: {digits}"
            )

        return as_number

    def lookup(self, as_number: int) -> str:
        """
        Resolve an AS number to the name of its first record.

        Returns "?" when the resolver answers with no records.

        Raises:
            LookupFailedError: the resolver failed
        """
        start_time = time.time()
        try:
            records = self.resolver(as_number)
        except ResolverError as e:
            self.logger.log_lookup(as_number, False, time.time() - start_time)
            raise LookupFailedError(as_number, e) from e

        self.logger.log_lookup(as_number, True, time.time() - start_time)

        if not records:
            return UNKNOWN_NAME
        return records[0].as_name

    def resolve(self, token: str) -> str:
        """Parse a token and look up its name."""
        return self.lookup(self.parse_identifier(token))

"""
Team Cymru whois AS name resolver

Queries the Team Cymru IP-to-ASN whois service in verbose mode:

    $ whois -h whois.cymru.com " -v AS13335"
    AS      | CC | Registry | Allocated  | AS Name
    13335   | US | arin     | 2010-07-14 | CLOUDFLARENET, US
"""

import logging
import socket
from typing import List, Optional

from asroute.models import ASRecord
from asroute.utils.error_handling import ResolverError


class CymruWhoisResolver:
    """Resolve AS numbers to names over the Team Cymru whois protocol"""

    DEFAULT_HOST = "whois.cymru.com"
    DEFAULT_PORT = 43
    FIELD_SEPARATOR = "|"
    RECV_SIZE = 4096

    def __init__(self, host: str = DEFAULT_HOST, port: int = DEFAULT_PORT,
                 timeout: float = 10.0):
        self.host = host
        self.port = port
        self.timeout = timeout
        self.logger = logging.getLogger(__name__)

    def __call__(self, as_number: int) -> List[ASRecord]:
        return self.resolve(as_number)

    def resolve(self, as_number: int) -> List[ASRecord]:
        """
        Look up name records for an AS number.

        Raises:
            ResolverError: connection failure, timeout, or an error reply
        """
        query = f" -v AS{as_number}\r\n"
        self.logger.debug(f"Querying {self.host}:{self.port} for AS{as_number}")

        try:
            response = self._query(query)
        except socket.timeout as e:
            raise ResolverError(
                f"whois query to {self.host} timed out after {self.timeout}s",
                technical_details=str(e),
            ) from e
        except OSError as e:
            raise ResolverError(
                f"whois query to {self.host}:{self.port} failed: {e}",
                technical_details=type(e).__name__,
            ) from e

        return self.parse_response(response)

    def _query(self, query: str) -> str:
        """Send one whois query and read the reply until the server closes"""
        chunks = []
        with socket.create_connection((self.host, self.port), timeout=self.timeout) as sock:
            sock.sendall(query.encode("ascii"))
            while True:
                data = sock.recv(self.RECV_SIZE)
                if not data:
                    break
                chunks.append(data)

        return b"".join(chunks).decode("utf-8", errors="replace")

    @classmethod
    def parse_response(cls, response: str) -> List[ASRecord]:
        """Parse a verbose whois reply into records, skipping the header row"""
        records = []

        for raw_line in response.splitlines():
            line = raw_line.strip()
            if not line:
                continue

            if line.lower().startswith("error"):
                raise ResolverError(line)

            record = cls._parse_row(line)
            if record is not None:
                records.append(record)

        return records

    @classmethod
    def _parse_row(cls, line: str) -> Optional[ASRecord]:
        # The AS name may itself contain the separator
        fields = [f.strip() for f in line.split(cls.FIELD_SEPARATOR, 4)]
        if len(fields) < 5:
            return None

        # Header row: "AS | CC | Registry | Allocated | AS Name"
        if not fields[0].isdigit():
            return None

        try:
            return ASRecord(
                as_number=int(fields[0]),
                as_name=fields[4],
                country_code=fields[1] or None,
                registry=fields[2] or None,
                allocated=fields[3] or None,
            )
        except ValueError as e:
            raise ResolverError(f"Malformed whois row '{line}': {e}") from e

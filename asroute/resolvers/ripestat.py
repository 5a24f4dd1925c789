"""
RIPEstat AS name resolver

Uses the RIPEstat `as-overview` data call, which needs no authentication:
https://stat.ripe.net/data/as-overview/data.json?resource=AS13335
"""

import logging
from typing import List

import requests

from asroute.models import ASRecord
from asroute.utils.error_handling import ResolverError


class RipeStatResolver:
    """Resolve AS numbers to holder names through the RIPEstat data API"""

    DEFAULT_URL = "https://stat.ripe.net/data/as-overview/data.json"

    def __init__(self, url: str = DEFAULT_URL, timeout: float = 10.0,
                 session: requests.Session = None):
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()
        self.logger = logging.getLogger(__name__)

    def __call__(self, as_number: int) -> List[ASRecord]:
        return self.resolve(as_number)

    def resolve(self, as_number: int) -> List[ASRecord]:
        """
        Look up the holder of an AS number.

        Returns an empty list when RIPEstat knows no holder.

        Raises:
            ResolverError: HTTP failure, timeout, or a non-ok reply
        """
        params = {"resource": f"AS{as_number}"}
        self.logger.debug(f"Querying RIPEstat for AS{as_number}")

        try:
            response = self.session.get(self.url, params=params, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except requests.exceptions.Timeout as e:
            raise ResolverError(
                f"RIPEstat request timed out after {self.timeout}s",
                technical_details=str(e),
            ) from e
        except requests.exceptions.RequestException as e:
            raise ResolverError(f"RIPEstat request failed: {e}",
                                technical_details=type(e).__name__) from e
        except ValueError as e:
            raise ResolverError(f"RIPEstat returned invalid JSON: {e}") from e

        if not isinstance(payload, dict):
            raise ResolverError(
                f"RIPEstat returned unexpected payload type: {type(payload).__name__}"
            )

        if payload.get("status") != "ok":
            message = payload.get("message") or payload.get("status") or "unknown status"
            raise ResolverError(f"RIPEstat error: {message}")

        data = payload.get("data") or {}
        if not isinstance(data, dict):
            raise ResolverError(f"RIPEstat returned unexpected data type: {type(data).__name__}")

        holder = data.get("holder") or ""
        if not isinstance(holder, str):
            raise ResolverError(f"RIPEstat returned unexpected holder: {holder!r}")

        holder = holder.strip()
        if not holder:
            return []

        return [ASRecord(as_number=as_number, as_name=holder)]

"""
asroute AS Name Resolvers

Resolvers are plain callables `resolver(as_number) -> List[ASRecord]` that
raise ResolverError on failure.
"""

from .adapter import Resolver, ResolverAdapter, UNKNOWN_NAME
from .cymru import CymruWhoisResolver
from .ripestat import RipeStatResolver

from asroute.utils.config import ResolverConfig
from asroute.utils.error_handling import ConfigurationError


def create_resolver(config: ResolverConfig) -> Resolver:
    """Build the resolver selected by configuration"""
    if config.backend == "cymru":
        return CymruWhoisResolver(
            host=config.whois_host,
            port=config.whois_port,
            timeout=config.timeout,
        )
    if config.backend == "ripestat":
        return RipeStatResolver(url=config.ripestat_url, timeout=config.timeout)

    raise ConfigurationError(
        f"Unknown resolver backend: {config.backend}",
        guidance="Use --resolver cymru or --resolver ripestat",
    )


__all__ = [
    'Resolver',
    'ResolverAdapter',
    'UNKNOWN_NAME',
    'CymruWhoisResolver',
    'RipeStatResolver',
    'create_resolver',
]

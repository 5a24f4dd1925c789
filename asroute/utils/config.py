#!/usr/bin/env python3
"""
Configuration Management for asroute

Provides centralized configuration handling with:
- Environment variable support
- Configuration file support
- Default values and validation
"""

import os
import json
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, List
import logging


RESOLVER_BACKENDS = ("cymru", "ripestat")


@dataclass
class ResolverConfig:
    """AS name resolver configuration"""

    backend: str = "cymru"
    whois_host: str = "whois.cymru.com"
    whois_port: int = 43
    ripestat_url: str = "https://stat.ripe.net/data/as-overview/data.json"
    timeout: float = 10.0

    def __post_init__(self):
        """Load from environment variables if set"""
        if os.getenv("ASROUTE_RESOLVER"):
            self.backend = os.getenv("ASROUTE_RESOLVER").lower()
        if os.getenv("ASROUTE_WHOIS_HOST"):
            self.whois_host = os.getenv("ASROUTE_WHOIS_HOST")
        if os.getenv("ASROUTE_WHOIS_PORT"):
            try:
                self.whois_port = int(os.getenv("ASROUTE_WHOIS_PORT"))
            except ValueError:
                pass
        if os.getenv("ASROUTE_RIPESTAT_URL"):
            self.ripestat_url = os.getenv("ASROUTE_RIPESTAT_URL")
        if os.getenv("ASROUTE_TIMEOUT"):
            try:
                self.timeout = float(os.getenv("ASROUTE_TIMEOUT"))
            except ValueError:
                pass


@dataclass
class LoggingConfig:
    """Logging configuration"""

    level: str = "WARNING"
    log_to_file: bool = False
    log_file: Optional[str] = None

    def __post_init__(self):
        """Load from environment variables if set"""
        if os.getenv("ASROUTE_LOG_LEVEL"):
            self.level = os.getenv("ASROUTE_LOG_LEVEL").upper()
        if os.getenv("ASROUTE_LOG_FILE"):
            self.log_file = os.getenv("ASROUTE_LOG_FILE")
            self.log_to_file = True


@dataclass
class ASRouteConfig:
    """Main configuration container"""

    resolver: ResolverConfig = None
    logging: LoggingConfig = None

    def __post_init__(self):
        """Initialize subconfigs if not provided"""
        if self.resolver is None:
            self.resolver = ResolverConfig()
        if self.logging is None:
            self.logging = LoggingConfig()


class ConfigManager:
    """Configuration management for asroute"""

    DEFAULT_CONFIG_PATHS = [
        Path.home() / ".config/asroute/config.json",
        Path("/etc/asroute/config.json"),
        Path("./config.json"),
    ]

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize configuration manager

        Args:
            config_path: Optional path to configuration file
        """
        self.logger = logging.getLogger(__name__)
        self.config_path = config_path
        self.config = ASRouteConfig()

        self._load_config()

    def _load_config(self):
        """Load configuration from file and environment"""
        config_file = self._find_config_file()
        if config_file:
            try:
                self._load_from_file(config_file)
                self.logger.info(f"Loaded configuration from {config_file}")
            except (OSError, ValueError, TypeError) as e:
                self.logger.warning(f"Failed to load config file {config_file}: {e}")

        # Environment variables are loaded in __post_init__ methods
        self.logger.debug("Configuration loaded with environment variable overrides")

    def _find_config_file(self) -> Optional[Path]:
        """Find configuration file in default locations"""
        if self.config_path and self.config_path.exists():
            return self.config_path

        for path in self.DEFAULT_CONFIG_PATHS:
            if path.exists():
                return path

        return None

    def _load_from_file(self, config_path: Path):
        """Load configuration from JSON file"""
        with open(config_path, "r") as f:
            data = json.load(f)
        self._load_from_dict(data)

    def _load_from_dict(self, data: dict):
        """Load configuration from dictionary"""
        if "resolver" in data:
            self.config.resolver = ResolverConfig(**data["resolver"])

        if "logging" in data:
            self.config.logging = LoggingConfig(**data["logging"])

    def get_config(self) -> ASRouteConfig:
        """Get current configuration"""
        return self.config

    def update_resolver_config(self, **kwargs):
        """Update resolver configuration, ignoring unset values"""
        for key, value in kwargs.items():
            if value is not None and hasattr(self.config.resolver, key):
                setattr(self.config.resolver, key, value)

    def _check_types(self) -> List[str]:
        """Report config values whose JSON type is wrong"""
        expected = [
            ("resolver.backend", self.config.resolver.backend, (str,)),
            ("resolver.whois_host", self.config.resolver.whois_host, (str,)),
            ("resolver.whois_port", self.config.resolver.whois_port, (int,)),
            ("resolver.ripestat_url", self.config.resolver.ripestat_url, (str,)),
            ("resolver.timeout", self.config.resolver.timeout, (int, float)),
            ("logging.level", self.config.logging.level, (str,)),
        ]

        issues = []
        for name, value, types in expected:
            # bool is an int subclass but never a valid number here
            if isinstance(value, bool) or not isinstance(value, types):
                type_names = " or ".join(t.__name__ for t in types)
                issues.append(f"{name} must be {type_names}, got {value!r}")
        return issues

    def validate_config(self) -> List[str]:
        """
        Validate configuration and return list of issues

        Returns:
            List of validation error messages
        """
        issues = []
        resolver = self.config.resolver

        type_issues = self._check_types()
        if type_issues:
            return type_issues

        if resolver.backend not in RESOLVER_BACKENDS:
            issues.append(
                f"Unknown resolver backend '{resolver.backend}' "
                f"(expected one of: {', '.join(RESOLVER_BACKENDS)})"
            )

        if resolver.timeout <= 0:
            issues.append(f"Resolver timeout must be positive, got {resolver.timeout}")

        if not (1 <= resolver.whois_port <= 65535):
            issues.append(f"Invalid whois port: {resolver.whois_port}")

        if resolver.backend == "cymru" and not resolver.whois_host:
            issues.append("Whois host not configured (set ASROUTE_WHOIS_HOST env var)")

        if resolver.backend == "ripestat" and not resolver.ripestat_url.startswith(
            ("http://", "https://")
        ):
            issues.append(f"Invalid RIPEstat URL: {resolver.ripestat_url}")

        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if self.config.logging.level.upper() not in valid_levels:
            issues.append(f"Invalid log level: {self.config.logging.level}")

        return issues


_config_manager = None
_config_manager_lock = threading.RLock()


def get_config_manager(config_path: Optional[Path] = None) -> ConfigManager:
    """Get global configuration manager instance"""
    global _config_manager

    if _config_manager is not None:
        return _config_manager

    with _config_manager_lock:
        if _config_manager is None:
            _config_manager = ConfigManager(config_path)

        return _config_manager


def reset_config_manager():
    """Drop the global configuration manager so the next call reloads it"""
    global _config_manager
    with _config_manager_lock:
        _config_manager = None


def get_config() -> ASRouteConfig:
    """Get current configuration"""
    return get_config_manager().get_config()

"""Resolver configuration."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping, Optional

import yaml

from .constants import Constants

logger = logging.getLogger(__name__)


@dataclass
class ResolverConfig:
    """Configuration for a resolver session.

    ``log_level`` is not applied by the resolver; applications pass it to
    :func:`cdnresolve.configure_logging` at startup.
    """

    default_cdn: str = Constants.DEFAULT_CDN_HOST
    virtual_root: str = Constants.VIRTUAL_ROOT
    request_timeout: float = Constants.REQUEST_TIMEOUT
    max_redirects: int = Constants.MAX_REDIRECTS
    user_agent: str = Constants.USER_AGENT
    log_level: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ResolverConfig":
        """Create config from a mapping; unknown keys are ignored."""
        known = {f.name for f in fields(cls)}
        values = {key: value for key, value in data.items() if key in known}
        ignored = sorted(set(data) - known)
        if ignored:
            logger.warning("Ignoring unknown resolver settings: %s", ", ".join(map(str, ignored)))
        config = cls(**values)
        config.request_timeout = float(config.request_timeout)
        config.max_redirects = int(config.max_redirects)
        return config

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ResolverConfig":
        """Create config from ``CDNRESOLVE_*`` environment variables.

        Args:
            environ: Environment mapping; defaults to ``os.environ``.

        Returns:
            ResolverConfig instance.
        """
        env = os.environ if environ is None else environ
        config = cls()
        if env.get(Constants.ENV_DEFAULT_CDN):
            config.default_cdn = env[Constants.ENV_DEFAULT_CDN]
        if env.get(Constants.ENV_TIMEOUT):
            try:
                config.request_timeout = float(env[Constants.ENV_TIMEOUT])
            except ValueError:
                logger.warning(
                    "Invalid %s value %r; using %s",
                    Constants.ENV_TIMEOUT,
                    env[Constants.ENV_TIMEOUT],
                    config.request_timeout,
                )
        if env.get(Constants.ENV_LOG_LEVEL):
            config.log_level = env[Constants.ENV_LOG_LEVEL]
        return config

    @classmethod
    def from_file(cls, config_path: Optional[str]) -> "ResolverConfig":
        """Load config from a YAML file.

        The settings may sit at the top level or under a ``resolver:``
        section. A missing or unreadable file yields the defaults.
        """
        return cls.from_mapping(_load_config_file(config_path))


def _load_config_file(config_path: Optional[str]) -> Dict[str, Any]:
    if not config_path:
        return {}

    if not os.path.isfile(config_path):
        logger.warning("Config file not found: %s", config_path)
        return {}

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.error("Failed to load config: %s", e)
        return {}
    if not isinstance(data, dict):
        return {}
    section = data.get("resolver", data)
    return section if isinstance(section, dict) else {}

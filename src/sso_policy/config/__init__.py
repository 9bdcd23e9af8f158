"""
Policy Resolver Configuration Module

Provides centralized configuration management for the policy resolver.
"""

from .schema import AppConfig, ResolverConfig, RegistryConfig, SelectionConfig, LoggingConfig
from .loader import load_config, load_config_from_file, create_default_config, interpolate_env_vars

__all__ = [
    "AppConfig",
    "ResolverConfig",
    "RegistryConfig",
    "SelectionConfig",
    "LoggingConfig",
    "load_config",
    "load_config_from_file",
    "create_default_config",
    "interpolate_env_vars",
]

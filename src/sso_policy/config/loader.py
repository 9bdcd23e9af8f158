"""
Policy Resolver Configuration Loader

Loads configuration from YAML files with environment variable interpolation.

Environment Variable Interpolation:
- ${VAR_NAME} - Required variable, raises error if not set
- ${VAR_NAME:-default} - Optional variable with default value

Example:
```yaml
registry:
  path: "${SERVICE_REGISTRY_PATH:-./services.yaml}"
logging:
  level: "${POLICY_LOG_LEVEL:-INFO}"
```
"""

import os
import re
from pathlib import Path
from typing import Any, Optional, Union
import logging

import yaml

from .schema import AppConfig

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "policy.yaml"

# Pattern for environment variable substitution: ${VAR} or ${VAR:-default}
ENV_VAR_PATTERN = re.compile(r'\$\{([^}:]+)(?::-([^}]*))?\}')


def interpolate_env_vars(value: Any) -> Any:
    """
    Recursively interpolate environment variables in configuration values.

    Supports:
    - ${VAR_NAME} - Required, raises KeyError if not set
    - ${VAR_NAME:-default} - Optional with default value

    Args:
        value: Configuration value (string, dict, list, or primitive)

    Returns:
        Value with environment variables interpolated
    """
    if isinstance(value, str):
        def replace_env_var(match):
            var_name = match.group(1)
            default_value = match.group(2)

            env_value = os.environ.get(var_name)

            if env_value is not None:
                return env_value
            elif default_value is not None:
                return default_value
            else:
                raise KeyError(
                    f"Environment variable '{var_name}' is required but not set. "
                    f"Set it or provide a default: ${{{var_name}:-default}}"
                )

        return ENV_VAR_PATTERN.sub(replace_env_var, value)

    elif isinstance(value, dict):
        return {k: interpolate_env_vars(v) for k, v in value.items()}

    elif isinstance(value, list):
        return [interpolate_env_vars(item) for item in value]

    else:
        return value


def load_config_from_file(
    config_path: Union[str, Path],
    interpolate: bool = True
) -> AppConfig:
    """
    Load resolver configuration from a YAML file.

    Args:
        config_path: Path to policy.yaml configuration file
        interpolate: Whether to interpolate environment variables (default: True)

    Returns:
        AppConfig instance

    Raises:
        FileNotFoundError: If config file doesn't exist
        KeyError: If required environment variable is not set
        yaml.YAMLError: If YAML is malformed
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    logger.info(f"Loading configuration from {config_path}")

    with open(config_path, 'r') as f:
        raw_config = yaml.safe_load(f)

    if raw_config is None:
        raw_config = {}

    if interpolate:
        try:
            raw_config = interpolate_env_vars(raw_config)
        except KeyError as e:
            logger.error(f"Configuration error: {e}")
            raise

    # Relative paths in the file resolve against the file's directory
    if "working_dir" not in raw_config:
        raw_config["working_dir"] = str(config_path.parent.absolute())

    return AppConfig.from_dict(raw_config)


def load_config(
    config_path: Optional[Union[str, Path]] = None,
    working_dir: Optional[Union[str, Path]] = None,
) -> AppConfig:
    """
    Load resolver configuration with sensible defaults.

    Search order for configuration:
    1. Explicit config_path if provided
    2. policy.yaml in working_dir (or its config/ directory)
    3. policy.yaml in current directory (or its config/ directory)
    4. Default configuration
    """
    if config_path:
        return load_config_from_file(config_path)

    search_paths = []

    if working_dir:
        working_dir = Path(working_dir)
        search_paths.append(working_dir / CONFIG_FILE_NAME)
        search_paths.append(working_dir / "config" / CONFIG_FILE_NAME)

    cwd = Path.cwd()
    search_paths.append(cwd / CONFIG_FILE_NAME)
    search_paths.append(cwd / "config" / CONFIG_FILE_NAME)

    for path in search_paths:
        if path.exists():
            logger.info(f"Found configuration at {path}")
            return load_config_from_file(path)

    logger.info(f"No {CONFIG_FILE_NAME} found, using default configuration")
    return AppConfig(
        working_dir=Path(working_dir) if working_dir else cwd
    )


def create_default_config(
    output_path: Optional[Union[str, Path]] = None,
    registry_path: str = "./services.yaml",
) -> Path:
    """
    Create a default policy.yaml configuration file.

    Args:
        output_path: Where to write the config (default: ./policy.yaml)
        registry_path: Service definition file referenced by the config

    Returns:
        Path to created configuration file
    """
    output_path = Path(output_path) if output_path else Path(CONFIG_FILE_NAME)

    default_config = f"""# Policy Resolver Configuration
# Environment variables can be used: ${{VAR_NAME}} or ${{VAR_NAME:-default}}

resolver:
  order: 0
  # Policies applied when no resolver has anything to contribute
  # default_policies:
  #   - type: ANY_HANDLER
  #     try_all: false

registry:
  path: "{registry_path}"
  # Inline service definitions
  # services:
  #   - id: 1
  #     name: "Example"
  #     service_id: "^https://app\\\\.example\\\\.org/.*"
  #     authentication_policy:
  #       criteria:
  #         type: ALL_HANDLERS

selection:
  # query_parameter: "service"

logging:
  level: "${{POLICY_LOG_LEVEL:-INFO}}"
"""

    with open(output_path, 'w') as f:
        f.write(default_config)

    logger.info(f"Created default configuration at {output_path}")
    return output_path

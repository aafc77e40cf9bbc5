import os

import yaml

from drivetime.core.domain.settings import SystemSettings

# Environment variable -> settings field. Env vars take precedence over the file.
ENV_OVERRIDES = {
    "DT_PORTAL_URL": "portal_url",
    "DT_SERVICE_AREA_URL": "service_area_url",
    "DT_API_TOKEN": "api_token",
    "DT_PORTAL_USERNAME": "portal_username",
    "DT_PORTAL_PASSWORD": "portal_password",
    "DT_MAX_RETRIES": "max_retries",
    "DT_SUPERSEDE_IN_FLIGHT": "supersede_in_flight",
}


def load_settings(path: str | None = None) -> SystemSettings:
    """
    Load system settings from a YAML file.
    Falls back to environment variables if file doesn't exist or is not provided.

    Args:
        path: Path to config.yaml. Defaults to DT_CONFIG_FILE env var or "config.yaml".
    """
    if path is None:
        path = os.getenv("DT_CONFIG_FILE", "config.yaml")

    config_data = {}

    if os.path.exists(path):
        try:
            with open(path, "r") as f:
                config_data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise RuntimeError(f"Failed to load configuration from {path}: {e}") from e
        if not isinstance(config_data, dict):
            raise RuntimeError(f"Configuration in {path} must be a mapping")

    for env_name, field_name in ENV_OVERRIDES.items():
        value = os.getenv(env_name)
        if value:
            config_data[field_name] = value

    return SystemSettings(**config_data)

import os
import yaml
from usagelens.core.domain.settings import SystemSettings


def load_settings(path: str | None = None) -> SystemSettings:
    """
    Load system settings from a YAML file.
    Falls back to environment variables if file doesn't exist or is not provided.

    Args:
        path: Path to config.yaml. Defaults to USAGELENS_CONFIG_FILE env var or "config.yaml".
    """
    if path is None:
        path = os.getenv("USAGELENS_CONFIG_FILE", "config.yaml")

    config_data = {}

    if os.path.exists(path):
        try:
            with open(path, "r") as f:
                config_data = yaml.safe_load(f) or {}
        except Exception as e:
            raise RuntimeError(f"Failed to load configuration from {path}: {e}")

    # Env vars > File > Defaults
    if os.getenv("USAGELENS_STORE"):
        config_data["series_store_type"] = os.getenv("USAGELENS_STORE")

    if os.getenv("PROMETHEUS_URL"):
        config_data["prometheus_url"] = os.getenv("PROMETHEUS_URL")

    if os.getenv("USAGELENS_LOG_LEVEL"):
        config_data["log_level"] = os.getenv("USAGELENS_LOG_LEVEL")

    if os.getenv("USAGELENS_WINDOW_SIZE"):
        analytics = dict(config_data.get("analytics") or {})
        analytics["window_size"] = int(os.getenv("USAGELENS_WINDOW_SIZE"))
        config_data["analytics"] = analytics

    return SystemSettings(**config_data)

import sys

from usagelens.adapters.config.settings_loader import load_settings

try:
    settings = load_settings()
    print(f"STORE: {settings.series_store_type}")
    print(f"PROMETHEUS_URL: {settings.prometheus_url}")
    print(f"SELECTOR: {settings.prometheus_metric}{{{settings.prometheus_entity_label}=...}}")
    print(f"ANALYTICS: {settings.analytics.model_dump(mode='json')}")
    print("Configuration loaded successfully!")
except Exception as e:
    print(f"Configuration failed: {e}")
    sys.exit(1)

import sys
from pathlib import Path

# Add project root to sys.path
BASE_DIR = Path(__file__).resolve().parent.parent
sys.path.append(str(BASE_DIR))

from pydantic import ValidationError

from drivetime.adapters.config.settings_loader import load_settings

try:
    settings = load_settings(sys.argv[1] if len(sys.argv) > 1 else None)
    print(f"PORTAL_URL: {settings.portal_url}")
    print(f"SERVICE_AREA_URL: {settings.service_area_url}")
    print(f"BREAKPOINTS: {settings.default_breakpoints} in [{settings.min_breakpoint}, {settings.max_breakpoint}]")
    print(f"CREDENTIALS: {'token' if settings.api_token else 'portal' if settings.portal_username else 'none'}")
    print(f"MAX_RETRIES: {settings.max_retries}")
    print(f"SUPERSEDE_IN_FLIGHT: {settings.supersede_in_flight}")
    print("Configuration loaded successfully!")
except (RuntimeError, ValidationError) as e:
    print(f"Configuration failed: {e}")
    sys.exit(1)

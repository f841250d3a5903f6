"""Configuration management for the bulk order estimator."""
import os
from pathlib import Path
from typing import Final, Optional

from dotenv import load_dotenv
from pydantic import ValidationError

from bulkorder.utilities import constants
from bulkorder.utilities.exceptions import ConfigurationError
from bulkorder.utilities.validators import OrderSheetConfig

# Load environment variables from .env file if it exists
env_path = Path(__file__).parent.parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)

# Application Settings
APP_HOST: Final[str] = os.getenv('APP_HOST', '0.0.0.0')
APP_PORT: Final[int] = int(os.getenv('APP_PORT', '8000'))
LOG_LEVEL: Final[str] = os.getenv('LOG_LEVEL', 'INFO').upper()

# File Paths
BASE_DIR: Final[Path] = Path(__file__).parent.parent
DEFAULT_DATA_DIR: Final[Path] = BASE_DIR / 'data'

_CONFIG_ENV = {
    'max_household_size': 'MAX_HOUSEHOLD_SIZE',
    'max_age_days': 'MAX_AGE_DAYS',
    'min_num_items': 'MIN_NUM_ITEMS',
    'num_households': 'NUM_HOUSEHOLDS',
    'buffer_ratio': 'BUFFER_RATIO',
    'intake_table': 'INTAKE_TABLE',
    'items_by_household_size_table': 'ITEMS_BY_HOUSEHOLD_SIZE_TABLE',
    'bulk_order_table': 'BULK_ORDER_TABLE',
}


def get_order_sheet_config(**overrides) -> OrderSheetConfig:
    """Build run parameters from defaults, environment variables and explicit overrides."""
    values = {}
    for field, env_name in _CONFIG_ENV.items():
        raw = os.getenv(env_name)
        if raw is not None and raw.strip() != '':
            values[field] = raw.strip()
    values.update({k: v for k, v in overrides.items() if v is not None})
    try:
        return OrderSheetConfig(**values)
    except ValidationError as e:
        raise ConfigurationError(
            "Invalid order sheet configuration",
            details={'errors': [f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()]},
        ) from e


def get_record_store_backend() -> str:
    backend = os.getenv('RECORD_STORE', 'json').strip().lower()
    if backend not in constants.RECORD_STORE_BACKENDS:
        raise ConfigurationError(
            f"Unknown record store backend: {backend!r}",
            details={'allowed': list(constants.RECORD_STORE_BACKENDS)},
        )
    return backend


def get_data_dir() -> Path:
    raw = os.getenv('DATA_DIR')
    return Path(raw).expanduser().resolve() if raw else DEFAULT_DATA_DIR


def get_airtable_settings() -> tuple[str, str, str]:
    """Return (api_key, base_id, api_url); both credentials are required."""
    api_key: Optional[str] = os.getenv('AIRTABLE_API_KEY')
    base_id: Optional[str] = os.getenv('AIRTABLE_BASE_ID')
    api_url = os.getenv('AIRTABLE_API_URL', constants.AIRTABLE_API_URL)
    missing = [name for name, val in (('AIRTABLE_API_KEY', api_key), ('AIRTABLE_BASE_ID', base_id)) if not val]
    if missing:
        raise ConfigurationError(
            "Airtable credentials are not configured",
            details={'missing': missing},
        )
    return api_key, base_id, api_url.rstrip('/')

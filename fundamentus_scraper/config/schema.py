"""
Data schema and configuration loading for the table scraper
"""
import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Optional, List, Dict, Any, Mapping

import yaml

from ..core.exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_PATH = Path(__file__).parent / "settings.yaml"

# Environment variable -> config field
ENV_OVERRIDES = {
    'FUNDAMENTUS_URL': 'url',
    'TABLE_MARKER': 'marker',
    'SHEET_ID': 'sheet_id',
    'SHEET_TAB': 'sheet_tab',
    'SERVICE_ACCOUNT_JSON': 'service_account_json',
    'SERVICE_ACCOUNT_FILE': 'service_account_file',
    'HEADLESS': 'headless',
    'LOG_LEVEL': 'log_level',
    'CSV_BACKUP_DIR': 'csv_backup_dir',
}

_TRUE_VALUES = {'1', 'true', 'yes', 'on'}

@dataclass
class TableCandidate:
    """One table-like element found on a rendered page"""
    visible_text: Optional[str]
    outer_html: str

@dataclass
class ScraperConfig:
    """Settings for one scraper run"""

    # Source page
    url: str = "https://www.fundamentus.com.br/fii_resultado.php"
    marker: str = "papel"
    control_labels: List[str] = field(default_factory=lambda: [
        "Filtrar", "Gerar", "Buscar", "Pesquisar", "Aplicar filtros"
    ])

    # Browser
    headless: bool = True
    user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    )
    navigation_timeout_ms: int = 30000
    network_idle_timeout_ms: int = 20000
    post_activation_timeout_ms: int = 5000
    table_wait_timeout_ms: int = 10000
    http_timeout_s: int = 30

    # Destination sheet
    sheet_id: Optional[str] = None
    sheet_tab: str = "FIIs_Fundamentus"
    start_cell: str = "A1"
    clear_before_write: bool = True
    service_account_json: Optional[str] = None
    service_account_file: Optional[str] = None

    # Output
    debug_dir: str = "debug"
    debug_excerpt_chars: int = 2000
    csv_backup_dir: Optional[str] = None
    log_level: str = "INFO"
    log_dir: str = "logs"

    def validate(self, require_publish: bool = True):
        """Check required fields, raising ConfigError listing every missing one"""
        missing = []

        if not self.url:
            missing.append('url')
        if not self.marker:
            missing.append('marker')

        if require_publish:
            if not self.sheet_id:
                missing.append('SHEET_ID')
            if not self.service_account_json and not self.service_account_file:
                missing.append('SERVICE_ACCOUNT_JSON or SERVICE_ACCOUNT_FILE')

        if missing:
            raise ConfigError(f"Missing required configuration: {', '.join(missing)}")

def _flatten(data: Dict[str, Any]) -> Dict[str, Any]:
    """Flatten the sectioned YAML layout into config field names"""
    flat = {}
    for key, value in (data or {}).items():
        if isinstance(value, dict):
            flat.update(value)
        else:
            flat[key] = value
    return flat

def _read_yaml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return _flatten(yaml.safe_load(f) or {})
    except FileNotFoundError:
        raise ConfigError(f"Config file not found: {path}")
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}")

BOOL_FIELDS = {'headless', 'clear_before_write'}
INT_FIELDS = {
    'navigation_timeout_ms', 'network_idle_timeout_ms', 'post_activation_timeout_ms',
    'table_wait_timeout_ms', 'http_timeout_s', 'debug_excerpt_chars',
}
LIST_FIELDS = {'control_labels'}

def _coerce(name: str, value: Any) -> Any:
    """Convert YAML or environment values to the type the config field expects"""
    if value is None:
        return value

    if name in BOOL_FIELDS:
        if isinstance(value, bool):
            return value
        return str(value).strip().lower() in _TRUE_VALUES

    if name in INT_FIELDS:
        if isinstance(value, bool):
            raise ConfigError(f"Invalid integer for {name}: {value!r}")
        try:
            return int(value)
        except (TypeError, ValueError):
            raise ConfigError(f"Invalid integer for {name}: {value!r}")

    if name in LIST_FIELDS:
        if isinstance(value, str):
            return [label.strip() for label in value.split(',') if label.strip()]
        if isinstance(value, (list, tuple)):
            return [str(item) for item in value]
        raise ConfigError(f"Invalid list for {name}: {value!r}")

    return value

def load_config(config_path: Optional[str] = None,
                env: Optional[Mapping[str, str]] = None) -> ScraperConfig:
    """
    Build a ScraperConfig from the packaged defaults, an optional user YAML
    file and environment variables (in increasing precedence).
    """
    if env is None:
        env = os.environ

    values = _read_yaml(DEFAULT_SETTINGS_PATH)

    if config_path:
        values.update(_read_yaml(Path(config_path)))
        logger.info(f"Loaded configuration overrides from {config_path}")

    for env_name, field_name in ENV_OVERRIDES.items():
        env_value = env.get(env_name)
        if env_value:
            values[field_name] = env_value

    known = {f.name for f in fields(ScraperConfig)}
    unknown = sorted(set(values) - known)
    if unknown:
        logger.warning(f"Ignoring unknown configuration keys: {unknown}")

    return ScraperConfig(**{k: _coerce(k, v) for k, v in values.items() if k in known})

"""
Analysis configuration - query parameters from YAML and environment.
Environment variables (and a local .env) override the YAML file.
"""

import logging
import os
import yaml
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


DEFAULT_CONFIG_PATH = './config/analysis.yml'
DEFAULT_PRICES_PATH = './data/gold_prices.xml'


class ConfigError(Exception):
    """Raised when analysis configuration is invalid."""
    pass


@dataclass
class AnalysisConfig:
    """Parameters for the analysis queries."""
    current_year: Optional[int] = None
    profit_window_start: date = date(2020, 1, 1)
    profit_window_end: date = date(2020, 2, 29)
    decile_year_low: int = 2019
    decile_year_high: int = 2022
    yearly_average_years: List[int] = field(default_factory=lambda: [2020, 2023, 2024])
    prices_path: Path = Path(DEFAULT_PRICES_PATH)

    def __post_init__(self):
        """Validate and set defaults."""
        if self.current_year is None:
            self.current_year = date.today().year

        self.prices_path = Path(self.prices_path)

        if self.profit_window_start > self.profit_window_end:
            raise ConfigError("profit_window_start must be <= profit_window_end")

        if self.decile_year_low > self.decile_year_high:
            raise ConfigError("decile_year_low must be <= decile_year_high")

        if not self.yearly_average_years:
            raise ConfigError("yearly_average_years must not be empty")


def _as_int(value: Any, name: str) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"{name} must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{name} must be an integer, got {value!r}")


def _as_date(value: Any, name: str) -> date:
    # YAML already parses unquoted ISO dates
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value))
    except ValueError:
        raise ConfigError(f"{name} must be YYYY-MM-DD, got {value!r}")


def _read_yaml(config_file: Path) -> Dict[str, Any]:
    try:
        with open(config_file, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to load analysis config: {e}")

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise ConfigError("Analysis config must be a mapping")

    section = data.get('analysis', data)
    if section is None:
        return {}

    if not isinstance(section, dict):
        raise ConfigError("'analysis' section must be a mapping")

    return section


def load_analysis_config(config_path: Optional[str] = None) -> AnalysisConfig:
    """
    Load analysis configuration from YAML file and environment.

    Args:
        config_path: Path to YAML config (default: ANALYSIS_CONFIG_PATH
            or ./config/analysis.yml). A missing file means defaults.

    Returns:
        AnalysisConfig

    Raises:
        ConfigError: If the file or any value is invalid
    """
    if config_path is None:
        config_path = os.getenv('ANALYSIS_CONFIG_PATH', DEFAULT_CONFIG_PATH)

    config_file = Path(config_path)
    if config_file.exists():
        data = _read_yaml(config_file)
    else:
        logger.info(f"Analysis config not found, using defaults: {config_path}")
        data = {}

    kwargs = {}

    if data.get('current_year') is not None:
        kwargs['current_year'] = _as_int(data['current_year'], 'current_year')

    window = data.get('profit_window') or {}
    if 'start' in window:
        kwargs['profit_window_start'] = _as_date(window['start'], 'profit_window.start')
    if 'end' in window:
        kwargs['profit_window_end'] = _as_date(window['end'], 'profit_window.end')

    decile = data.get('second_decile') or {}
    if 'year_low' in decile:
        kwargs['decile_year_low'] = _as_int(decile['year_low'], 'second_decile.year_low')
    if 'year_high' in decile:
        kwargs['decile_year_high'] = _as_int(decile['year_high'], 'second_decile.year_high')

    if 'yearly_average_years' in data:
        years = data['yearly_average_years']
        if not isinstance(years, list):
            raise ConfigError("yearly_average_years must be a list")
        kwargs['yearly_average_years'] = [_as_int(y, 'yearly_average_years') for y in years]

    if data.get('prices_path'):
        kwargs['prices_path'] = Path(data['prices_path'])

    # Environment overrides
    env_prices = os.getenv('GOLD_PRICES_PATH')
    if env_prices:
        kwargs['prices_path'] = Path(env_prices)

    env_year = os.getenv('ANALYSIS_CURRENT_YEAR')
    if env_year:
        kwargs['current_year'] = _as_int(env_year, 'ANALYSIS_CURRENT_YEAR')

    return AnalysisConfig(**kwargs)

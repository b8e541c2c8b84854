"""
Tests for analysis configuration loading.
"""

import os
import pytest
import tempfile
import yaml
from datetime import date
from pathlib import Path
from unittest.mock import patch

from analysis.config import (
    AnalysisConfig,
    load_analysis_config,
    ConfigError
)


def write_yaml(data):
    """Write data to a temporary YAML file and return its path."""
    with tempfile.NamedTemporaryFile(mode='w', suffix='.yml', delete=False) as f:
        yaml.dump(data, f)
        return f.name


class TestAnalysisConfig:
    """Tests for AnalysisConfig defaults and validation."""

    def test_defaults(self):
        config = AnalysisConfig()

        assert config.current_year == date.today().year
        assert config.profit_window_start == date(2020, 1, 1)
        assert config.profit_window_end == date(2020, 2, 29)
        assert (config.decile_year_low, config.decile_year_high) == (2019, 2022)
        assert config.yearly_average_years == [2020, 2023, 2024]
        assert config.prices_path == Path('./data/gold_prices.xml')

    def test_invalid_profit_window(self):
        with pytest.raises(ConfigError, match="profit_window_start"):
            AnalysisConfig(profit_window_start=date(2020, 3, 1), profit_window_end=date(2020, 1, 1))

    def test_invalid_decile_years(self):
        with pytest.raises(ConfigError, match="decile_year_low"):
            AnalysisConfig(decile_year_low=2023, decile_year_high=2019)

    def test_empty_yearly_years(self):
        with pytest.raises(ConfigError, match="yearly_average_years"):
            AnalysisConfig(yearly_average_years=[])


class TestLoadAnalysisConfig:
    """Tests for YAML + environment loading."""

    def test_load_valid_config(self):
        config_path = write_yaml({
            'analysis': {
                'current_year': 2024,
                'profit_window': {'start': '2021-01-01', 'end': '2021-03-31'},
                'second_decile': {'year_low': 2018, 'year_high': 2020},
                'yearly_average_years': [2021, 2022],
                'prices_path': 'prices.xml'
            }
        })

        try:
            with patch.dict(os.environ, {}, clear=True):
                config = load_analysis_config(config_path)

            assert config.current_year == 2024
            assert config.profit_window_start == date(2021, 1, 1)
            assert config.profit_window_end == date(2021, 3, 31)
            assert (config.decile_year_low, config.decile_year_high) == (2018, 2020)
            assert config.yearly_average_years == [2021, 2022]
            assert config.prices_path == Path('prices.xml')
        finally:
            Path(config_path).unlink()

    def test_missing_file_uses_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            config = load_analysis_config('/nonexistent/analysis.yml')

        assert config == AnalysisConfig()

    def test_environment_overrides_yaml(self):
        config_path = write_yaml({'analysis': {'current_year': 2020, 'prices_path': 'a.xml'}})

        try:
            env = {'ANALYSIS_CURRENT_YEAR': '2023', 'GOLD_PRICES_PATH': 'b.xml'}
            with patch.dict(os.environ, env, clear=True):
                config = load_analysis_config(config_path)

            assert config.current_year == 2023
            assert config.prices_path == Path('b.xml')
        finally:
            Path(config_path).unlink()

    def test_config_path_from_environment(self):
        config_path = write_yaml({'current_year': 2019})

        try:
            with patch.dict(os.environ, {'ANALYSIS_CONFIG_PATH': config_path}, clear=True):
                config = load_analysis_config()

            assert config.current_year == 2019
        finally:
            Path(config_path).unlink()

    def test_invalid_yaml(self):
        with tempfile.NamedTemporaryFile(mode='w', suffix='.yml', delete=False) as f:
            f.write("invalid: yaml: content: [unclosed")
            config_path = f.name

        try:
            with pytest.raises(ConfigError, match="Failed to load analysis config"):
                load_analysis_config(config_path)
        finally:
            Path(config_path).unlink()

    def test_invalid_year_value(self):
        config_path = write_yaml({'current_year': 'next year'})

        try:
            with patch.dict(os.environ, {}, clear=True):
                with pytest.raises(ConfigError, match="current_year must be an integer"):
                    load_analysis_config(config_path)
        finally:
            Path(config_path).unlink()

    def test_invalid_env_year(self):
        with patch.dict(os.environ, {'ANALYSIS_CURRENT_YEAR': 'abc'}, clear=True):
            with pytest.raises(ConfigError, match="ANALYSIS_CURRENT_YEAR"):
                load_analysis_config('/nonexistent/analysis.yml')

    def test_shipped_config_loads(self):
        """Test the repository's config/analysis.yml is valid."""
        shipped = Path(__file__).parent.parent.parent / 'config' / 'analysis.yml'

        with patch.dict(os.environ, {}, clear=True):
            config = load_analysis_config(str(shipped))

        assert config.yearly_average_years == [2020, 2023, 2024]
        assert config.profit_window_end == date(2020, 2, 29)

"""Configuration loader with 3-tier parameter precedence."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml

from .defaults import (
    BollingerParams,
    DailyChangeParams,
    DefaultConfig,
    MACrossParams,
    NWeekParams,
    PriceCrossParams,
    RSIParams,
    SeriesParams,
    get_default_config,
)
from .validation import ConfigValidator

SECTION_TYPES = {
    "n_week_low": NWeekParams,
    "n_week_high": NWeekParams,
    "ma_cross": MACrossParams,
    "daily_change": DailyChangeParams,
    "rsi": RSIParams,
    "bollinger": BollingerParams,
    "price_cross": PriceCrossParams,
    "series": SeriesParams,
}


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading with 3-tier precedence."""

    config_dir: Path
    defaults: DefaultConfig
    symbols_file: str = "symbols.yaml"

    @classmethod
    def create(
        cls,
        config_dir: Optional[Path] = None,
        symbols_file: str = "symbols.yaml"
    ) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_dir is None:
            config_dir = Path(__file__).parent.parent.parent / "config"

        return cls(
            config_dir=Path(config_dir),
            defaults=get_default_config(),
            symbols_file=symbols_file,
        )

    @property
    def symbols_path(self) -> Path:
        return self.config_dir / self.symbols_file

    def _load_symbols(self) -> dict[str, Any]:
        """
        Read the per-symbol overrides table.

        Raises:
            ValueError: If the file is not valid YAML or not a symbol mapping
        """
        if not self.symbols_path.exists():
            return {}

        try:
            with open(self.symbols_path) as f:
                symbols_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {self.symbols_path}: {e}") from e

        if not isinstance(symbols_config, dict):
            raise ValueError(f"{self.symbols_path} must contain a mapping")

        symbols = symbols_config.get("symbols") or {}
        if not isinstance(symbols, dict):
            raise ValueError(f"'symbols' in {self.symbols_path} must be a mapping")

        return {str(symbol).upper(): overrides for symbol, overrides in symbols.items()}

    def configured_symbols(self) -> list[str]:
        """Symbols that carry overrides, sorted."""
        return sorted(self._load_symbols())

    def load_symbol_config(self, symbol: str) -> dict[str, Any]:
        """
        Load symbol-specific configuration overrides.

        Raises:
            ValueError: If the overrides file or the symbol's entry is malformed
        """
        overrides = self._load_symbols().get(symbol.upper()) or {}
        if not isinstance(overrides, dict):
            raise ValueError(f"Overrides for {symbol.upper()} must be a mapping, got {overrides!r}")
        return overrides

    def merge_config(
        self,
        symbol: str,
        overrides: Optional[dict[str, Any]] = None
    ) -> dict[str, Any]:
        """
        Merge configuration with 3-tier precedence.

        Priority order:
        1. Per-call overrides (highest priority)
        2. Symbol-specific overrides
        3. Global defaults (lowest priority)
        """
        config = self._dataclass_to_dict(self.defaults)

        symbol_config = self.load_symbol_config(symbol)
        config = self._deep_merge(config, symbol_config)

        if overrides:
            config = self._deep_merge(config, overrides)

        return config

    def build_config(
        self,
        symbol: str,
        overrides: Optional[dict[str, Any]] = None
    ) -> DefaultConfig:
        """
        Merge and validate configuration into a DefaultConfig.

        Raises:
            ValueError: If the merged configuration is invalid
        """
        merged = self.merge_config(symbol, overrides)

        errors = ConfigValidator.validate_config(merged)
        if errors:
            details = "; ".join(f"{err.field}: {err.message} (got: {err.value})" for err in errors)
            raise ValueError(f"Invalid configuration for {symbol}: {details}")

        sections = {}
        for name, section_type in SECTION_TYPES.items():
            values = {
                key: tuple(value) if isinstance(value, list) else value
                for key, value in merged[name].items()
                if key in section_type.__dataclass_fields__
            }
            sections[name] = section_type(**values)

        return DefaultConfig(**sections)

    def _dataclass_to_dict(self, obj: Any) -> dict[str, Any]:
        """Convert nested dataclasses to dictionary."""
        if hasattr(obj, '__dataclass_fields__'):
            result = {}
            for field_name, _field in obj.__dataclass_fields__.items():
                value = getattr(obj, field_name)
                if hasattr(value, '__dataclass_fields__'):
                    result[field_name] = self._dataclass_to_dict(value)
                elif isinstance(value, tuple):
                    result[field_name] = list(value)
                else:
                    result[field_name] = value
            return result
        return obj  # type: ignore[no-any-return]

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

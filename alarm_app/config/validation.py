"""Configuration validation utilities."""

from dataclasses import dataclass, fields
from typing import Any

from .defaults import (
    BollingerParams,
    DailyChangeParams,
    MACrossParams,
    NWeekParams,
    PriceCrossParams,
    RSIParams,
    SeriesParams,
)

MA_DIRECTIONS = ("above", "below", "cross-up", "cross-down")

SECTION_FIELDS = {
    name: frozenset(f.name for f in fields(params))
    for name, params in (
        ("n_week_low", NWeekParams),
        ("n_week_high", NWeekParams),
        ("ma_cross", MACrossParams),
        ("daily_change", DailyChangeParams),
        ("rsi", RSIParams),
        ("bollinger", BollingerParams),
        ("price_cross", PriceCrossParams),
        ("series", SeriesParams),
    )
}


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class ConfigValidator:
    """Validates parameter grid configuration."""

    @staticmethod
    def _validate_int_grid(
        section: str,
        name: str,
        values: Any,
        minimum: int,
        maximum: int = None
    ) -> list[ValidationError]:
        """Validate a list of integers within bounds."""
        field = f"{section}.{name}"
        if not isinstance(values, (list, tuple)):
            return [ValidationError(field=field, message="Must be a list", value=values)]

        errors = []
        for value in values:
            out_of_range = _is_int(value) and (
                value < minimum or (maximum is not None and value > maximum)
            )
            if not _is_int(value) or out_of_range:
                bound = f"between {minimum} and {maximum}" if maximum is not None else f">= {minimum}"
                errors.append(ValidationError(
                    field=field,
                    message=f"Entries must be integers {bound}",
                    value=value
                ))
        ints = [v for v in values if _is_int(v)]
        if len(set(ints)) != len(ints):
            errors.append(ValidationError(
                field=field,
                message="Entries must be unique",
                value=list(values)
            ))
        return errors

    @staticmethod
    def validate_n_week_params(section: str, params: dict[str, Any]) -> list[ValidationError]:
        """Validate N-week low/high parameters."""
        errors = []

        if "weeks" in params:
            errors.extend(ConfigValidator._validate_int_grid(section, "weeks", params["weeks"], 1))

        if "fluctuations" in params:
            errors.extend(ConfigValidator._validate_int_grid(
                section, "fluctuations", params["fluctuations"], 0, 100
            ))

        return errors

    @staticmethod
    def validate_ma_cross_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate moving-average crossover parameters."""
        errors = []

        if "periods" in params:
            errors.extend(ConfigValidator._validate_int_grid("ma_cross", "periods", params["periods"], 1))

        if "directions" in params:
            directions = params["directions"]
            if not isinstance(directions, (list, tuple)):
                errors.append(ValidationError(
                    field="ma_cross.directions",
                    message="Must be a list",
                    value=directions
                ))
            else:
                for direction in directions:
                    if direction not in MA_DIRECTIONS:
                        errors.append(ValidationError(
                            field="ma_cross.directions",
                            message=f"Must be one of {', '.join(MA_DIRECTIONS)}",
                            value=direction
                        ))

        return errors

    @staticmethod
    def validate_daily_change_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate daily change thresholds."""
        if "thresholds" not in params:
            return []
        return ConfigValidator._validate_int_grid("daily_change", "thresholds", params["thresholds"], 1, 100)

    @staticmethod
    def validate_rsi_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate RSI parameters."""
        errors = []

        if "period" in params:
            value = params["period"]
            if not _is_int(value) or value <= 0:
                errors.append(ValidationError(
                    field="rsi.period",
                    message="Must be a positive integer",
                    value=value
                ))

        for name in ("oversold_thresholds", "overbought_thresholds"):
            if name in params:
                errors.extend(ConfigValidator._validate_int_grid("rsi", name, params[name], 0, 100))

        return errors

    @staticmethod
    def validate_bollinger_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate Bollinger band parameters."""
        errors = []

        if "period" in params:
            value = params["period"]
            if not _is_int(value) or value <= 0:
                errors.append(ValidationError(
                    field="bollinger.period",
                    message="Must be a positive integer",
                    value=value
                ))

        if "std_dev" in params:
            value = params["std_dev"]
            if not _is_number(value) or value <= 0:
                errors.append(ValidationError(
                    field="bollinger.std_dev",
                    message="Must be a positive number",
                    value=value
                ))

        if "distance_percents" in params:
            errors.extend(ConfigValidator._validate_int_grid(
                "bollinger", "distance_percents", params["distance_percents"], 0, 100
            ))

        return errors

    @staticmethod
    def validate_price_cross_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate close-crosses-MA parameters."""
        errors = []

        if "enabled" in params and not isinstance(params["enabled"], bool):
            errors.append(ValidationError(
                field="price_cross.enabled",
                message="Must be a boolean",
                value=params["enabled"]
            ))

        if "periods" in params:
            errors.extend(ConfigValidator._validate_int_grid("price_cross", "periods", params["periods"], 1))

        return errors

    @staticmethod
    def validate_series_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate series gating parameters."""
        if "min_history_points" not in params:
            return []
        value = params["min_history_points"]
        if not _is_int(value) or value < 0:
            return [ValidationError(
                field="series.min_history_points",
                message="Must be a non-negative integer",
                value=value
            )]
        return []

    @staticmethod
    def validate_section_shape(section: str, params: Any) -> list[ValidationError]:
        """Check a section is a mapping of known parameter names."""
        if not isinstance(params, dict):
            return [ValidationError(field=section, message="Must be a mapping", value=params)]

        known = SECTION_FIELDS[section]
        return [
            ValidationError(field=f"{section}.{key}", message="Unknown parameter", value=params[key])
            for key in sorted(params, key=str)
            if key not in known
        ]

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        if not isinstance(config, dict):
            return [ValidationError(field="config", message="Must be a mapping", value=config)]

        errors = [
            ValidationError(field=str(section), message="Unknown section", value=config[section])
            for section in sorted(config, key=str)
            if section not in SECTION_FIELDS
        ]

        validators = {
            "ma_cross": ConfigValidator.validate_ma_cross_params,
            "daily_change": ConfigValidator.validate_daily_change_params,
            "rsi": ConfigValidator.validate_rsi_params,
            "bollinger": ConfigValidator.validate_bollinger_params,
            "price_cross": ConfigValidator.validate_price_cross_params,
            "series": ConfigValidator.validate_series_params,
        }

        for section in SECTION_FIELDS:
            if section not in config:
                continue

            errors.extend(ConfigValidator.validate_section_shape(section, config[section]))
            if not isinstance(config[section], dict):
                continue

            if section in ("n_week_low", "n_week_high"):
                errors.extend(ConfigValidator.validate_n_week_params(section, config[section]))
            else:
                errors.extend(validators[section](config[section]))

        return errors

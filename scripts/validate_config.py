#!/usr/bin/env python3
"""Configuration validation script."""

import sys
from pathlib import Path
from typing import List

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from alarm_app.catalogue.builder import AlarmCatalogueBuilder
from alarm_app.config.loader import ConfigLoader
from alarm_app.config.validation import ConfigValidator, ValidationError
from alarm_app.logging import configure_logging

SYMBOL_FILES = ("symbols.yaml", "symbols.example.yaml")


def validate_symbol_config(loader: ConfigLoader, symbol: str) -> List[ValidationError]:
    """Validate configuration for a specific symbol."""
    config = loader.merge_config(symbol)
    return ConfigValidator.validate_config(config)


def validate_file(symbols_file: str) -> bool:
    """Validate every symbol in one overrides file plus an unconfigured one."""
    print(f"\n== {symbols_file}")
    loader = ConfigLoader.create(symbols_file=symbols_file)

    try:
        symbols = loader.configured_symbols() + ["UNKNOWN-SYMBOL"]  # should use defaults
    except ValueError as e:
        print(f"  {e}")
        return False

    all_valid = True

    for symbol in symbols:
        print(f"\n{symbol}:")

        try:
            errors = validate_symbol_config(loader, symbol)
        except ValueError as e:
            errors = [ValidationError(field=symbol, message=str(e), value=None)]

        if errors:
            print(f"  Found {len(errors)} validation errors:")
            for error in errors:
                print(f"  - {error.field}: {error.message} (value: {error.value})")
            all_valid = False
            continue

        builder = AlarmCatalogueBuilder(loader.build_config(symbol))
        print(f"  valid, {len(builder.alarm_names())} alarms")

    return all_valid


def main():
    """Main validation function."""
    configure_logging(level="WARNING")
    print("Validating alarm grid configuration...")

    results = [validate_file(symbols_file) for symbols_file in SYMBOL_FILES]

    if all(results):
        print("\nAll configuration validation passed!")
        sys.exit(0)
    else:
        print("\nConfiguration validation failed!")
        sys.exit(1)


if __name__ == "__main__":
    main()

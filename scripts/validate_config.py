#!/usr/bin/env python3
"""Configuration validation script."""

import sys
from pathlib import Path
from typing import List, Optional

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from inline_edit.config.loader import ConfigLoader
from inline_edit.config.validation import ConfigValidator
from inline_edit.errors import ConfigurationError, ValidationError


def validate_profile(loader: ConfigLoader, profile: Optional[str]) -> List[ValidationError]:
    """Validate the merged configuration of one profile."""
    config = loader.merge_config(profile)
    return ConfigValidator.validate_config(config)


def main(argv: Optional[List[str]] = None) -> int:
    """Validate every profile of a config directory."""
    argv = sys.argv[1:] if argv is None else argv
    config_dir = Path(argv[0]) if argv else None
    loader = ConfigLoader.create(config_dir)

    print(f"🔍 Validating widget profiles in {loader.config_dir}...")

    try:
        profiles = [None] + sorted(loader.load_profiles())
    except ConfigurationError as e:
        print(f"❌ {e}")
        return 1

    all_valid = True

    for profile in profiles:
        name = profile or "defaults"
        errors = validate_profile(loader, profile)

        if errors:
            print(f"❌ {name}: {len(errors)} validation errors")
            for error in errors:
                print(f"  • {error.field}: {error.message} (value: {error.value})")
            all_valid = False
        else:
            print(f"✅ {name} configuration is valid")

    if all_valid:
        print("\n🎉 All configuration validation passed!")
        return 0

    print("\n❌ Configuration validation failed!")
    return 1


if __name__ == "__main__":
    sys.exit(main())

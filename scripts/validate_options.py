#!/usr/bin/env python3
"""Options file validation script.

Checks an add-on options file without contacting Akahu or Home Assistant.

Usage:
    python scripts/validate_options.py /data/options.json
"""

import sys
from pathlib import Path

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from banker_app.config.loader import ConfigLoader
from banker_app.config.validation import ConfigValidator
from banker_app.errors import ConfigurationError


def main():
    """Main validation function."""
    if len(sys.argv) != 2:
        print("Usage: validate_options.py OPTIONS_PATH")
        sys.exit(2)

    options_path = sys.argv[1]
    print(f"🔍 Validating {options_path}...")

    loader = ConfigLoader.create()

    try:
        options = loader.read_options(options_path)
    except ConfigurationError as e:
        print(f"❌ {e}")
        sys.exit(1)

    errors = ConfigValidator.validate_options(options)
    if errors:
        print(f"❌ Found {len(errors)} validation errors:")
        for error in errors:
            print(f"  • {error.field}: {error.message} (value: {error.value})")
        sys.exit(1)

    try:
        config = loader.from_options(options, source=options_path)
    except ConfigurationError as e:
        print(f"❌ {e}")
        sys.exit(1)

    print("✅ Options are valid")
    for key, value in config.redacted().items():
        print(f"  • {key}: {value}")
    print(f"  • confirmation link base: {config.web_url}")
    sys.exit(0)


if __name__ == "__main__":
    main()

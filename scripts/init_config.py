#!/usr/bin/env python3
"""
Quick setup for the Vinyl Collection Browser: create config.py from the template.
"""

import shutil
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent


def check_python_version() -> bool:
    """Check if Python version is 3.8+"""
    if sys.version_info < (3, 8):
        print("❌ Error: Python 3.8 or higher is required")
        print(f"   Current version: {sys.version}")
        return False
    print(f"✅ Python version OK: {sys.version.split()[0]}")
    return True


def setup_config(root: Path = ROOT) -> bool:
    """Create configuration file from template"""
    config_template = root / "config.template.py"
    config_file = root / "config.py"

    if config_file.exists():
        print(f"⚠️  Configuration file {config_file.name} already exists")
        return True

    if not config_template.exists():
        print(f"❌ Template file {config_template.name} not found")
        return False

    try:
        shutil.copy2(config_template, config_file)
    except OSError as e:
        print(f"❌ Failed to create config file: {e}")
        return False

    print(f"✅ Created configuration file: {config_file.name}")
    print(f"   📝 Please edit {config_file.name} and set COLLECTION_SOURCE")
    return True


def main() -> int:
    print("🎵 Vinyl Collection Browser Setup")
    print("=" * 40)

    if not check_python_version():
        return 1

    if not setup_config():
        return 1

    print("\n" + "=" * 40)
    print("🎉 Setup complete!")
    print("\n📋 Next steps:")
    print("1. Edit config.py with the path or URL of your collection export")
    print("2. Start the browser: python webui/app.py")
    print("3. Optional coverage report: python scripts/audit_enrichment.py")
    return 0


if __name__ == "__main__":
    sys.exit(main())

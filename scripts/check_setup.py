#!/usr/bin/env python3
"""
Check that the haulbase client is ready to use.

This script checks:
- The Python version
- That a .env file exists and points at an API
- That config/config.yaml is valid YAML
- That the required packages import
"""

import os
import sys
from pathlib import Path

import yaml
from dotenv import load_dotenv


def check_python_version() -> bool:
    """Verify Python version is 3.10 or higher."""
    if sys.version_info < (3, 10):
        print(f"❌ Python 3.10+ required. Current version: {sys.version}")
        return False
    print(f"✅ Python version: {sys.version_info.major}.{sys.version_info.minor}")
    return True


def check_env_file() -> bool:
    """Check if .env file exists."""
    if not Path(".env").exists():
        print("❌ .env file not found")
        print("   Create one with at least HAULBASE_API_URL=<your API base URL>")
        return False
    print("✅ .env file exists")
    return True


def load_and_validate_env() -> bool:
    """Load environment variables and check the API settings."""
    load_dotenv()

    api_url = os.getenv("HAULBASE_API_URL")
    if not api_url:
        print("❌ HAULBASE_API_URL is not set")
        return False
    if not api_url.startswith(("http://", "https://")):
        print(f"❌ HAULBASE_API_URL is not an http(s) URL: {api_url}")
        return False
    print(f"✅ API URL: {api_url}")

    optional_missing = [
        var for var in ("HAULBASE_ORG_SLUG", "HAULBASE_TOKEN_FILE") if not os.getenv(var)
    ]
    if optional_missing:
        print(f"⚠️  Optional variables not set: {', '.join(optional_missing)}")

    return True


def check_config_file() -> bool:
    """Validate config/config.yaml when present; defaults apply otherwise."""
    path = Path("config/config.yaml")
    if not path.exists():
        print("⚠️  config/config.yaml not found, built-in defaults will be used")
        return True

    try:
        with open(path) as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        print(f"❌ Error parsing config.yaml: {e}")
        return False

    if not isinstance(config, dict):
        print("❌ config.yaml must contain a mapping")
        return False
    print("✅ config.yaml is valid YAML")
    return True


def test_imports() -> bool:
    """Test that required packages can be imported."""
    required_packages = [
        "httpx",
        "pydantic",
        "pydantic_settings",
        "structlog",
        "typer",
        "rich",
        "yaml",
        "dotenv",
    ]

    missing = []
    for package in required_packages:
        try:
            __import__(package)
        except ImportError:
            missing.append(package)

    if missing:
        print(f"❌ Missing packages: {', '.join(missing)}")
        print("   Run: pip install -e .")
        return False

    print("✅ All required packages installed")
    return True


def display_next_steps() -> None:
    """Show user what to do next."""
    print("\n" + "=" * 60)
    print("🎉 Setup looks good!")
    print("=" * 60)
    print("\nNext steps:")
    print("\n1. Log in:")
    print("   haulbase login you@example.com")
    print("2. Try a few commands:")
    print("   haulbase loads list")
    print("   haulbase expenses list --status pending_approval")
    print("\n" + "=" * 60)


def main() -> int:
    """Run all setup checks."""
    print("=" * 60)
    print("haulbase - Setup check")
    print("=" * 60)

    checks = [
        ("Python version", check_python_version),
        (".env file", check_env_file),
        ("Environment variables", load_and_validate_env),
        ("Configuration file", check_config_file),
        ("Package imports", test_imports),
    ]

    passed = 0
    failed = 0

    for name, check_func in checks:
        print(f"\nChecking {name}...")
        if check_func():
            passed += 1
        else:
            failed += 1

    print("\n" + "=" * 60)
    print(f"Results: {passed} passed, {failed} failed")
    print("=" * 60)

    if failed == 0:
        display_next_steps()
        return 0

    print("\n❌ Some checks failed. Please fix the issues above.")
    return 1


if __name__ == "__main__":
    sys.exit(main())

"""
Build script for TurboEscape with optional mypyc compilation.

Usage:
    # Pure Python build (default)
    python -m build

    # Compiled with mypyc
    TURBOESCAPE_USE_MYPYC=1 pip install .
"""

import os
import sys
from pathlib import Path

from setuptools import find_packages, setup

# Determine if we should use mypyc
USE_MYPYC = os.environ.get("TURBOESCAPE_USE_MYPYC", "0") == "1"

# Modules to compile with mypyc (the decode hot path and its tables)
MYPYC_MODULES = [
    "src/turboescape/tokenizer.py",  # ⚡ Hot path - reference scanner
    "src/turboescape/entities.py",
    "src/turboescape/serialize.py",
    "src/turboescape/constants.py",
]


def build_with_mypyc() -> list:
    """Build extension modules using mypyc."""
    try:
        from mypyc.build import mypycify
    except ImportError:
        print(
            "ERROR: mypyc is not installed. Install with: pip install mypy",
            file=sys.stderr,
        )
        print("Or install with mypyc support: pip install turboescape[mypyc]", file=sys.stderr)
        sys.exit(1)

    # Verify all modules exist
    for module_path in MYPYC_MODULES:
        if not Path(module_path).exists():
            print(f"ERROR: Module not found: {module_path}", file=sys.stderr)
            sys.exit(1)

    print("=" * 70)
    print("Building TurboEscape with mypyc compilation")
    print("=" * 70)
    print(f"Compiling {len(MYPYC_MODULES)} modules:")
    for module in MYPYC_MODULES:
        print(f"  - {module}")
    print("=" * 70)

    # Configure mypyc options
    opt_level = os.environ.get("MYPYC_OPT_LEVEL", "3")
    debug_level = os.environ.get("MYPYC_DEBUG_LEVEL", "0")

    mypyc_options = {
        "opt_level": opt_level,
        "debug_level": debug_level,
        "verbose": True,
        "separate": False,  # Don't use separate extensions
        "multi_file": False,  # Single group compilation
    }

    return mypycify(MYPYC_MODULES, **mypyc_options)


if __name__ == "__main__":
    ext_modules = []

    if USE_MYPYC:
        ext_modules = build_with_mypyc()
    else:
        print("Building TurboEscape in pure Python mode (no mypyc compilation)")
        print("To enable mypyc: TURBOESCAPE_USE_MYPYC=1 pip install .")

    setup(
        name="turboescape",
        version="0.1.0",
        description="Escape text for HTML and decode HTML character references",
        python_requires=">=3.9",
        package_dir={"": "src"},
        packages=find_packages(where="src"),
        ext_modules=ext_modules,
        extras_require={
            "test": ["pytest"],
            "mypyc": ["mypy"],
            "benchmark": ["beautifulsoup4", "psutil"],
        },
    )

#!/usr/bin/env python3
"""
Script to compile the .po message catalogs of the API into .mo files
"""

import sys

from bilemo.i18n import LOCALE_DIR
from bilemo.i18n.catalog import compile_catalogs


def main():
    """Compile every catalog under bilemo/i18n/locales"""
    written = compile_catalogs(LOCALE_DIR, force=True)
    for mo_file in written:
        print(f"  compiled {mo_file}")
    if not written:
        print("  no catalog found")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

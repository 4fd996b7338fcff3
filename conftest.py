"""Test configuration for ensuring package imports."""

import os
import sys

# Make `nss_connect` and `config` importable without installing the package.
ROOT_DIR = os.path.abspath(os.path.dirname(__file__))
for path in (os.path.join(ROOT_DIR, "src", "nss_connect"), ROOT_DIR):
    if path not in sys.path:
        sys.path.insert(0, path)

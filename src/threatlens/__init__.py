# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""threatlens - Read-only query service over a threat-intelligence dataset."""

__version__ = "0.1.0"

__all__ = ["__version__"]

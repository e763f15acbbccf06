# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""HTTP API: FastAPI app factory, routes, and error mapping."""

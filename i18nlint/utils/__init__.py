"""Shared utilities (lint cache)."""

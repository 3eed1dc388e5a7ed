# -*- coding: utf-8 -*-
"""
Utilities package for common functionality across the population pipeline.

Contains logging setup, runtime configuration, error types and the shared
dataclasses used throughout the codebase.
"""

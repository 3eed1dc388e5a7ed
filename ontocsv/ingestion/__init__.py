# -*- coding: utf-8 -*-
"""
Ingestion package for locating and reading pipeline inputs.

Contains file_discovery (ontology and CSV file selection), line_evaluator
(quote-aware CSV line splitting) and config_loader (YAML transformation
rules).
"""

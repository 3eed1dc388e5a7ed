# -*- coding: utf-8 -*-
"""
Processing package for turning raw CSV values into ontology identifiers.
"""

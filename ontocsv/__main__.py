# -*- coding: utf-8 -*-
"""Allows `python -m ontocsv`."""
import sys

from ontocsv.graph.population_processor import main

sys.exit(main())

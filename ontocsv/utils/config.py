# ontocsv/utils/config.py

import os
from dotenv import load_dotenv

load_dotenv()

# Output artifacts (written relative to the output directory, cwd by default)
SKIPPED_RECORDS_FILE = "skipped.txt"
GENERATED_ONTOLOGY_FILE = "generated.owl"
PARTIAL_SUFFIX = ".part"

# Serialization format for the generated ontology (rdflib plugin name)
OUTPUT_FORMAT = os.getenv("ONTOCSV_OUTPUT_FORMAT", "xml")

# Parallel record processing
NUM_WORKERS = int(os.getenv("ONTOCSV_WORKERS", "0")) or (os.cpu_count() or 1)
CHUNK_SIZE = int(os.getenv("ONTOCSV_CHUNK_SIZE", "1000"))
MAX_CHUNKS_IN_FLIGHT_PER_WORKER = 2

# Input encoding (utf-8-sig tolerates a BOM in spreadsheet exports)
CSV_ENCODING = "utf-8-sig"

# File classification
ONTOLOGY_SUFFIX = ".owl"
CSV_SUFFIX = ".csv"

# Logging
LOG_LEVEL = os.getenv("ONTOCSV_LOG_LEVEL", "INFO")

# Debug
DEBUG_MODE = os.getenv("DEBUG_MODE", "false").lower() == "true"

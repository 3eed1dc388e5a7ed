# -*- coding: utf-8 -*-
"""
Ontology population orchestrator and command line entry point.

Assembles a population run from a directory of inputs and executes it end to
end. PopulatorBuilder collects the run options fluently (input directory,
transformation rules, OWL 2 correction, namespace, output location, worker
count) and freezes them into PopulatorSettings. build() loads the ontology
and returns an InstancePopulator whose process() method runs the optional
correction pass, populates the model from the CSV files, and writes
generated.owl and skipped.txt to the output directory.

Output files are only put in place once complete: a failed run leaves no
generated.owl or skipped.txt behind from that run.

Examples:
    # Run from the command line
    # ontocsv data/input --config config.yml --owl2-correction --progress

    # Python API usage
    from ontocsv.graph.population_processor import PopulatorBuilder

    populator = (
        PopulatorBuilder()
        .with_path("data", "input")
        .with_configurator("config.yml")
        .with_owl2_correction()
        .build()
    )
    result = populator.process()
    print(result.inserted_count)

    # Without exceptions
    result = InstancePopulator.create("data", "input")
    if result.ok:
        result.populator.process()
"""
# Standard library
import argparse
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

# Local
from ontocsv.graph.instance_populator import SkipLog, populate
from ontocsv.graph.ontology_model import OntologyModel
from ontocsv.graph.owl2_correction import correct_named_individuals
from ontocsv.ingestion.config_loader import load_transformation_config
from ontocsv.ingestion.file_discovery import discover
from ontocsv.processing.name_normalizer import NameNormalizer
from ontocsv.utils.config import (
    CHUNK_SIZE,
    DEBUG_MODE,
    GENERATED_ONTOLOGY_FILE,
    LOG_LEVEL,
    NUM_WORKERS,
    OUTPUT_FORMAT,
    SKIPPED_RECORDS_FILE,
)
from ontocsv.utils.dataclasses import (
    CreateResult,
    InputFiles,
    PopulationResult,
    TransformationConfig,
)
from ontocsv.utils.exceptions import OntoCsvError, OntologyMalformed, OutputWriteError
from ontocsv.utils.logger import get_logger, setup_logging

logger = get_logger(__name__)


# ============================================================================
# SETTINGS AND BUILDER
# ============================================================================

@dataclass(frozen=True)
class PopulatorSettings:
    """Frozen options for one population run."""
    files: InputFiles
    config: Optional[TransformationConfig] = None
    owl2_correction: bool = False
    namespace: Optional[str] = None
    output_dir: Path = Path(".")
    output_format: str = OUTPUT_FORMAT
    num_workers: int = NUM_WORKERS
    chunk_size: int = CHUNK_SIZE
    show_progress: bool = False


class PopulatorBuilder:
    """
    Fluent builder for InstancePopulator.

    Inputs are validated as they are supplied: with_path() discovers the files
    and with_configurator() loads the rules right away, so errors surface at
    the call that caused them.
    """

    def __init__(self):
        self._files: Optional[InputFiles] = None
        self._config: Optional[TransformationConfig] = None
        self._owl2_correction = False
        self._namespace: Optional[str] = None
        self._output_dir = Path(".")
        self._output_format = OUTPUT_FORMAT
        self._num_workers = NUM_WORKERS
        self._chunk_size = CHUNK_SIZE
        self._show_progress = False

    def with_path(self, path: Union[str, Path], *other_parts: str) -> "PopulatorBuilder":
        """Directory holding the .owl file and the two .csv files."""
        self._files = discover(Path(path, *other_parts))
        return self

    def with_configurator(self, config_yaml: Union[str, Path]) -> "PopulatorBuilder":
        """YAML file with trim, casing and transformations rules."""
        self._config = load_transformation_config(config_yaml)
        return self

    def with_transformations(self, config: TransformationConfig) -> "PopulatorBuilder":
        self._config = config
        return self

    def with_owl2_correction(self) -> "PopulatorBuilder":
        """Re-create existing individuals as owl:NamedIndividual before populating."""
        self._owl2_correction = True
        return self

    def with_namespace(self, namespace: str) -> "PopulatorBuilder":
        """Override the namespace read from the ontology."""
        self._namespace = namespace
        return self

    def with_output_dir(self, output_dir: Union[str, Path]) -> "PopulatorBuilder":
        self._output_dir = Path(output_dir)
        return self

    def with_output_format(self, output_format: str) -> "PopulatorBuilder":
        """rdflib serializer name for generated.owl (xml, pretty-xml, turtle...)."""
        self._output_format = output_format
        return self

    def with_workers(self, num_workers: int) -> "PopulatorBuilder":
        self._num_workers = num_workers
        return self

    def with_chunk_size(self, chunk_size: int) -> "PopulatorBuilder":
        self._chunk_size = chunk_size
        return self

    def with_progress(self, enabled: bool = True) -> "PopulatorBuilder":
        self._show_progress = enabled
        return self

    def settings(self) -> PopulatorSettings:
        """Freeze the collected options; scans the working directory if no path was given."""
        files = self._files if self._files is not None else discover(Path("."))
        return PopulatorSettings(
            files=files,
            config=self._config,
            owl2_correction=self._owl2_correction,
            namespace=self._namespace,
            output_dir=self._output_dir,
            output_format=self._output_format,
            num_workers=self._num_workers,
            chunk_size=self._chunk_size,
            show_progress=self._show_progress,
        )

    def build(self) -> "InstancePopulator":
        """
        Load the ontology and create the populator.

        Raises:
            OntoCsvError: Any discovery, configuration or ontology error
        """
        settings = self.settings()
        model = OntologyModel.load(settings.files.ontology_path)

        namespace = settings.namespace or model.namespace_prefix()
        if not namespace:
            raise OntologyMalformed(
                settings.files.ontology_path,
                "no default namespace prefix or ontology IRI declared",
            )
        logger.info(f"Using namespace {namespace}")

        return InstancePopulator(settings, model, namespace)


# ============================================================================
# POPULATOR
# ============================================================================

class InstancePopulator:
    """
    Populates a loaded ontology with individuals from the CSV inputs.

    Example:
        populator = PopulatorBuilder().with_path("data/input").build()
        result = populator.process()
    """

    def __init__(self, settings: PopulatorSettings, model: OntologyModel, namespace_prefix: str):
        self.settings = settings
        self.model = model
        self.namespace_prefix = namespace_prefix
        self.normalizer = NameNormalizer(namespace_prefix, settings.config)
        self._corrected = False

    @classmethod
    def create(cls, *path_parts: str) -> CreateResult:
        """
        Build a populator with default options for a directory.

        Returns:
            CreateResult holding the populator, or the error that prevented it
        """
        try:
            builder = PopulatorBuilder()
            if path_parts:
                builder.with_path(*path_parts)
            return CreateResult(populator=builder.build())
        except OntoCsvError as e:
            logger.error(str(e))
            return CreateResult(error=e)

    def correct(self) -> int:
        """Run the OWL 2 correction pass; no-op if it already ran on this model."""
        if self._corrected:
            logger.info("OWL 2 correction already applied to this model")
            return 0
        count = correct_named_individuals(self.model)
        self._corrected = True
        return count

    def process(self) -> PopulationResult:
        """
        Run the population and write the output files.

        Returns:
            PopulationResult with counts and output paths

        Raises:
            OutputWriteError: An output file could not be written
        """
        settings = self.settings
        output_dir = settings.output_dir
        try:
            output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise OutputWriteError(output_dir, e.strerror or str(e)) from e

        skip_log_path = output_dir / SKIPPED_RECORDS_FILE
        output_path = output_dir / GENERATED_ONTOLOGY_FILE

        corrected = self.correct() if settings.owl2_correction else 0

        with SkipLog(skip_log_path) as skip_log:
            inserted = populate(
                settings.files.categories_path,
                settings.files.instances_path,
                self.model,
                self.namespace_prefix,
                self.normalizer,
                skip_log,
                num_workers=settings.num_workers,
                chunk_size=settings.chunk_size,
                show_progress=settings.show_progress,
            )
            self.model.write(output_path, settings.output_format)

        return PopulationResult(
            inserted_count=inserted,
            skipped_count=skip_log.count,
            corrected_count=corrected,
            skip_log_path=skip_log_path,
            output_path=output_path,
        )


# ============================================================================
# CLI
# ============================================================================

def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog='ontocsv',
        description='Populate an OWL ontology with named individuals from CSV files'
    )
    parser.add_argument(
        'directory',
        nargs='?',
        default='.',
        help='Directory with one .owl file and two .csv files (default: current directory)'
    )
    parser.add_argument(
        '--config',
        help='YAML file with instance name transformation rules'
    )
    parser.add_argument(
        '--owl2-correction',
        action='store_true',
        help='Re-create existing individuals as owl:NamedIndividual before populating'
    )
    parser.add_argument(
        '--namespace',
        help='Namespace for classes and new individuals (default: read from the ontology)'
    )
    parser.add_argument(
        '--output-dir',
        type=Path,
        default=Path('.'),
        help='Where generated.owl and skipped.txt are written (default: current directory)'
    )
    parser.add_argument(
        '--format',
        default=OUTPUT_FORMAT,
        help=f'rdflib serialization format for generated.owl (default: {OUTPUT_FORMAT})'
    )
    parser.add_argument(
        '--workers',
        type=int,
        default=NUM_WORKERS,
        help=f'Worker threads for record conversion (default: {NUM_WORKERS})'
    )
    parser.add_argument(
        '--chunk-size',
        type=int,
        default=CHUNK_SIZE,
        help=f'Instance lines per worker task (default: {CHUNK_SIZE})'
    )
    parser.add_argument(
        '--progress',
        action='store_true',
        help='Show a progress bar while reading instances'
    )
    parser.add_argument(
        '--log-file',
        help='Also write logs to this file'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Debug logging'
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for ontology population."""
    args = parse_args(argv)

    level = 'DEBUG' if args.verbose or DEBUG_MODE else LOG_LEVEL
    setup_logging(level=level, log_file=args.log_file)

    try:
        builder = (
            PopulatorBuilder()
            .with_path(args.directory)
            .with_output_dir(args.output_dir)
            .with_output_format(args.format)
            .with_workers(args.workers)
            .with_chunk_size(args.chunk_size)
            .with_progress(args.progress)
        )
        if args.config:
            builder.with_configurator(args.config)
        if args.owl2_correction:
            builder.with_owl2_correction()
        if args.namespace:
            builder.with_namespace(args.namespace)

        result = builder.build().process()

    except (OntoCsvError, OSError) as e:
        logger.error(f"Population failed: {e}")
        return 1

    print("\n" + "=" * 60)
    print("POPULATION COMPLETE")
    print("=" * 60)
    print(f"Individuals added:  {result.inserted_count}")
    print(f"Records skipped:    {result.skipped_count}")
    if args.owl2_correction:
        print(f"Individuals fixed:  {result.corrected_count}")
    print(f"Ontology:           {result.output_path}")
    print(f"Skipped records:    {result.skip_log_path}")
    print("=" * 60)
    return 0


if __name__ == '__main__':
    sys.exit(main())

import argparse
import logging
from pathlib import Path

from pydantic import ValidationError

from ontovault.cli import DEFAULT_DOCS_URL, EXIT_INVALID_ARGUMENTS, EXIT_PROJECTION_FAILED
from ontovault.cli.exceptions import CliCommandException
from ontovault.exceptions import OntoVaultError
from ontovault.shared.logging_utils import get_logger, setup_logging
from ontovault.modules.projection.ProjectionDriver import generate
from ontovault.modules.projection.projection_config import ProjectionConfig

logger = get_logger(__name__)


class GenerateCommand:
    command_string = "generate"
    help_string = "Generate Metadata Menu classes and templates from an ontology"
    docs_url = DEFAULT_DOCS_URL
    description = """
Project an ontology bundle into an Obsidian vault.

For every concept and relation entity of the non built-in vocabularies reachable
from the root IRI, writes:

- `<classes>/<prefix>/<Name>.md`: the Metadata Menu fileClass of the entity
- `<templates>/<prefix>/New <Name>.md`: a note template; on regeneration only
  its front matter is replaced and the rest of the file is kept
    """

    def configure_parser(self, parser: argparse.ArgumentParser) -> None:
        parser.add_argument(
            "-i", "--input-catalog-path",
            dest="catalog_path",
            required=True,
            help="Path of the input OASIS XML catalog (must end with catalog.xml)",
        )
        parser.add_argument(
            "-iri", "--root-ontology-iri",
            dest="root_iri",
            required=True,
            help="IRI of the root ontology of the bundle",
        )
        parser.add_argument(
            "-cls", "--output-classes-path",
            dest="classes_dir",
            required=True,
            help="Folder receiving the generated class documents",
        )
        parser.add_argument(
            "-tmp", "--output-templates-path",
            dest="templates_dir",
            required=True,
            help="Folder receiving the generated templates",
        )
        parser.add_argument(
            "-m", "--metadata-templates-path",
            dest="templates_path",
            default=None,
            help="Vault-relative template folder excluded from reference queries "
            "(defaults to the name of the templates folder)",
        )
        parser.add_argument(
            "-d", "--debug",
            action="store_true",
            help="Log per-entity details",
        )

    def execute(self, args: argparse.Namespace) -> None:
        try:
            config = ProjectionConfig(
                catalog_path=Path(args.catalog_path),
                root_iri=args.root_iri,
                classes_dir=Path(args.classes_dir),
                templates_dir=Path(args.templates_dir),
                templates_path=args.templates_path,
                debug=args.debug,
            )
        except ValidationError as error:
            problems = "; ".join(e["msg"] for e in error.errors())
            raise CliCommandException(
                f"Invalid arguments: {problems}",
                error_code=EXIT_INVALID_ARGUMENTS,
                docs_url=self.docs_url,
                raiser=error,
            )

        if config.debug:
            setup_logging(logging.DEBUG)

        try:
            report = generate(config)
        except OntoVaultError as error:
            raise CliCommandException(
                error.message,
                error_code=EXIT_PROJECTION_FAILED,
                raiser=error,
            )

        logger.debug(
            "Wrote %d classes and %d templates (%d merged)",
            len(report.class_files),
            len(report.template_files),
            len(report.merged_template_files),
        )

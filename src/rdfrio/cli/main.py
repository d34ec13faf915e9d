#!/usr/bin/env python3
"""
rdfrio command line - convert RDF documents between serializations.

Usage:
    rdfrio INPUT OUTPUT [--input-format NAME] [--output-format NAME]
                        [--base-uri IRI] [--config FILE] [--progress]
                        [--log-level LEVEL] [--log-file FILE]
    rdfrio --list-formats

Formats are taken from the file extensions unless given by name; unknown
extensions fall back to RDF/XML. Statements stream from the parser straight
into the writer.

Exit codes: 0 on success, 1 on conversion errors, 2 on usage errors.
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

from tqdm import tqdm

from .. import __version__, rio
from ..errors import RioError, UnsupportedRDFormatError
from ..formats.base import RDFFormat
from ..formats.builtin import BUILTIN_FORMATS, RDFXML
from ..handlers import ParseErrorLogger, RDFHandlerBase, RDFHandlerWrapper
from ..model import Statement
from ..plugins.registry import FormatRegistry, RDFParserRegistry, RDFWriterRegistry
from ..settings import ParserConfig, WriterConfig
from .helpers import load_config, print_footer, print_header, setup_logging

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1

DEFAULT_FORMAT = RDFXML


class StatementCounter(RDFHandlerBase):
    """Counts statements, advancing a progress bar when one is attached."""

    def __init__(self, progress: Optional[tqdm] = None) -> None:
        self.count = 0
        self.progress = progress

    def handle_statement(self, statement: Statement) -> None:
        self.count += 1
        if self.progress is not None:
            self.progress.update(1)


def create_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rdfrio",
        description="Convert RDF documents between serializations.",
    )
    parser.add_argument("input", nargs="?", help="Input file")
    parser.add_argument("output", nargs="?", help="Output file")
    parser.add_argument("--input-format", metavar="NAME",
                        help="Input format name (default: from the input file extension)")
    parser.add_argument("--output-format", metavar="NAME",
                        help="Output format name (default: from the output file extension)")
    parser.add_argument("--base-uri", metavar="IRI",
                        help="Base IRI for relative IRIs (default: file: + input path)")
    parser.add_argument("--config", metavar="FILE",
                        help="JSON file with parser and writer settings")
    parser.add_argument("--progress", action="store_true",
                        help="Show a statement counter while converting")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                        help="Log level (default: WARNING)")
    parser.add_argument("--log-file", metavar="FILE", help="Also log to this file")
    parser.add_argument("--list-formats", action="store_true",
                        help="List registered formats and exit")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def resolve_format(
    registry: FormatRegistry,
    name: Optional[str],
    file_name: str,
    role: str,
) -> RDFFormat:
    """
    Pick the format for one side of a conversion.

    Raises:
        UnsupportedRDFormatError: If a format name is given that the
            registry does not know.
    """
    if name:
        rdf_format = registry.format_for_name(name)
        if rdf_format is None:
            raise UnsupportedRDFormatError(f"No {role} available for format '{name}'")
        return rdf_format
    rdf_format = registry.get_file_format_for_file_name(file_name, DEFAULT_FORMAT)
    logger.debug(f"Using {rdf_format.name} for {file_name}")
    return rdf_format


def list_formats() -> None:
    parsers = RDFParserRegistry.get_instance()
    writers = RDFWriterRegistry.get_instance()
    formats = list(BUILTIN_FORMATS)
    for rdf_format in parsers.keys() + writers.keys():
        if rdf_format not in formats:
            formats.append(rdf_format)

    print_header("RDF formats")
    for rdf_format in formats:
        capabilities = [c for c, r in (("parse", parsers), ("write", writers)) if r.has(rdf_format)]
        extensions = ", ".join(f".{e}" for e in rdf_format.file_extensions)
        print(
            f"  {rdf_format.name:<10} {rdf_format.default_mime_type or '':<24} "
            f"{extensions:<22} {', '.join(capabilities) or '-'}"
        )
    print_footer()


def convert(
    input_path: str,
    output_path: str,
    input_format: RDFFormat,
    output_format: RDFFormat,
    base_uri: str,
    parser_config: ParserConfig,
    writer_config: WriterConfig,
    show_progress: bool = False,
) -> int:
    """
    Stream one document from input_path into output_path.

    Returns:
        Number of statements converted.

    Raises:
        RioError: On unsupported formats, malformed input or writer errors.
        OSError: If a file cannot be opened.
    """
    parser = rio.create_parser(input_format)
    parser.parser_config = parser_config
    parser.parse_error_listener = ParseErrorLogger()

    with open(input_path, "rb") as source, open(output_path, "wb") as out:
        writer = rio.create_writer(output_format, out)
        writer.writer_config = writer_config
        with tqdm(desc="Converting", unit=" statements", disable=not show_progress) as pbar:
            counter = StatementCounter(pbar)
            parser.rdf_handler = RDFHandlerWrapper(writer, counter)
            parser.parse(source, base_uri)
    return counter.count


def main(argv: Optional[List[str]] = None) -> int:
    arg_parser = create_argument_parser()
    args = arg_parser.parse_args(argv)

    if args.list_formats:
        list_formats()
        return EXIT_OK
    if not args.input or not args.output:
        arg_parser.error("INPUT and OUTPUT are required unless --list-formats is given")

    setup_logging(args.log_level, args.log_file)

    if not os.path.isfile(args.input):
        logger.error(f"Input file not found: {args.input}")
        return EXIT_FAILURE

    try:
        input_format = resolve_format(
            RDFParserRegistry.get_instance(), args.input_format, args.input, "parser"
        )
        output_format = resolve_format(
            RDFWriterRegistry.get_instance(), args.output_format, args.output, "writer"
        )
        if args.config:
            parser_config, writer_config = load_config(args.config)
        else:
            parser_config, writer_config = ParserConfig(), WriterConfig()

        base_uri = args.base_uri or "file:" + os.path.abspath(args.input)
        count = convert(
            args.input,
            args.output,
            input_format,
            output_format,
            base_uri,
            parser_config,
            writer_config,
            args.progress,
        )
    except RioError as e:
        logger.error(f"Conversion failed: {e}")
        return EXIT_FAILURE
    except OSError as e:
        logger.error(f"I/O error: {e}")
        return EXIT_FAILURE

    print(f"Converted {count} statements from {input_format.name} to {output_format.name}")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())

#!/usr/bin/env python3
"""
Generate resource linkers.

Facts come either from Python resource classes (``--source``) or from a JSON
file produced by another extractor (``--facts``). Generated modules are
written under ``--output``.
"""

import argparse
import sys

from dotenv import load_dotenv

from src.resource_linker.config import LinkerConfig
from src.resource_linker.extractor import ResourceExtractor
from src.resource_linker.logger import set_log_level
from src.resource_linker.processor import LinkerProcessor
from src.resource_linker.records import load_facts

load_dotenv()


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Generate resource linkers from annotated resource classes.")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--source", help="Directory of Python resource modules")
    source.add_argument("--facts", help="JSON file of method fact records")
    parser.add_argument("--output", default=None, help="Directory receiving generated modules")
    parser.add_argument("--graph", action="store_true", help="Also export the resource graph as DOT")
    parser.add_argument("--log-level", default=None, type=str.upper,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Logging verbosity")
    args = parser.parse_args(argv)

    config = LinkerConfig()
    if args.output:
        config.output_dir = args.output
    if args.graph:
        config.export_graph = True
    if args.log_level:
        config.log_level = args.log_level.upper()
    set_log_level(config.log_level)

    if args.source:
        rounds = [ResourceExtractor().extract_tree(args.source)]
    else:
        rounds = load_facts(args.facts)

    processor = LinkerProcessor(config)
    succeeded = processor.run(rounds)
    return 0 if succeeded else 1


if __name__ == "__main__":
    sys.exit(main())

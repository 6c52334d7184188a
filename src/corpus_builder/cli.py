"""
Command-line interface for Corpus Builder.

Builds one corpus run from flags (and an optional YAML config), then drives
the pipeline: setup, discover, shrink, skip, run, close.

Exit codes:
    0: run finished (individual archive or record failures are reported)
    1: run aborted (discovery failed, sink could not be opened)
    2: invalid selection or configuration, nothing was queued
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from pydantic import ValidationError

from corpus_builder import configure_logging
from corpus_builder.adapters import (
    BulkDataDownloader,
    LocalArchiveDownloader,
    create_output_sink,
)
from corpus_builder.config import load_config
from corpus_builder.config.models import CorpusConfig
from corpus_builder.domain.classification import Classification
from corpus_builder.domain.entities import SelectionCriteria
from corpus_builder.interfaces.downloader import Downloader, DownloadError
from corpus_builder.matching import create_match_evaluator
from corpus_builder.pipeline import CorpusPipeline
from corpus_builder.validation import (
    ConfigurationError,
    RunValidator,
    parse_classifications,
    parse_codes,
    parse_document_type,
    parse_years,
)

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_CONFIG = 2


def build_arg_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    p = argparse.ArgumentParser(
        prog="corpus-builder",
        description="Build a patent sub-corpus from bulk full-text archives",
    )
    p.add_argument("--type", required=True, help="Document type: grant or application")
    p.add_argument(
        "--years", required=True, help="Comma list (2014,2016) or range (2014-2016)"
    )
    p.add_argument("--cpc", help="Comma list of CPC codes, e.g. H04N21/00,G06F")
    p.add_argument("--uspc", help="Comma list of USPC codes, e.g. 725,725/61")
    p.add_argument("--files", help="Comma list of archive filenames to keep")
    p.add_argument("--skip", type=int, help="Archives to drop from the queue front")
    p.add_argument("--out", choices=["xml", "zip"], help="Output format")
    p.add_argument("--name", help="Output name without extension")
    p.add_argument("--outdir", default=".", help="Output directory (default: current dir)")
    p.add_argument(
        "--eval", choices=["xml", "patent"], help="Match strategy (default: xml)"
    )

    delete = p.add_mutually_exclusive_group()
    delete.add_argument(
        "--delete",
        dest="delete_completed",
        action="store_true",
        default=None,
        help="Delete each downloaded archive once read (default)",
    )
    delete.add_argument(
        "--keep",
        dest="delete_completed",
        action="store_false",
        help="Keep downloaded archives",
    )

    p.add_argument(
        "--source-dir",
        help="Read archives from this directory instead of downloading them",
    )
    p.add_argument("--config", help="YAML configuration file")
    p.add_argument("--log-level", help="Logging level (default: INFO)")
    return p


def _overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """Map the flags that were given onto the nested config layout."""
    overrides: Dict[str, Dict[str, Any]] = {"output": {}, "run": {}, "logging": {}}
    if args.out:
        overrides["output"]["format"] = args.out
    if args.name:
        overrides["output"]["name"] = args.name
    if args.eval:
        overrides["run"]["eval_mode"] = args.eval
    if args.skip is not None:
        overrides["run"]["skip"] = args.skip
    if args.delete_completed is not None:
        overrides["run"]["delete_completed"] = args.delete_completed
    if args.log_level:
        overrides["logging"]["level"] = args.log_level
    return {key: value for key, value in overrides.items() if value}


def _selection(
    args: argparse.Namespace,
) -> Tuple[SelectionCriteria, List[Classification]]:
    criteria = SelectionCriteria(
        document_type=parse_document_type(args.type),
        years=parse_years(args.years),
    )
    return criteria, parse_classifications(cpc=args.cpc, uspc=args.uspc)


def _build_downloader(args: argparse.Namespace, config: CorpusConfig) -> Downloader:
    if args.source_dir:
        return LocalArchiveDownloader(Path(args.source_dir))
    return BulkDataDownloader(config.download)


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point. Returns the process exit code."""
    args = build_arg_parser().parse_args(argv)

    try:
        config = load_config(args.config, _overrides(args))
        configure_logging(config.logging.level.upper())
        criteria, wanted = _selection(args)
        RunValidator().validate(criteria, wanted, skip=config.run.skip)
    except (ConfigurationError, ValidationError, FileNotFoundError) as e:
        logger.error(f"Configuration error: {e}")
        return EXIT_CONFIG

    logger.info(
        f"Corpus run: type={criteria.document_type.value} years={criteria.years} "
        f"filters={[code.describe() for code in wanted]}"
    )

    # Archives from --source-dir belong to the caller and are never deleted
    delete_completed = config.run.delete_completed and not args.source_dir

    pipeline = CorpusPipeline(
        downloader=_build_downloader(args, config),
        evaluator=create_match_evaluator(config.run.eval_mode, wanted),
        sink=create_output_sink(config.output, Path(args.outdir)),
        boundary_marker=config.run.boundary_marker,
        delete_completed=delete_completed,
    )

    try:
        pipeline.setup()
        pipeline.enqueue_discovered(criteria)
        files = parse_codes(args.files)
        if files:
            pipeline.shrink_to_names(files)
        if config.run.skip:
            pipeline.skip(config.run.skip)
        result = pipeline.run()
    except (DownloadError, OSError) as e:
        logger.error(f"Run aborted: {e}")
        return EXIT_FAILED
    finally:
        pipeline.close()

    if result.failed_archives:
        logger.warning(
            f"Archives not processed, rerun with --files: "
            f"{','.join(result.failed_filenames)}"
        )

    logger.info(
        f"--- Finished --- bulk:{result.statistics.archives_processed} , "
        f"wrote:{result.statistics.records_written}"
    )
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())

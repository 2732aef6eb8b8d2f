#!/usr/bin/env python3
"""
CLI entrypoint for the spirulina site analysis workflow.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from analysis_client import AnalysisRequestError, SiteAnalysisClient
from config import SiteConfig
from file_utils import SiteReportFileManager
from logging_utils import log_exception, setup_run_logging
from pipeline import build_location_query, derive_site_analysis


def enable_debug_logging() -> None:
    logging.getLogger().setLevel(logging.DEBUG)
    for handler in logging.getLogger().handlers:
        handler.setLevel(logging.DEBUG)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Analyze a spirulina cultivation site and export the report.")
    parser.add_argument("location", nargs="?", default="", help="Location name to analyze.")
    parser.add_argument("--lat", type=float, help="Latitude of a selected map point.")
    parser.add_argument("--lng", type=float, help="Longitude of a selected map point.")
    parser.add_argument("--payload", type=Path, help="Derive from a saved JSON response instead of calling the service.")
    parser.add_argument("--output-dir", default=SiteConfig.REPORT_DIR, help="Base directory for report artifacts.")
    parser.add_argument("--renderer", action="append", dest="renderers", help="Renderer to run (repeatable).")
    parser.add_argument("--debug", action="store_true", help="Enable verbose logging.")
    args = parser.parse_args(argv)
    if (args.lat is None) != (args.lng is None):
        parser.error("--lat and --lng must be given together")
    return args


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    load_dotenv()

    coordinates = (args.lat, args.lng) if args.lat is not None else None
    try:
        query = build_location_query(args.location, coordinates)
    except ValueError as exc:
        print(f"❌ {exc}")
        return 1

    file_manager = SiteReportFileManager(args.output_dir)
    report_dir = file_manager.create_report_directory(query)
    run_logger, _ = setup_run_logging(report_dir, query)
    if args.debug:
        enable_debug_logging()
        run_logger.debug("Debug logging enabled.")

    print("🌊 Spirulina Site Analysis")
    print(f"📍 Location: {query}")
    print("=" * 60)

    if args.payload:
        try:
            body = json.loads(args.payload.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            log_exception(run_logger, exc, context="load_payload", location=query, payload=str(args.payload))
            print("❌ Could not read the saved analysis payload.")
            return 1
    else:
        try:
            body = SiteAnalysisClient().analyze_site(query)
        except AnalysisRequestError as exc:
            log_exception(run_logger, exc, context="analyze_site", location=query)
            print(f"❌ {exc.user_message}")
            return 1

    result = derive_site_analysis(body, query)
    if result.metrics is None:
        run_logger.info("Environmental metrics unavailable for this site.")
    if result.protein is None:
        run_logger.info("Protein band unavailable for this site.")

    try:
        summary = file_manager.save_report(result, report_dir=report_dir, renderers=args.renderers)
    except OSError as exc:
        log_exception(run_logger, exc, context="save_report", location=query)
        print("❌ Failed to persist report artifacts.")
        return 1

    print("\n✅ Report ready.")
    print(f"📁 Output directory: {summary['report_dir']}")
    if result.protein is not None:
        print(f"🧬 Protein band: {result.protein.level.value} ({result.protein.score:.1f}%)")
    for failed, reason in summary["renderer_failures"].items():
        print(f"⚠️  {failed} skipped: {reason}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

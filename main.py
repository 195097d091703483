# main.py
"""
Main entry point for the ChessAnnotator application.

This script handles command-line argument parsing, sets up logging,
and initiates the annotation run by creating and running the main
AnnotationPipeline.
"""
import argparse
import logging
import os
import sys
from typing import List, Optional

# Adjust the Python path to include the project's root directory.
# This allows the script to be run directly from the project root via `python main.py`.
sys.path.insert(0, os.path.abspath(os.path.dirname(__file__)))

from chess_annotator.config import settings
from chess_annotator.pipeline import AnnotationPipeline
from chess_annotator.types import QualityThresholds
from chess_annotator.utils.logging_config import setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Annotates every move of chess games with a quality label, "
                    "a better move and short continuation lines.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )

    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("input_pgn", nargs="?", default=None, help="Path to the input PGN file.")
    source.add_argument(
        "--chesscom", dest="chesscom_user", default=None,
        help="Annotate the games this chess.com user finished in the last 24 hours."
    )
    parser.add_argument(
        "-o", "--output-pgn", required=True,
        help="Path to the output PGN file where annotated games will be appended."
    )
    parser.add_argument(
        "--ply-report", default=None,
        help=f"Path for the per-ply CSV report (e.g. '{settings.DEFAULT_PLY_REPORT_FILENAME}')."
    )
    parser.add_argument(
        "--game-report", default=None,
        help=f"Path for the per-game CSV report (e.g. '{settings.DEFAULT_GAME_REPORT_FILENAME}')."
    )
    parser.add_argument(
        "--lines", type=int, default=settings.DEFAULT_MAX_LINES,
        help="Number of alternate lines attached to a sub-par move."
    )
    parser.add_argument(
        "--depth", type=int, default=settings.DEFAULT_LINE_DEPTH,
        help="Length in plies of each alternate line."
    )
    parser.add_argument(
        "--workers", type=int, default=settings.DEFAULT_WORKERS,
        help="Number of plies judged concurrently."
    )
    parser.add_argument(
        "--thresholds", type=float, nargs=5, default=None,
        metavar=("BRILLIANT", "GOOD", "NORMAL", "INACCURACY", "MISTAKE"),
        help="Score-gap upper bounds for the tiers; larger gaps are blunders."
    )
    parser.add_argument(
        "--pgn-columns", type=int, default=settings.PGN_DEFAULT_COLUMNS,
        help="Column width for wrapping move text in the output PGN. 0 for no wrapping."
    )
    parser.add_argument(
        "--log-level", default=settings.DEFAULT_LOG_LEVEL,
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        help="Set the logging level for console and file output."
    )
    parser.add_argument(
        "--log-file", default=settings.DEFAULT_LOG_FILENAME,
        help="Path to the log file."
    )
    parser.add_argument(
        "--no-console-log", action="store_true", help="Disable logging to the console."
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Parses command-line arguments and runs the annotation pipeline."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.lines < 1 or args.depth < 1:
        parser.error("--lines and --depth must be at least 1.")

    setup_logging(
        log_level_str=args.log_level,
        log_file=args.log_file,
        log_to_console=not args.no_console_log
    )

    logging.info(f"{settings.APP_NAME} starting up...")

    try:
        pipeline = AnnotationPipeline(
            max_lines=args.lines,
            line_depth=args.depth,
            workers=args.workers,
            pgn_write_columns=args.pgn_columns,
            quality_thresholds=QualityThresholds(*args.thresholds) if args.thresholds else None,
        )
        pipeline.run(
            output_pgn_path=args.output_pgn,
            input_pgn_path=args.input_pgn,
            chesscom_user=args.chesscom_user,
            ply_report_path=args.ply_report,
            game_report_path=args.game_report,
        )
    except Exception as e:
        logging.critical(f"A fatal, unhandled exception occurred at the top level: {e}", exc_info=True)
        return 1

    logging.info(f"{settings.APP_NAME} has finished successfully.")
    return 0


if __name__ == "__main__":
    sys.exit(main())

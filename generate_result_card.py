#!/usr/bin/env python3
"""
Simple wrapper to generate a result card for one student
Usage: python3 generate_result_card.py <input.json|input.csv> <output_dir> [--format pdf|docx|html|all] [--roll-no N]
"""

import sys
import argparse
import logging
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / "src"))

from result_card.config import ReportSettings
from result_card.core.form import load_form_csv, load_form_json, submit
from result_card.errors import ResultCardError
from result_card.generator import ResultCardGenerator

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("generate_result_card")

FORMATS = ("pdf", "docx", "html")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Generate a student result card")
    parser.add_argument("input", type=Path, help="Student data (.json or .csv)")
    parser.add_argument("output_dir", type=Path, help="Directory for generated files")
    parser.add_argument(
        "--format",
        choices=FORMATS + ("all",),
        default="all",
        help="Output format (default: all)",
    )
    parser.add_argument("--roll-no", help="Roll number to select from a multi-row CSV")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    output_dir = args.output_dir.expanduser()

    print(f"Starting result card generation...")
    print(f"  Input: {args.input}")
    print(f"  Output Dir: {output_dir}")

    # Reduce third-party logging verbosity
    logging.getLogger("weasyprint").setLevel(logging.ERROR)
    logging.getLogger("fontTools").setLevel(logging.ERROR)

    try:
        if args.input.suffix.lower() == ".csv":
            form = load_form_csv(args.input, roll_no=args.roll_no)
        else:
            form = load_form_json(args.input)
        record = submit(form)
    except (ResultCardError, OSError, ValueError) as e:
        print(f"ERROR: {e}")
        return 1

    generator = ResultCardGenerator(ReportSettings(output_dir=output_dir))
    generator.generate(record)

    formats = FORMATS if args.format == "all" else (args.format,)
    exporters = {
        "pdf": generator.export_pdf,
        "docx": generator.export_docx,
        "html": generator.export_html,
    }

    failures = 0
    for export_format in formats:
        outcome = exporters[export_format]()
        if outcome.success:
            print(f"✅ {outcome.notification.description} -> {outcome.path}")
        else:
            failures += 1
            print(f"❌ {outcome.notification.description}")

    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())

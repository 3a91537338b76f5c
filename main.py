"""
Entry point for the Buy vs Commute calculator.

Usage:
    python main.py                  # launches the web app at localhost:5000
    python main.py --cli            # runs the terminal interface
    python main.py --cli --yearly --pdf report.pdf
"""

import argparse
import logging
import sys


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Buy a Car vs Commute: monthly cost comparison",
    )
    parser.add_argument(
        "--cli",
        action="store_true",
        help="Run in terminal mode instead of launching the web app",
    )
    parser.add_argument(
        "--yearly",
        action="store_true",
        help="Show totals on a yearly basis (terminal mode)",
    )
    parser.add_argument(
        "--pdf",
        metavar="PATH",
        help="Also write a PDF report to PATH (terminal mode)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.cli:
        from cli import run_cli
        sys.exit(run_cli(view_mode="yearly" if args.yearly else "monthly",
                         pdf_path=args.pdf))
    else:
        from app import run_web
        run_web()


if __name__ == "__main__":
    main()

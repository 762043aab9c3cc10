#!/usr/bin/env python3
"""
Script Base - Common infrastructure for CLI scripts

Provides a base class that handles:
- Path setup for imports from parent directory
- Logging configuration (stdout + optional file)
- Argument parsing with common options
- Header/summary printing with consistent formatting
- Exception handling and exit codes

Usage:
    from script_base import ScriptBase, run_script

    def main():
        script = ScriptBase(
            name="my_script",
            description="Does something useful",
        )
        script.add_debug_arg()
        args = script.parse_args()

        script.print_header({"DEBUG": args.debug})
        ...
        script.print_summary(stats)
        return True

    if __name__ == "__main__":
        run_script(main)
"""

import sys
import argparse
import logging
from pathlib import Path
from typing import Callable, Optional

# Add parent directory to path for imports (do this immediately)
sys.path.insert(0, str(Path(__file__).parent.parent))


class ScriptBase:
    """Base class providing common CLI script infrastructure."""

    def __init__(
        self,
        name: str,
        description: str,
        epilog: str = "",
        log_dir: Optional[Path] = None
    ):
        """
        Initialize the script base.

        Args:
            name: Script name (used for log file naming)
            description: Script description for --help
            epilog: Additional help text (examples, etc.)
            log_dir: Directory for a log file; stdout only when omitted
        """
        self.name = name
        self.log_dir = log_dir
        self.logger = self._setup_logging()
        self.parser = self._create_parser(description, epilog)

    def _setup_logging(self) -> logging.Logger:
        """Configure logging with stdout and optional file handlers."""
        handlers = [logging.StreamHandler(sys.stdout)]
        if self.log_dir:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            handlers.append(logging.FileHandler(self.log_dir / f'{self.name}.log'))

        logging.basicConfig(
            level=logging.INFO,
            format='%(asctime)s - %(levelname)s - %(message)s',
            handlers=handlers
        )
        return logging.getLogger(self.name)

    def _create_parser(self, description: str, epilog: str) -> argparse.ArgumentParser:
        """Create the argument parser."""
        return argparse.ArgumentParser(
            description=description,
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog=epilog
        )

    # =========================================================================
    # Common Arguments
    # =========================================================================

    def add_debug_arg(self):
        """Add --debug argument."""
        self.parser.add_argument(
            '--debug',
            action='store_true',
            help='Enable debug logging'
        )

    # =========================================================================
    # Argument Parsing
    # =========================================================================

    def parse_args(self, args=None) -> argparse.Namespace:
        """
        Parse command line arguments and apply common settings.

        Args:
            args: Arguments to parse (default: sys.argv)

        Returns:
            Parsed arguments namespace
        """
        parsed = self.parser.parse_args(args)

        # Apply debug logging if requested
        if getattr(parsed, 'debug', False):
            logging.getLogger().setLevel(logging.DEBUG)
            self.logger.debug("Debug logging enabled")

        return parsed

    # =========================================================================
    # Output Formatting
    # =========================================================================

    def print_header(self, modes: dict = None, title: str = None):
        """
        Print a formatted header with optional mode indicators.

        Args:
            modes: Dict of mode_name -> is_active (e.g., {"DEBUG": True})
            title: Custom title (default: script name formatted)
        """
        title = title or self.name.replace('_', ' ').title()

        self.logger.info("=" * 80)
        self.logger.info(title)
        self.logger.info("=" * 80)

        if modes:
            for mode_name, is_active in modes.items():
                if is_active:
                    self.logger.info(f"*** {mode_name} MODE ***")

        self.logger.info("")

    def print_summary(self, stats: dict, title: str = "SUMMARY"):
        """
        Print a formatted summary of operation statistics.

        Args:
            stats: Dict of stat_name -> value
            title: Summary section title
        """
        self.logger.info("")
        self.logger.info("=" * 80)
        self.logger.info(title)
        self.logger.info("=" * 80)

        if stats:
            # Find max key length for alignment
            max_key_len = max(len(str(k)) for k in stats.keys())

            for key, value in stats.items():
                # Format key: replace underscores, title case
                display_key = key.replace('_', ' ').title()
                self.logger.info(f"{display_key:<{max_key_len + 5}} {value}")

        self.logger.info("=" * 80)

    def print_section(self, title: str, items: dict, indent: int = 2):
        """
        Print a subsection with indented items.

        Args:
            title: Section title
            items: Dict of label -> value
            indent: Number of spaces to indent items
        """
        self.logger.info(f"{title}:")
        prefix = " " * indent
        for label, value in items.items():
            self.logger.info(f"{prefix}{label}: {value}")


def run_script(main_func: Callable[[], bool]):
    """
    Run a script's main function with standard exception handling.

    Args:
        main_func: Function that returns True on success, False on failure
    """
    try:
        success = main_func()
        sys.exit(0 if success else 1)
    except KeyboardInterrupt:
        print("\nCancelled by user")
        sys.exit(1)
    except Exception as e:
        logging.error(f"Unexpected error: {e}", exc_info=True)
        sys.exit(1)

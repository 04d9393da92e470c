"""
CLI interface for the recursive file search.

Runs one search and reports the number of files found.
"""
import argparse
import json
import sys
from pathlib import Path

from file_searcher.errors import WalkError
from file_searcher.models import SearchConfig
from file_searcher.search import FileSearch, configure_logging

EXAMPLE_IGNORE_PATTERNS = [".git", "node_modules"]


def load_config_file(config_path: str) -> SearchConfig:
    """
    Load configuration from JSON file.

    Args:
        config_path: Path to config file

    Returns:
        SearchConfig from file
    """
    with open(config_path, 'r', encoding='utf-8') as f:
        config_data = json.load(f)
    return SearchConfig(**config_data)


def save_config_file(config: SearchConfig, config_path: str) -> None:
    """
    Save configuration to JSON file.

    Args:
        config: Configuration to save
        config_path: Path to save config
    """
    with open(config_path, 'w', encoding='utf-8') as f:
        json.dump(config.model_dump(mode='json'), f, indent=2)
    print(f"Configuration saved to {config_path}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Recursively list files under a directory, pruning ignored subtrees",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Count files below the current directory, skipping VCS and dependencies
  file-searcher --root ./ --ignore .git --ignore node_modules

  # Glob matching on any path component, tolerate unreadable folders
  file-searcher --root /data --match glob --ignore "*.tmp" --on-error skip

  # Generate example configuration
  file-searcher --generate-config search.json --root ./
        """
    )

    parser.add_argument(
        "--root",
        type=str,
        help="Directory to search (default: ./)"
    )
    parser.add_argument(
        "--ignore",
        action="append",
        metavar="PATTERN",
        help="Path fragment or glob pattern to ignore (repeatable)"
    )
    parser.add_argument(
        "--match",
        choices=["prefix", "glob"],
        help="How --ignore patterns are matched (default: prefix)"
    )
    parser.add_argument(
        "--max-workers",
        type=int,
        help="Maximum concurrent filesystem calls"
    )
    parser.add_argument(
        "--on-error",
        choices=["fail", "skip"],
        help="Error handling: 'fail' aborts on first error, 'skip' continues. Default: fail"
    )
    parser.add_argument(
        "--timeout",
        type=float,
        help="Abort the search after this many seconds"
    )
    parser.add_argument(
        "--config",
        type=str,
        help="Path to configuration JSON file"
    )
    parser.add_argument(
        "--generate-config",
        type=str,
        metavar="PATH",
        help="Generate example configuration file and exit"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)"
    )
    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.log_level)

    try:
        if args.config:
            config = load_config_file(args.config)
        else:
            config = SearchConfig()

        # Override config with CLI arguments
        overrides = {}
        if args.root:
            overrides["root_directory"] = args.root
        if args.ignore:
            overrides["ignore_patterns"] = args.ignore
        if args.match:
            overrides["match_mode"] = args.match
        if args.max_workers is not None:
            overrides["max_workers"] = args.max_workers
        if args.on_error:
            overrides["on_error"] = args.on_error
        if args.timeout is not None:
            overrides["timeout"] = args.timeout
        if overrides:
            config = SearchConfig(**{**config.model_dump(), **overrides})
    except (OSError, ValueError) as e:
        print(f"Error: {e}")
        sys.exit(1)

    if args.generate_config:
        if not config.ignore_patterns:
            config = config.model_copy(update={"ignore_patterns": EXAMPLE_IGNORE_PATTERNS})
        save_config_file(config, args.generate_config)
        sys.exit(0)

    root = Path(config.root_directory)
    if not root.is_dir():
        print(f"Error: Root directory does not exist or is not a directory: {root}")
        sys.exit(1)

    try:
        result = FileSearch(config).run()
    except WalkError as e:
        print(f"Error: {e}")
        sys.exit(1)

    print("Retrieved search file count: ", result.total_files)
    if result.skipped:
        print(f"Skipped entries: {len(result.skipped)}")
    sys.exit(0)


if __name__ == "__main__":
    main()

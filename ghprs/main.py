"""ghprs entry point.

Lists the open pull requests of every repository in the configured GitHub
organization. Usage: ghprs [REPO ...] (repository names restrict the
listing to those repositories).
"""

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError
from rich.console import Console

from ghprs.adapters import GitHubAdapter, GitPlatformError
from ghprs.config import DEFAULT_CONFIG_PATH, ConfigError, load_config, require_credentials
from ghprs.lister import PullRequestLister, stale_threshold
from ghprs.logging import GhprsLogging
from ghprs.render import ConsoleRenderer

LOG = logging.getLogger("ghprs.main")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI: options and an optional list of repository names."""
    parser = argparse.ArgumentParser(
        prog="ghprs",
        description="List open pull requests of every repository in a GitHub organization",
    )
    parser.add_argument(
        "repos",
        nargs="*",
        metavar="REPO",
        help="Only list these repositories (default: all)",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help=f"Path to YAML config file (default {DEFAULT_CONFIG_PATH})",
    )
    parser.add_argument(
        "--continue-on-error",
        action="store_true",
        help="Log fetch errors and keep listing instead of stopping at the first one",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Override logging.level (DEBUG, INFO, WARNING, ERROR)",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Only load and validate config, then exit",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None, console: Console | None = None) -> int:
    """Entry point: load config, run the lister, map the outcome to an exit
    code."""
    args = parse_args(argv)

    try:
        config = load_config(args.config)
        organization, token = require_credentials(config)
    except (ConfigError, ValidationError, OSError) as e:
        print(f"Failed to load configuration file: {e}", file=sys.stderr)
        return 1

    if args.log_level:
        config.logging.level = args.log_level
    GhprsLogging(config.logging).setup()

    if args.check:
        print("Config OK:", organization)
        return 0

    console = console or Console(highlight=False)
    console.print("[green]Connecting to GitHub...[/]")

    adapter = GitHubAdapter(
        token=token,
        api_url=config.github.api_url,
        per_page=config.github.per_page,
        timeout=config.github.timeout,
    )
    lister = PullRequestLister(
        adapter,
        organization,
        renderer=ConsoleRenderer(console),
        stale_before=stale_threshold(days=config.lister.stale_days),
        on_error="continue" if args.continue_on_error else config.lister.on_error,
    )

    try:
        errors = lister.run(args.repos)
    except KeyboardInterrupt:
        return 0
    except GitPlatformError as e:
        LOG.debug("Listing aborted", exc_info=True)
        print(e, file=sys.stderr)
        return 1
    except Exception as e:
        LOG.exception("Fatal error: %s", e)
        return 1

    if errors:
        LOG.warning("Listing finished with %d skipped errors", len(errors))
    return 0


if __name__ == "__main__":
    sys.exit(main())

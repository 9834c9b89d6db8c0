import argparse
import logging
import sys
from collections.abc import Sequence
from datetime import date

from pydantic import ValidationError
from rich.console import Console

from gitstat.core.errors import GitStatError
from gitstat.core.observability import configure_logging
from gitstat.core.observability import init_sentry
from gitstat.core.security import resolve_token
from gitstat.render.terminal import render_profile
from gitstat.services.calendar_service import aggregate_statistics
from gitstat.services.calendar_service import build_calendar
from gitstat.services.calendar_service import layout_weeks
from gitstat.services.contribution_service import get_user_contributions
from gitstat.settings import Settings


logger = logging.getLogger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="gitstat",
        description="Display the GitHub contribution calendar for any user",
    )
    p.add_argument("username", help="GitHub username")
    p.add_argument(
        "-t",
        "--token",
        help="GitHub access token (or use the GITHUB_TOKEN environment variable)",
    )
    p.add_argument("--days", type=int, help="Number of trailing days to show")
    p.add_argument("--width", type=int, help="Override the detected terminal width")
    p.add_argument("--no-color", action="store_true", help="Disable colour output")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return p


def main(argv: Sequence[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)
    try:
        settings = Settings()
    except ValidationError as exc:
        Console(stderr=True).print(
            f"Error: invalid GITSTAT_ configuration: {exc}",
            style="bold red",
            markup=False,
        )
        return 1

    configure_logging(logging.DEBUG if args.verbose else settings.log_level)
    init_sentry(settings)

    # Queried once; resizes during the run are not tracked.
    stdout_console = Console()
    terminal_width = args.width or stdout_console.size.width
    color = (
        not args.no_color
        and not stdout_console.no_color
        and stdout_console.color_system is not None
    )
    window_days = args.days if args.days is not None else settings.window_days
    window_end = date.today()

    try:
        token = resolve_token(args.token, settings)
        user, records = get_user_contributions(
            username=args.username.strip(),
            token=token,
            graphql_url=settings.github_graphql_url,
            window_days=window_days,
            window_end=window_end,
            timeout=settings.request_timeout,
        )
        calendar = build_calendar(
            records, window_days=window_days, window_end=window_end
        )
    except GitStatError as exc:
        logger.debug("Aborting: %r", exc)
        Console(stderr=True).print(f"Error: {exc}", style="bold red", markup=False)
        return 1

    output = render_profile(
        layout_weeks(calendar),
        aggregate_statistics(calendar),
        terminal_width=terminal_width,
        user=user,
        color=color,
        color_system=stdout_console.color_system or "truecolor",
    )
    sys.stdout.write(output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

import io
import logging

from pydantic import BaseModel
from pydantic import ConfigDict
from rich.console import Console
from rich.text import Text

from gitstat.schemas.contributions import CalendarCell
from gitstat.schemas.contributions import GitHubUser
from gitstat.schemas.contributions import Statistics
from gitstat.schemas.contributions import WeekColumn


logger = logging.getLogger(__name__)

# Below this width the grid is replaced by a text-only summary.
MIN_TERMINAL_WIDTH = 40
LABEL_WIDTH = 4
CELL_WIDTH = 2

MONTHS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)
WEEKDAY_LABELS = {1: "Mon", 3: "Wed", 5: "Fri"}


class Palette(BaseModel):
    """Colours and glyphs used to draw the calendar, indexed by tier."""

    model_config = ConfigDict(frozen=True)

    tier_colors: tuple[str, str, str, str, str] = (
        "#2d333b",
        "#0e4479",
        "#216eb1",
        "#3498db",
        "#74b9ff",
    )
    glyph: str = "■"
    monochrome_glyphs: tuple[str, str, str, str, str] = ("·", "░", "▒", "▓", "█")
    accent: str = "bright_blue"
    title: str = "bold bright_white"
    info: str = "bright_cyan"


DEFAULT_PALETTE = Palette()


def visible_week_count(total_weeks: int, terminal_width: int) -> int:
    """Return how many week columns fit next to the weekday labels."""

    return max(0, min(total_weeks, (terminal_width - LABEL_WIDTH) // CELL_WIDTH))


def _make_console(
    buffer: io.StringIO, width: int, color: bool, color_system: str
) -> Console:
    return Console(
        file=buffer,
        width=width,
        color_system=color_system if color else None,
        force_terminal=color,
        no_color=not color,
        highlight=False,
        emoji=False,
        legacy_windows=False,
    )


def _window_title(day_count: int) -> str:
    if day_count in {365, 366}:
        return "GitHub Activity (Last Year)"
    return f"GitHub Activity (Last {day_count} Days)"


def _statistics_parts(statistics: Statistics) -> list[str]:
    return [
        f"Active Days: {statistics.active_days}",
        f"Max/Day: {statistics.max_count}",
        f"Avg/Day: {statistics.average:.1f}",
        f"Total: {statistics.total}",
    ]


def _cell(cell: CalendarCell | None, palette: Palette, color: bool) -> tuple[str, str]:
    if cell is None:
        return " ", ""
    if color:
        return palette.glyph, palette.tier_colors[cell.tier]
    return palette.monochrome_glyphs[cell.tier], ""


def _month_header(weeks: list[WeekColumn]) -> str:
    width = len(weeks) * CELL_WIDTH - 1
    chars = [" "] * width

    labels: list[tuple[int, str]] = []
    for index, week in enumerate(weeks):
        for cell in week:
            if cell is not None and cell.date.day == 1:
                labels.append((index * CELL_WIDTH, MONTHS[cell.date.month - 1]))
                break

    # Name the leading partial month only when it does not collide.
    first = next(cell for cell in weeks[0] if cell is not None)
    if not labels or labels[0][0] > len(MONTHS[0]):
        labels.insert(0, (0, MONTHS[first.date.month - 1]))

    next_free = 0
    for position, label in labels:
        if position < next_free or position + len(label) > width:
            continue
        chars[position:position + len(label)] = label
        next_free = position + len(label) + 1

    return "".join(chars)


def _legend(palette: Palette, color: bool) -> Text:
    legend = Text("Less ")
    for tier, tier_color in enumerate(palette.tier_colors):
        if tier:
            legend.append(" ")
        if color:
            legend.append(palette.glyph, style=tier_color)
        else:
            legend.append(palette.monochrome_glyphs[tier])
    legend.append(" More")
    return legend


def _render_header(console: Console, user: GitHubUser, palette: Palette) -> None:
    console.rule(style=palette.accent)
    console.print(Text(user.login, style=palette.title), justify="center")
    info_line = (
        f"Name: {user.name or user.login}  |  Repos: {user.public_repos}  |  "
        f"Followers: {user.followers}  |  Following: {user.following}"
    )
    console.print(Text(info_line, style=palette.info), justify="center")
    console.rule(style=palette.accent)


def _render_statistics(
    console: Console, statistics: Statistics, palette: Palette, stacked: bool
) -> None:
    parts = _statistics_parts(statistics)
    line = "  |  ".join(parts)
    console.print()
    console.print(Text("Statistics", style=palette.title), justify="center")
    if stacked or len(line) > console.width:
        for part in parts:
            console.print(Text(part, style=palette.info))
    else:
        console.print(Text(line, style=palette.info), justify="center")
    console.rule(style=palette.accent)


def _render_fallback(
    console: Console,
    user: GitHubUser,
    statistics: Statistics,
    palette: Palette,
) -> None:
    console.rule(style=palette.accent)
    console.print(Text(user.login, style=palette.title))
    console.print(
        Text(
            f"Calendar needs {MIN_TERMINAL_WIDTH}+ columns",
            style="dim",
        )
    )
    _render_statistics(console, statistics, palette, stacked=True)


def _render_grid(
    console: Console,
    weeks: list[WeekColumn],
    statistics: Statistics,
    palette: Palette,
    color: bool,
) -> None:
    day_count = sum(1 for week in weeks for cell in week if cell is not None)
    shown = weeks[len(weeks) - visible_week_count(len(weeks), console.width):]

    console.print(Text(_window_title(day_count), style=palette.title), justify="center")
    console.print(
        Text(f"Total Contributions: {statistics.total}", style=palette.accent),
        justify="center",
    )
    if len(shown) < len(weeks):
        console.print(
            Text(f"Showing the last {len(shown)} of {len(weeks)} weeks", style="dim"),
            justify="center",
        )
    console.print()

    grid_width = LABEL_WIDTH + len(shown) * CELL_WIDTH - 1
    padding = " " * ((console.width - grid_width) // 2)

    header = Text(padding + " " * LABEL_WIDTH)
    header.append(_month_header(shown), style=palette.accent)
    console.print(header)

    for row in range(7):
        line = Text(padding)
        line.append(f"{WEEKDAY_LABELS.get(row, ''):>3} ", style=palette.accent)
        for index, week in enumerate(shown):
            if index:
                line.append(" ")
            glyph, style = _cell(week[row], palette, color)
            line.append(glyph, style=style)
        console.print(line, no_wrap=True, overflow="crop")

    console.print()
    console.print(_legend(palette, color), justify="center")


def render_profile(
    weeks: list[WeekColumn],
    statistics: Statistics,
    terminal_width: int,
    user: GitHubUser,
    palette: Palette = DEFAULT_PALETTE,
    color: bool = True,
    color_system: str = "truecolor",
) -> str:
    """Render the profile header, calendar grid and statistics as text.

    The most recent weeks that fit `terminal_width` are drawn, oldest on the
    left. Terminals narrower than `MIN_TERMINAL_WIDTH` get a text-only
    summary instead of the grid. With `color` off no escape codes are
    emitted and tiers are told apart by glyph. `color_system` names the
    rich colour system to target, so palettes downgrade on 8-bit or 16-colour
    terminals.
    """

    width = max(1, terminal_width)
    buffer = io.StringIO()
    console = _make_console(buffer, width, color, color_system)

    if width < MIN_TERMINAL_WIDTH or not weeks:
        if weeks:
            logger.info(
                "Terminal width %d is below %d columns, rendering summary only",
                width,
                MIN_TERMINAL_WIDTH,
            )
        _render_fallback(console, user, statistics, palette)
    else:
        _render_header(console, user, palette)
        _render_grid(console, weeks, statistics, palette, color)
        _render_statistics(console, statistics, palette, stacked=False)

    return buffer.getvalue()

"""Plain-text board renderer (terminal output)."""

from collections.abc import Sequence
from datetime import datetime

from panchangclock.i18n import t
from panchangclock.models import CityReport, PeriodView, SourceStatus, WindowView
from panchangclock.resolve import format_civil, format_remaining


def period_lines(view: PeriodView, zone: str, lang: str = "en") -> list[str]:
    """Current/remaining/next lines for one periodic category, times shown in zone."""
    state = view.state
    if state.current is None and state.next is None:
        return [t("no_data", lang)]
    lines: list[str] = []
    if state.current is not None:
        lines.append(t("current", lang).format(name=state.current.name))
        lines.append(format_remaining(state.remaining, lang))
    else:
        lines.append(t("current_na", lang))
    if state.next is not None:
        lines.append(
            t("next_starts", lang).format(
                name=state.next.name, start=format_civil(state.next.start, zone)
            )
        )
    return lines


def window_lines(view: WindowView, zone: str, lang: str = "en") -> list[str]:
    """One "name" + "start to end" pair per window of the day. Empty if none."""
    lines: list[str] = []
    for window in view.windows:
        lines.append(window.name)
        lines.append(
            t("window_span", lang).format(
                start=format_civil(window.start, zone),
                end=format_civil(window.end, zone),
            )
        )
    return lines


def render_city_text(report: CityReport, lang: str = "en") -> str:
    """Render one city's report as an indented text block."""
    city = report.city
    zone = city.time_zone
    out = [f"{city.name} ({zone})"]
    if report.is_home:
        out.append(f"  {t('you_are_here', lang)}")
    out.append(f"  {t('local_time', lang).format(time=format_civil(report.now, zone))}")

    if report.status is SourceStatus.UNAVAILABLE:
        out.append(f"  {t('source_unavailable', lang).format(error=report.error)}")
        return "\n".join(out)

    for view in report.periods:
        out.append(f"  {t('cat_' + view.category.name, lang)}")
        out.extend(f"    {line}" for line in period_lines(view, zone, lang))
    for view in report.windows:
        lines = window_lines(view, zone, lang)
        if not lines:
            continue
        out.append(f"  {t('cat_' + view.category.name, lang)}")
        out.extend(f"    {line}" for line in lines)
    return "\n".join(out)


def render_board_text(
    reports: Sequence[CityReport],
    browser_now: datetime | None = None,
    browser_zone: str | None = None,
    lang: str = "en",
) -> str:
    """Render every city, separated by blank lines, with an optional clock header."""
    blocks: list[str] = []
    if browser_now is not None and browser_zone:
        blocks.append(
            t("browser_time", lang).format(time=format_civil(browser_now, browser_zone))
        )
    blocks.extend(render_city_text(r, lang) for r in reports)
    return "\n\n".join(blocks) + "\n"

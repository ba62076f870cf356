"""HTML board renderer.

Produces a self-contained HTML string (one column per city) for embedding
via st.components.v1.html(). All almanac-derived text is escaped.
"""

from __future__ import annotations

import html
from collections.abc import Sequence

from panchangclock.i18n import t
from panchangclock.models import CityReport, SourceStatus
from panchangclock.renderers.text import period_lines, window_lines
from panchangclock.resolve import format_civil

_BG = "#0d1b35"
_TEXT_COLOR = "#e8d5a3"
_ACCENT = "#c9a96e"
_WARN_COLOR = "#ff9999"


def _section(title: str, lines: list[str], inauspicious: bool) -> str:
    cls = "section inauspicious-section" if inauspicious else "section"
    body = "".join(f'<div class="item">{html.escape(line)}</div>' for line in lines)
    return (
        f'<div class="{cls}"><div class="section-title">{html.escape(title)}</div>'
        f'<div class="section-content">{body}</div></div>'
    )


def render_city_html(report: CityReport, lang: str = "en") -> str:
    """Render one city column."""
    city = report.city
    zone = city.time_zone
    parts = [
        '<div class="city-column"><div class="city-header">',
        f'<div class="city-name">{html.escape(city.name)}</div>',
        f'<div class="city-timezone">{html.escape(zone)}</div>',
    ]
    if report.is_home:
        here = html.escape(t("you_are_here", lang))
        parts.append(f'<div class="you-are-here">{here}</div>')
    parts.append("</div>")
    local = t("local_time", lang).format(time=format_civil(report.now, zone))
    parts.append(f'<div class="local-time">{html.escape(local)}</div>')

    if report.status is SourceStatus.UNAVAILABLE:
        message = t("source_unavailable", lang).format(error=report.error)
        parts.append(f'<div class="error">{html.escape(message)}</div></div>')
        return "".join(parts)

    for view in report.periods:
        parts.append(
            _section(
                t("cat_" + view.category.name, lang),
                period_lines(view, zone, lang),
                inauspicious=False,
            )
        )
    for view in report.windows:
        lines = window_lines(view, zone, lang)
        if lines:
            parts.append(
                _section(t("cat_" + view.category.name, lang), lines, inauspicious=True)
            )
    parts.append("</div>")
    return "".join(parts)


def render_board_html(reports: Sequence[CityReport], lang: str = "en") -> str:
    """Return a self-contained HTML page with one column per city.

    Args:
        reports: Resolved city reports, in display order.
        lang: Language code ('en' or 'ta') for labels.

    Returns:
        HTML string suitable for st.components.v1.html().
    """
    columns = "\n".join(render_city_html(r, lang) for r in reports)
    return f"""<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<style>
  body {{ background: {_BG}; color: {_TEXT_COLOR}; font-family: sans-serif; margin: 0; }}
  .cities-grid {{ display: flex; flex-wrap: wrap; gap: 1rem; padding: 1rem; }}
  .city-column {{ flex: 1 1 16rem; border-top: 1px solid {_ACCENT}; padding: 0.6rem; }}
  .city-name {{ font-size: 1.3rem; font-weight: 600; }}
  .city-timezone, .local-time {{ font-size: 0.85rem; opacity: 0.75; }}
  .you-are-here {{ color: {_ACCENT}; font-weight: 600; }}
  .section {{ margin-top: 0.8rem; }}
  .section-title {{ color: {_ACCENT}; font-size: 0.8rem; letter-spacing: 0.08em; }}
  .inauspicious-section .section-title {{ color: {_WARN_COLOR}; }}
  .error {{ color: {_WARN_COLOR}; margin-top: 0.8rem; }}
</style>
</head>
<body>
<div class="cities-grid">
{columns}
</div>
</body>
</html>
"""

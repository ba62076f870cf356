"""Panchangam Clock: Streamlit board of the current periods for several cities."""

import datetime
import os

import streamlit as st
import streamlit.components.v1 as components
from dotenv import load_dotenv
from pytz import utc
from streamlit_js_eval import streamlit_js_eval

load_dotenv()

from panchangclock.compute import detect_home_city, run  # noqa: E402
from panchangclock.config import ConfigError, load_settings  # noqa: E402
from panchangclock.i18n import t  # noqa: E402
from panchangclock.renderers.html import render_board_html  # noqa: E402
from panchangclock.resolve import format_civil  # noqa: E402

st.set_page_config(
    page_title=t("page_title", os.environ.get("PANCHANGAM_LANG", "en")),
    page_icon="✦",
    layout="wide",
)

try:
    _settings = load_settings()
except ConfigError as e:
    st.error(str(e))
    st.stop()

_lang: str = _settings.lang

# --- Browser zone detection (via streamlit-js-eval) ---
# The JS call returns None on the first run; the rerun it triggers fills it in.
if "browser_zone" not in st.session_state:
    _zone: str | None = streamlit_js_eval(
        js_expressions="Intl.DateTimeFormat().resolvedOptions().timeZone",
        key="_zone_detect",
        height=0,
    )
    if _zone is not None:
        st.session_state.browser_zone = _zone

if "reports" not in st.session_state:
    st.session_state.reports = None

st.markdown(
    """
    <style>
    [data-testid="stHeader"], [data-testid="stToolbar"] { display: none !important; }
    iframe[src*="streamlit_js_eval"] { display: none !important; }
    </style>
    """,
    unsafe_allow_html=True,
)


@st.fragment(run_every=datetime.timedelta(seconds=_settings.refresh_seconds))
def _board() -> None:
    # Each tick is a full fetch-parse-resolve; the previous reports are replaced whole.
    now = datetime.datetime.now(utc)
    browser_zone: str | None = st.session_state.get("browser_zone")
    home = detect_home_city(_settings.cities, browser_zone, now)
    st.session_state.reports = run(
        _settings.cities,
        _settings.policy(home),
        now,
        home=home,
        timeout=_settings.timeout,
    )

    if browser_zone:
        st.caption(
            t("browser_time", _lang).format(time=format_civil(now, browser_zone))
        )
    components.html(
        render_board_html(st.session_state.reports, lang=_lang),
        height=1100,
        scrolling=True,
    )


_board()

"""MoonPhase — Streamlit app showing the moon as it looks right now."""

import matplotlib.pyplot as plt
import streamlit as st
from dotenv import load_dotenv
from streamlit_js_eval import streamlit_js_eval

load_dotenv()

from moonphase.i18n import phase_name, t  # noqa: E402
from moonphase.models import MoonPhase, QueryInput  # noqa: E402
from moonphase.phase import SHORT_LABELS  # noqa: E402
from moonphase.renderers.static import render_phase  # noqa: E402
from moonphase.state import MoonViewState, load_moon  # noqa: E402

# --- Language detection (browser-first via streamlit-js-eval) ---
# On the first run the JS call returns None; the rerun triggered by
# streamlit_js_eval fills it in.
if "lang" not in st.session_state:
    _browser_lang: str | None = streamlit_js_eval(
        js_expressions="navigator.language", key="_lang_detect", height=0
    )
    if _browser_lang is not None:
        st.session_state.lang = "ko" if _browser_lang.lower().startswith("ko") else "en"

_lang: str = st.session_state.get("lang", "en")

st.set_page_config(
    page_title=t("page_title", _lang),
    page_icon="☾",
    layout="centered",
    initial_sidebar_state="collapsed",
)

# --- Session state initialization ---

if "view" not in st.session_state:
    st.session_state.view = MoonViewState()
if "moon_data" not in st.session_state:
    st.session_state.moon_data = None
if "fetched" not in st.session_state:
    st.session_state.fetched = False

view: MoonViewState = st.session_state.view

st.markdown(
    """
    <style>
    iframe[src*="streamlit_js_eval"] { display: none !important; }
    html, body, [data-testid="stAppViewContainer"], [data-testid="stMain"] {
        background: linear-gradient(#000000, #1b1640) !important;
    }
    [data-testid="stHeader"], [data-testid="stToolbar"] {
        display: none !important;
    }
    .phase-box {
        background: rgba(0, 0, 0, 0.5);
        border-radius: 15px;
        padding: 1rem;
        text-align: center;
        color: #ffffff;
    }
    .phase-box .error { color: #ff6b6b; font-size: 0.85rem; }
    .phase-box .sub { color: #aaaaaa; }
    </style>
    """,
    unsafe_allow_html=True,
)


def _fetch(address: str) -> None:
    with st.spinner(t("loading_compute", _lang)):
        moon_data = load_moon(view, QueryInput(address=address, when=""))
    if moon_data is not None:
        st.session_state.moon_data = moon_data


# --- Input ---

col_place, col_btn = st.columns([4, 1], vertical_alignment="bottom")
with col_place:
    address = st.text_input(
        t("label_place", _lang), placeholder=t("placeholder_place", _lang)
    )
with col_btn:
    submitted = st.button(t("btn_show_moon", _lang), key="submit_btn")

if submitted or not st.session_state.fetched:
    st.session_state.fetched = True
    _fetch(address)

# --- Moon ---

fig = render_phase(view.moon_phase)
st.pyplot(fig, clear_figure=True)
plt.close(fig)

# --- Phase info ---

if view.error_message is not None:
    body = f'<div class="error">{view.error_message}</div>'
else:
    if view.phase_name in ("Loading...", "Error"):
        name = view.phase_name
    else:
        name = phase_name(view.moon_phase, _lang)
    illumination = t("illumination", _lang).format(percent=view.illumination_percent)
    body = (
        f"<h3>{name}</h3>"
        f'<div class="sub">{illumination}</div>'
    )
    moon_data = st.session_state.moon_data
    if moon_data is not None and moon_data.phase == view.moon_phase:
        times = []
        if moon_data.moonrise is not None:
            rise = f"{moon_data.moonrise:%H:%M} UTC"
            times.append(t("moonrise", _lang).format(time=rise))
        if moon_data.moonset is not None:
            set_ = f"{moon_data.moonset:%H:%M} UTC"
            times.append(t("moonset", _lang).format(time=set_))
        if times:
            body += f'<div class="sub">{" · ".join(times)}</div>'

st.markdown(
    f'<div class="phase-box"><b>{t("header_current", _lang)}</b>{body}</div>',
    unsafe_allow_html=True,
)
if view.coordinates:
    st.caption(view.coordinates)

# --- Phase preview buttons ---

st.caption(t("test_phases", _lang))
for col, phase in zip(st.columns(len(MoonPhase)), MoonPhase):
    with col:
        if st.button(SHORT_LABELS[phase], key=f"phase_{phase.value}"):
            view.set_test_phase(phase)
            st.rerun()

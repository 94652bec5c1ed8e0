"""Simple two-language (ko/en) translation helper."""

from moonphase.models import MoonPhase
from moonphase.phase import display_name

_STRINGS: dict[str, dict[str, str]] = {
    "page_title": {
        "ko": "오늘의 달",
        "en": "MoonPhase",
    },
    "header_current": {
        "ko": "현재 달의 위상",
        "en": "Current Moon Phase",
    },
    "label_place": {
        "ko": "장소",
        "en": "Location",
    },
    "placeholder_place": {
        "ko": "비워두면 기본 위치를 사용해요",
        "en": "Leave empty to use the default location",
    },
    "btn_show_moon": {
        "ko": "☾ 달 보기",
        "en": "☾ Show Moon",
    },
    "loading_compute": {
        "ko": "☾ 달의 위상을 계산하는 중",
        "en": "☾ Computing the moon phase",
    },
    "illumination": {
        "ko": "밝기: {percent}%",
        "en": "Illumination: {percent}%",
    },
    "moonrise": {
        "ko": "월출 {time}",
        "en": "Moonrise {time}",
    },
    "moonset": {
        "ko": "월몰 {time}",
        "en": "Moonset {time}",
    },
    "test_phases": {
        "ko": "위상 미리보기",
        "en": "Preview a phase",
    },
    "phase_new": {
        "ko": "삭",
        "en": "New Moon",
    },
    "phase_waxing_crescent": {
        "ko": "초승달",
        "en": "Waxing Crescent",
    },
    "phase_first_quarter": {
        "ko": "상현달",
        "en": "First Quarter",
    },
    "phase_waxing_gibbous": {
        "ko": "차가는 달",
        "en": "Waxing Gibbous",
    },
    "phase_full": {
        "ko": "보름달",
        "en": "Full Moon",
    },
    "phase_waning_gibbous": {
        "ko": "기우는 달",
        "en": "Waning Gibbous",
    },
    "phase_last_quarter": {
        "ko": "하현달",
        "en": "Last Quarter",
    },
    "phase_waning_crescent": {
        "ko": "그믐달",
        "en": "Waning Crescent",
    },
}


def t(key: str, lang: str) -> str:
    """Return the translated string for key in lang.

    Falls back to 'en', then to the key itself if not found.
    """
    entry = _STRINGS.get(key)
    if entry is None:
        return key
    return entry.get(lang) or entry.get("en") or key


def phase_name(phase: MoonPhase, lang: str) -> str:
    """Localized display name for a phase. English matches ``phase.display_name``."""
    if lang == "en":
        return display_name(phase)
    return t(f"phase_{phase.value}", lang)

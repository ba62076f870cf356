"""Simple two-language (en/ta) translation helper."""

_STRINGS: dict[str, dict[str, str]] = {
    "page_title": {
        "en": "Panchangam Clock",
        "ta": "பஞ்சாங்க கடிகாரம்",
    },
    "browser_time": {
        "en": "Current time (your browser): {time}",
        "ta": "தற்போதைய நேரம் (உங்கள் உலாவி): {time}",
    },
    "local_time": {
        "en": "Local time here: {time}",
        "ta": "இங்குள்ள நேரம்: {time}",
    },
    "you_are_here": {
        "en": "You are here!",
        "ta": "நீங்கள் இங்கே!",
    },
    "current": {
        "en": "Current: {name}",
        "ta": "நடப்பு: {name}",
    },
    "current_na": {
        "en": "Current: N/A",
        "ta": "நடப்பு: இல்லை",
    },
    "next_starts": {
        "en": "Next: {name} (starts: {start})",
        "ta": "அடுத்து: {name} (தொடக்கம்: {start})",
    },
    "window_span": {
        "en": "{start} to {end}",
        "ta": "{start} முதல் {end} வரை",
    },
    "no_data": {
        "en": "No data",
        "ta": "தகவல் இல்லை",
    },
    "source_unavailable": {
        "en": "Panchangam source unavailable: {error}",
        "ta": "பஞ்சாங்க கோப்பு கிடைக்கவில்லை: {error}",
    },
    "remaining_hm": {
        "en": "{hours} hours {minutes} minutes remaining",
        "ta": "{hours} மணி {minutes} நிமிடம் மீதம்",
    },
    "remaining_m": {
        "en": "{minutes} minutes remaining",
        "ta": "{minutes} நிமிடம் மீதம்",
    },
    "no_time_remaining": {
        "en": "no time remaining",
        "ta": "நேரம் முடிந்தது",
    },
    "cat_TITHI": {
        "en": "TITHI",
        "ta": "திதி",
    },
    "cat_NAKSHATRA": {
        "en": "NAKSHATRAM",
        "ta": "நட்சத்திரம்",
    },
    "cat_YOGAM": {
        "en": "YOGAM",
        "ta": "யோகம்",
    },
    "cat_KARANAM": {
        "en": "KARANAM",
        "ta": "கரணம்",
    },
    "cat_RAHUKALA": {
        "en": "RAHUKALA",
        "ta": "ராகு காலம்",
    },
    "cat_YAMAGANDA": {
        "en": "YAMAGANDA",
        "ta": "எமகண்டம்",
    },
    "cat_DURMUHURTHA": {
        "en": "DURMUHURTHA",
        "ta": "துர்முகூர்த்தம்",
    },
    "cat_VARJYAM": {
        "en": "VARJYAM",
        "ta": "வர்ஜ்யம்",
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

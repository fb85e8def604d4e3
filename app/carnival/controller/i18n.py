"""UI string tables for the supported carnival languages.

English is the reference table. Every other table may be partial; lookups
fall back to English and then to the key itself.
"""

DEFAULT_LANGUAGE = "en"

SUPPORTED_LANGUAGES = {
    "en": "English",
    "pcm": "Nigerian Pidgin",
    "efk": "Efik",
    "ig": "Igbo",
    "yo": "Yoruba",
    "ha": "Hausa",
}

TRANSLATIONS = {
    "en": {
        "welcome": "Welcome to Calabar Carnival",
        "events": "Events",
        "hotels": "Hotels",
        "map": "Map",
        "safety": "Safety",
        "bands": "Bands",
        "live": "Live Updates",
        "concierge": "Concierge",
        "profile": "Profile",
        "emergency": "Emergency",
        "lost_found": "Lost & Found",
        "family_finder": "Family Finder",
        "share_location": "Share Location",
        "book_now": "Book Now",
        "vote": "Vote",
        "save": "Save",
        "search": "Search",
        "loading": "Loading...",
        "error": "Something went wrong",
    },
    "pcm": {
        "welcome": "Welcome to Calabar Carnival o!",
        "events": "Events dem",
        "safety": "Safety matter",
        "bands": "Band dem",
        "emergency": "Wahala dey!",
        "book_now": "Book am now",
        "vote": "Vote am",
        "loading": "E dey load...",
        "error": "Something no go well",
    },
    "efk": {
        "welcome": "Amedi ke Calabar Carnival",
        "events": "Mme Edinam",
        "safety": "Ukpeme",
    },
    "ig": {
        "welcome": "Nnọọ na Calabar Carnival",
        "events": "Mmemme",
        "hotels": "Ụlọ nkwari akụ",
        "safety": "Nchekwa",
        "search": "Chọọ",
    },
    "yo": {
        "welcome": "Ẹ kú àbọ̀ sí Calabar Carnival",
        "events": "Àwọn ìṣẹ̀lẹ̀",
        "hotels": "Ilé ìtura",
        "safety": "Ààbò",
        "search": "Wá",
    },
    "ha": {
        "welcome": "Barka da zuwa Calabar Carnival",
        "events": "Taruka",
        "hotels": "Otal",
        "safety": "Tsaro",
        "search": "Nema",
    },
}


def is_supported(language):
    return language in SUPPORTED_LANGUAGES


def translate(key: str, language: str = DEFAULT_LANGUAGE) -> str:
    table = TRANSLATIONS.get(language, {})
    if key in table:
        return table[key]
    if key in TRANSLATIONS[DEFAULT_LANGUAGE]:
        return TRANSLATIONS[DEFAULT_LANGUAGE][key]
    return key


def translation_table(language: str) -> dict:
    """Full table for ``language`` with English filling the gaps."""
    merged = dict(TRANSLATIONS[DEFAULT_LANGUAGE])
    merged.update(TRANSLATIONS.get(language, {}))
    return merged

"""
Internationalization support for API messages.

Messages are wrapped with _() at the point where they are raised; the
language comes from the i18n.language setting and can be switched at
runtime with set_language().  Catalogs live in locales/<lang>/LC_MESSAGES
and are compiled from .po to .mo by compile_translations.py.  A missing
catalog falls back to the untranslated English text.
"""

import gettext
import os
from typing import Dict, Optional

from bilemo.config import config

DEFAULT_LANGUAGE = "en"
DOMAIN = "messages"

CURRENT_LANGUAGE = config.get_language() or DEFAULT_LANGUAGE
TRANSLATIONS: Dict[str, gettext.NullTranslations] = {}
LOCALE_DIR = os.path.join(os.path.dirname(__file__), "locales")


def set_language(language: str):
    """Select the language used by _() and ngettext()."""
    global CURRENT_LANGUAGE  # pylint: disable=global-statement
    CURRENT_LANGUAGE = language


def get_language() -> str:
    """Return the currently selected language code."""
    return CURRENT_LANGUAGE


def get_translation(language: Optional[str] = None) -> gettext.NullTranslations:
    """
    Load (once) and return the catalog for a language.
    """
    language = language or CURRENT_LANGUAGE
    if language in TRANSLATIONS:
        return TRANSLATIONS[language]

    try:
        translation = gettext.translation(DOMAIN, LOCALE_DIR, [language])
    except FileNotFoundError:
        translation = gettext.NullTranslations()

    TRANSLATIONS[language] = translation
    return translation


def _(message: str, language: Optional[str] = None) -> str:
    """Translate a message into the current (or given) language."""
    return get_translation(language).gettext(message)


def ngettext(singular: str, plural: str, count: int, language: Optional[str] = None):
    """Translate a message with plural forms."""
    return get_translation(language).ngettext(singular, plural, count)

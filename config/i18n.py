"""
Internationalization (i18n) module for TVBrowse.

Provides a simple translation system with Spanish and English support.
Set TVBROWSE_LANG environment variable to change language (default: es).
"""

import os
from typing import Dict, Optional

# Default language (can be overridden by TVBROWSE_LANG env var)
LANG = os.environ.get("TVBROWSE_LANG", "es")

STRINGS: Dict[str, Dict[str, str]] = {
    # =========================================================================
    # SPANISH (Default)
    # =========================================================================
    "es": {
        # Sections
        "section.home": "Inicio",
        "section.gaming": "Videojuegos",
        "section.news": "Noticias",
        "section.music": "Música",
        "section.subscriptions": "Suscripciones",
        "section.history": "Historial",
        "section.playlists": "Playlists",
        # Sign-in placeholder
        "signin.title": "Iniciá sesión",
        "signin.message": "No hay nada para mostrar en {section}.",
        "signin.hint": "Exportá cookies de YouTube (cookies.txt o TVBROWSE_COOKIES_BROWSER) y presioná R.",
        # Browse screen
        "browse.sections": "Secciones",
        "browse.empty": "Elegí una sección",
        "browse.more": "Cargando más...",
        "browse.footer": "↑/↓ Navegar  •  Tab Cambiar panel  •  Enter Reproducir  •  I Detalles  •  R Recargar  •  Q Salir",
        # Details
        "details.title": "Detalles",
        "details.author": "Canal",
        "details.duration": "Duración",
        "details.views": "Vistas",
        "details.url": "URL",
        "details.close_hint": "Esc/Q: cerrar",
        # Playback
        "playback.resolving": "Obteniendo stream...",
        "playback.playing": "Reproduciendo",
        "playback.stopped": "Detenido",
        "playback.error": "No se pudo reproducir",
        # Status
        "status.ready": "Listo",
        "status.loading": "Cargando...",
    },
    # =========================================================================
    # ENGLISH
    # =========================================================================
    "en": {
        # Sections
        "section.home": "Home",
        "section.gaming": "Gaming",
        "section.news": "News",
        "section.music": "Music",
        "section.subscriptions": "Subscriptions",
        "section.history": "History",
        "section.playlists": "Playlists",
        # Sign-in placeholder
        "signin.title": "Sign in",
        "signin.message": "Nothing to show in {section}.",
        "signin.hint": "Export YouTube cookies (cookies.txt or TVBROWSE_COOKIES_BROWSER) and press R.",
        # Browse screen
        "browse.sections": "Sections",
        "browse.empty": "Pick a section",
        "browse.more": "Loading more...",
        "browse.footer": "↑/↓ Navigate  •  Tab Switch pane  •  Enter Play  •  I Details  •  R Reload  •  Q Quit",
        # Details
        "details.title": "Details",
        "details.author": "Channel",
        "details.duration": "Duration",
        "details.views": "Views",
        "details.url": "URL",
        "details.close_hint": "Esc/Q: close",
        # Playback
        "playback.resolving": "Resolving stream...",
        "playback.playing": "Playing",
        "playback.stopped": "Stopped",
        "playback.error": "Playback failed",
        # Status
        "status.ready": "Ready",
        "status.loading": "Loading...",
    },
}


def t(key: str, **kwargs) -> str:
    """
    Translate a string key to the current language.

    Args:
        key: The translation key (e.g., "section.home")
        **kwargs: Optional format arguments

    Returns:
        Translated string, or the key itself if not found

    Example:
        t("section.home")  # Returns "Inicio" in Spanish
        t("signin.message", section="Historial")  # With formatting
    """
    lang_strings = STRINGS.get(LANG, STRINGS.get("es", {}))
    text = lang_strings.get(key, key)

    if kwargs:
        try:
            text = text.format(**kwargs)
        except (KeyError, ValueError):
            pass

    return text


def set_language(lang: str):
    """Set the current language (es or en)."""
    global LANG
    if lang in STRINGS:
        LANG = lang
    else:
        LANG = "es"


def init_language(configured: Optional[str] = None, override: Optional[str] = None) -> str:
    """
    Pick the UI language at startup.

    Priority: command line override, then TVBROWSE_LANG, then the configured
    value. Nothing is persisted.
    """
    if override:
        set_language(override)
    elif os.environ.get("TVBROWSE_LANG"):
        set_language(os.environ["TVBROWSE_LANG"])
    elif configured:
        set_language(configured)
    return LANG


def get_language() -> str:
    """Get the current language code."""
    return LANG

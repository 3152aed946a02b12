from app.i18n.locale import (  # noqa: F401
    DEFAULT_LOCALE,
    SUPPORTED_LOCALES,
    Locale,
    locale_priority,
    normalize_locale,
    pick_localized,
)
from app.i18n.localize import localize_doc, localize_list  # noqa: F401

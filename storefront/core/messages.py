"""
Locale-keyed error messages for service envelopes.

Keys are response codes; lookups fall back to the configured default locale
and finally to the code itself.
"""
from typing import Optional

from storefront.core.config import settings

MESSAGES: dict[str, dict[str, str]] = {
    "en": {
        "OK": "Success",
        "ERROR_400": "Bad request",
        "ERROR_404": "Not found",
        "ERROR_206": "This user already has a shop",
        "ERROR_207": "An administrator can not own a shop",
        "ERROR_501": "Internal error, please try again later",
    },
    "ru": {
        "OK": "Успешно",
        "ERROR_400": "Неверный запрос",
        "ERROR_404": "Не найдено",
        "ERROR_206": "У этого пользователя уже есть магазин",
        "ERROR_207": "Администратор не может владеть магазином",
        "ERROR_501": "Внутренняя ошибка, повторите попытку позже",
    },
}


def get_message(code: str, locale: Optional[str] = None) -> str:
    """Resolve the message for `code` in `locale`, falling back to the default locale."""
    for candidate in (locale, settings.DEFAULT_LOCALE):
        if candidate and code in MESSAGES.get(candidate, {}):
            return MESSAGES[candidate][code]
    return code

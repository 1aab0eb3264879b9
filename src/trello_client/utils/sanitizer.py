# src/trello_client/utils/sanitizer.py
"""
Утилита для маскирования чувствительных данных в логах.

Trello передаёт credentials в query string (key, token), поэтому
маскирование URL здесь важнее, чем маскирование заголовков.
"""

import re
from typing import Any, Dict


# Список чувствительных полей (case-insensitive, точное совпадение)
SENSITIVE_KEYS = {
    'key', 'api_key', 'apikey',
    'token', 'access_token', 'api_token',
    'secret', 'api_secret', 'password',
    'authorization', 'cookie',
}

DEFAULT_MASK = "***REDACTED***"


def mask_sensitive_data(data: Any, mask: str = DEFAULT_MASK) -> Any:
    """
    Рекурсивно маскирует чувствительные данные в словарях, списках, строках.

    Args:
        data: Данные для маскирования (dict, list, str, или любой другой тип)
        mask: Строка-заменитель для sensitive данных

    Returns:
        Копия данных с замаскированными чувствительными полями

    Examples:
        >>> mask_sensitive_data({"name": "Todo", "token": "abc"})
        {"name": "Todo", "token": "***REDACTED***"}

        >>> mask_sensitive_data("https://api.trello.com/1/boards?key=k&token=t")
        "https://api.trello.com/1/boards?key=***REDACTED***&token=***REDACTED***"
    """
    # None, числа, булевы значения возвращаем как есть
    if data is None or isinstance(data, (bool, int, float)):
        return data

    if isinstance(data, str):
        return mask_url(data, mask)

    if isinstance(data, dict):
        return _mask_dict(data, mask)

    if isinstance(data, (list, tuple)):
        masked_items = [mask_sensitive_data(item, mask) for item in data]
        return type(data)(masked_items)

    return data


def _mask_dict(data: Dict[str, Any], mask: str) -> Dict[str, Any]:
    """Маскирует чувствительные поля в словаре."""
    result = {}

    for key, value in data.items():
        key_lower = key.lower() if isinstance(key, str) else str(key).lower()

        if key_lower in SENSITIVE_KEYS:
            result[key] = mask
        else:
            result[key] = mask_sensitive_data(value, mask)

    return result


def mask_url(url: str, mask: str = DEFAULT_MASK) -> str:
    """
    Маскирует чувствительные параметры в URL.

    Args:
        url: URL для маскирования
        mask: Строка-заменитель

    Returns:
        URL с замаскированными чувствительными параметрами

    Examples:
        >>> mask_url("https://api.trello.com/1/cards/1?key=k&token=t&fields=all")
        "https://api.trello.com/1/cards/1?key=***REDACTED***&token=***REDACTED***&fields=all"
    """
    for sensitive_key in SENSITIVE_KEYS:
        # Формат: ?key=value или &key=value
        pattern = re.compile(
            rf'([?&]{re.escape(sensitive_key)}=)([^&\s#]+)',
            re.IGNORECASE
        )
        url = pattern.sub(lambda m: m.group(1) + mask, url)

    return url


def mask_secret(value: str, visible_chars: int = 4) -> str:
    """
    Mask secret value for display.

    Shows first and last few characters, masks the middle.

    Example:
        >>> mask_secret("my-secret-api-key-12345", visible_chars=4)
        'my-s***2345'
        >>> mask_secret("abcd", visible_chars=2)
        '***'
    """
    if not value:
        return ""

    if len(value) <= (visible_chars * 2):
        return "***"

    return f"{value[:visible_chars]}***{value[-visible_chars:]}"

"""
Построение физического запроса к Trello API.

Включает:
- Credentials (key, token) в query string для любого метода
- Кодирование payload в query string или JSON body
"""

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Mapping, Optional, Tuple

import httpx

from .config import TrelloClientConfig

SUPPORTED_METHODS = frozenset({'GET', 'POST', 'PUT', 'DELETE'})

JSON_CONTENT_TYPE = 'application/json'


class EncodingMode(str, Enum):
    """Куда кладётся payload."""
    AS_BODY = "as-body"
    AS_QUERY = "as-query"


@dataclass(frozen=True)
class RequestSpec:
    """
    Логический запрос.

    Args:
        path: Путь endpoint'а (например '/boards/abc'), может содержать query
        method: GET, POST, PUT или DELETE
        payload: Данные запроса
        mode: EncodingMode
    """
    path: str
    method: str = 'GET'
    payload: Optional[Mapping[str, Any]] = None
    mode: EncodingMode = EncodingMode.AS_BODY

    def __post_init__(self):
        method = self.method.upper()
        if method not in SUPPORTED_METHODS:
            raise ValueError(
                f"Unsupported HTTP method: {self.method}. "
                f"Supported: {', '.join(sorted(SUPPORTED_METHODS))}"
            )
        if method != self.method:
            object.__setattr__(self, 'method', method)
        object.__setattr__(self, 'mode', EncodingMode(self.mode))


@dataclass(frozen=True)
class PreparedRequest:
    """Готовый к отправке запрос: один на все попытки логического вызова."""
    method: str
    url: httpx.URL
    headers: Mapping[str, str] = field(default_factory=dict)
    content: Optional[bytes] = None


def _to_param_value(value: Any) -> str:
    """True -> 'true', [1, 2] -> '1,2', остальное через str()."""
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, (list, tuple, set, frozenset)):
        return ','.join(_to_param_value(item) for item in value)
    return str(value)


def to_query_params(options: Mapping[str, Any]) -> List[Tuple[str, str]]:
    """
    Превратить payload в список query параметров.

    None значения пропускаются целиком, массивы склеиваются через запятую
    в один параметр.

    Examples:
        >>> to_query_params({'ids': [1, 2, 3], 'active': None, 'closed': False})
        [('ids', '1,2,3'), ('closed', 'false')]
    """
    params = []
    for key, value in options.items():
        if value is None:
            continue
        params.append((key, _to_param_value(value)))
    return params


def build_request(config: TrelloClientConfig, spec: RequestSpec) -> PreparedRequest:
    """
    Собрать PreparedRequest из конфига и логического запроса.

    Args:
        config: Эффективная конфигурация (base_url, credentials)
        spec: Логический запрос

    Returns:
        PreparedRequest

    Examples:
        >>> spec = RequestSpec('/cards', 'POST', {'idList': 'l1', 'name': 'Task'})
        >>> build_request(config, spec).content
        b'{"idList": "l1", "name": "Task"}'
    """
    url = httpx.URL(f"{config.base_url}{spec.path}")

    # Query из path сохраняется, credentials добавляются всегда
    params = list(url.params.multi_items())
    params.append(('key', config.api_key))
    params.append(('token', config.token))

    headers = {'Content-Type': JSON_CONTENT_TYPE}
    content = None

    if spec.payload:
        if spec.mode is EncodingMode.AS_QUERY:
            params.extend(to_query_params(spec.payload))
        elif spec.method != 'GET':
            # В body null сохраняется: так Trello очищает поле
            content = json.dumps(dict(spec.payload)).encode('utf-8')

    return PreparedRequest(
        method=spec.method,
        url=url.copy_with(params=httpx.QueryParams(params)),
        headers=headers,
        content=content,
    )

# src/trello_client/plugins/plugin.py

from abc import ABC
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..core.context import Attempt, RequestContext
    from ..core.exceptions import TrelloClientException
    from ..core.transport import DecodedResponse


class PluginPriority:
    """
    Константы приоритетов для наблюдателей.

    Наблюдатели с меньшим приоритетом вызываются раньше.
    """
    FIRST = 0
    NORMAL = 50
    LAST = 100      # Logging


class RequestObserver(ABC):
    """
    Базовый класс наблюдателя за запросами.

    Наблюдатель - чистый побочный канал: возвращаемые значения
    игнорируются, исключения перехватываются клиентом и превращаются в
    warnings. Все хуки по умолчанию ничего не делают, переопределяйте
    только нужные.

    Attributes:
        priority: Порядок вызова (меньше = раньше).
    """

    priority: int = PluginPriority.NORMAL

    def before_attempt(self, context: 'RequestContext', attempt: 'Attempt') -> None:
        """Вызывается перед каждой физической попыткой"""

    def after_attempt(
        self,
        context: 'RequestContext',
        attempt: 'Attempt',
        response: 'DecodedResponse'
    ) -> None:
        """Вызывается после попытки, получившей HTTP ответ (любой статус)"""

    def on_failure(
        self,
        context: 'RequestContext',
        attempt: 'Attempt',
        error: 'TrelloClientException'
    ) -> None:
        """Вызывается для каждой неудачной попытки с классифицированной ошибкой"""

    def on_retry(
        self,
        context: 'RequestContext',
        attempt: 'Attempt',
        error: 'TrelloClientException',
        delay_ms: float,
        retries_left: int
    ) -> None:
        """Вызывается перед backoff ожиданием; retries_left - остаток после этого повтора"""


class NullObserver(RequestObserver):
    """Наблюдатель, который ничего не делает."""

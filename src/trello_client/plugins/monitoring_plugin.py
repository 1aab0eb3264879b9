# src/trello_client/plugins/monitoring_plugin.py

import threading
from collections import defaultdict, deque
from typing import Any, Deque, Dict, List, Optional

from ..core.context import Attempt, RequestContext
from ..core.exceptions import TrelloClientException
from ..core.transport import DecodedResponse
from .plugin import PluginPriority, RequestObserver


class MonitoringPlugin(RequestObserver):
    """
    Наблюдатель для сбора метрик по попыткам.

    Отслеживает:
    - Количество физических попыток и повторов
    - Ошибки по видам (FailureKind)
    - Статистику по статус кодам
    - Длительность попыток (среднее, мин, макс)
    - Историю задержек backoff

    Example:
        >>> monitoring = MonitoringPlugin()
        >>> client = TrelloClient(api_key, token, observers=[monitoring])
        >>> await client.boards.get_boards()
        >>> monitoring.get_metrics()['total_attempts']
        1
    """

    priority = PluginPriority.NORMAL

    def __init__(self, history_size: int = 100):
        """
        Args:
            history_size: Максимальный размер истории попыток
        """
        self._lock = threading.Lock()
        self._history_size = history_size
        self.reset()

    def reset(self) -> None:
        """Сбросить все метрики."""
        with self._lock:
            self._total_attempts = 0
            self._total_retries = 0
            self._total_failures = 0
            # Длительности только агрегатами, память не растёт
            self._duration_count = 0
            self._duration_total = 0.0
            self._duration_min: Optional[float] = None
            self._duration_max: Optional[float] = None
            self._status_code_stats: Dict[int, int] = defaultdict(int)
            self._failure_stats: Dict[str, int] = defaultdict(int)
            self._backoff_delays: Deque[float] = deque(maxlen=self._history_size)
            self._history: Deque[Dict[str, Any]] = deque(maxlen=self._history_size)

    def before_attempt(self, context: RequestContext, attempt: Attempt) -> None:
        with self._lock:
            self._total_attempts += 1

    def after_attempt(
        self,
        context: RequestContext,
        attempt: Attempt,
        response: DecodedResponse
    ) -> None:
        with self._lock:
            self._record_duration(response.elapsed_ms)
            self._status_code_stats[response.status_code] += 1
            self._history.append({
                'request_id': context.request_id,
                'method': context.method,
                'path': context.path,
                'attempt': attempt.number,
                'status_code': response.status_code,
                'duration_ms': response.elapsed_ms,
            })

    def on_failure(
        self,
        context: RequestContext,
        attempt: Attempt,
        error: TrelloClientException
    ) -> None:
        kind = error.kind.value if error.kind else type(error).__name__
        with self._lock:
            self._total_failures += 1
            self._failure_stats[kind] += 1

    def on_retry(
        self,
        context: RequestContext,
        attempt: Attempt,
        error: TrelloClientException,
        delay_ms: float,
        retries_left: int
    ) -> None:
        with self._lock:
            self._total_retries += 1
            self._backoff_delays.append(delay_ms)

    def _record_duration(self, duration_ms: float) -> None:
        self._duration_count += 1
        self._duration_total += duration_ms
        if self._duration_min is None or duration_ms < self._duration_min:
            self._duration_min = duration_ms
        if self._duration_max is None or duration_ms > self._duration_max:
            self._duration_max = duration_ms

    def get_metrics(self) -> Dict[str, Any]:
        """
        Получить снимок метрик.

        Returns:
            Словарь с метриками
        """
        with self._lock:
            count = self._duration_count
            return {
                'total_attempts': self._total_attempts,
                'total_retries': self._total_retries,
                'total_failures': self._total_failures,
                'status_codes': dict(self._status_code_stats),
                'failures_by_kind': dict(self._failure_stats),
                'backoff_delays_ms': list(self._backoff_delays),
                'avg_duration_ms': self._duration_total / count if count else 0.0,
                'min_duration_ms': self._duration_min if count else 0.0,
                'max_duration_ms': self._duration_max if count else 0.0,
            }

    def get_history(self) -> List[Dict[str, Any]]:
        """Последние попытки, получившие HTTP ответ."""
        with self._lock:
            return list(self._history)

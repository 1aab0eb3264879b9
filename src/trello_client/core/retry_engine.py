"""
Retry engine для повторных попыток.

Включает:
- Фиксированный на старте вызова бюджет повторов
- Exponential backoff с потолком
- Решение о retry по классификации ошибки
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional

from .config import RetryConfig
from .error_handler import ErrorHandler

logger = logging.getLogger(__name__)

SleepFunc = Callable[[float], Awaitable[None]]


class RetryEngine:
    """
    Бюджет повторов одного логического вызова.

    Создаётся заново на каждый вызов, поэтому конкурентные вызовы
    ничего не делят.

    Examples:
        >>> engine = RetryEngine(RetryConfig(), retries=3)
        >>> if engine.should_retry(error):
        >>>     await engine.async_wait()
        >>>     engine.increment()
    """

    def __init__(
        self,
        config: RetryConfig,
        retries: int,
        sleep: Optional[SleepFunc] = None
    ):
        """
        Args:
            config: Параметры backoff
            retries: Бюджет повторов (фиксируется здесь)
            sleep: Корутина ожидания в секундах (по умолчанию asyncio.sleep)
        """
        if retries < 0:
            raise ValueError("retries must be non-negative")
        self.config = config
        self._total_retries = retries
        self._retries_left = retries
        self._sleep = sleep or asyncio.sleep

    def should_retry(self, error: Exception) -> bool:
        """
        Решить нужен ли retry.

        Фатальные ошибки не ретраятся независимо от остатка бюджета.
        """
        if not ErrorHandler.is_retryable_error(error):
            return False
        return self._retries_left > 0

    def get_wait_time_ms(self) -> float:
        """
        Задержка перед следующей попыткой.

        min(base * factor^(total - left), max): 1000, 2000, 4000, 5000...
        """
        exponent = self._total_retries - self._retries_left
        wait = self.config.backoff_base_ms * (self.config.backoff_factor ** exponent)
        return min(wait, self.config.backoff_max_ms)

    async def async_wait(self) -> float:
        """
        Асинхронное ожидание перед retry.

        Returns:
            Фактически запрошенная задержка (мс)
        """
        wait_ms = self.get_wait_time_ms()
        logger.debug("Backing off for %.0fms (%d retries left)", wait_ms, self._retries_left)
        await self._sleep(wait_ms / 1000)
        return wait_ms

    def increment(self):
        """Списать один повтор из бюджета."""
        if self._retries_left <= 0:
            raise RuntimeError("retry budget already exhausted")
        self._retries_left -= 1

    @property
    def retries_left(self) -> int:
        """Остаток бюджета."""
        return self._retries_left

    @property
    def total_retries(self) -> int:
        """Бюджет на старте вызова."""
        return self._total_retries

    @property
    def attempt(self) -> int:
        """Номер текущей попытки (1-based)."""
        return self._total_retries - self._retries_left + 1

"""
Retry, Logging and Monitoring Examples

Shows how failures surface and how observers watch every attempt.
"""

import asyncio

from trello_client import (
    ClientError,
    ExhaustedRetriesError,
    LoggingConfig,
    MonitoringPlugin,
    TrelloClient,
)


async def handle_errors(trello: TrelloClient):
    """4xx fails immediately, retryable failures end in ExhaustedRetriesError."""
    print("\n=== Error Handling ===")

    try:
        await trello.cards.get_card("does-not-exist")
    except ClientError as e:
        print(f"Client error, not retried: {e.status_code}")
    except ExhaustedRetriesError as e:
        print(f"Gave up after {e.retries} retries: {e.last_error}")


async def main():
    monitoring = MonitoringPlugin()

    async with TrelloClient(
        retries=2,
        timeout=10000,
        verbose_logging=True,
        logging=LoggingConfig.create(level="DEBUG", format="colored"),
        observers=[monitoring],
    ) as trello:
        await trello.boards.get_boards(fields="id")
        await handle_errors(trello)

    print("\n=== Metrics ===")
    for name, value in monitoring.get_metrics().items():
        print(f"{name}: {value}")


if __name__ == "__main__":
    asyncio.run(main())

"""
Basic Trello Client Usage Examples

Demonstrates boards, lists and cards through the domain clients.
Requires TRELLO_API_KEY and TRELLO_TOKEN in the environment.
"""

import asyncio

from trello_client import TrelloClient


async def list_boards(trello: TrelloClient):
    """Open boards of the current member."""
    print("\n=== Boards ===")

    boards = await trello.boards.get_boards(fields="id,name")
    for board in boards:
        print(f"{board['id']}: {board['name']}")
    return boards


async def create_card(trello: TrelloClient, board_id: str):
    """Create a card in the first list of a board."""
    print("\n=== Create Card ===")

    lists = await trello.lists.get_lists(board_id)
    card = await trello.cards.create_card(
        idList=lists[0]["id"],
        name="Created from trello-client-core",
        desc="Payload is sent as query parameters",
    )
    print(f"Created: {card['shortUrl']}")
    return card


async def comment_and_archive(trello: TrelloClient, card_id: str):
    """Add a comment, then archive the card."""
    print("\n=== Comment & Archive ===")

    await trello.card_features.add_comment(card_id, "Done")
    card = await trello.cards.archive_card(card_id)
    print(f"Closed: {card['closed']}")


async def raw_request(trello: TrelloClient):
    """Any endpoint through the shared executor."""
    print("\n=== Raw Request ===")

    me = await trello.request("/members/me", payload={"fields": "username"}, as_query=True)
    print(f"Logged in as: {me['username']}")


async def main():
    async with TrelloClient(retries=3) as trello:
        await raw_request(trello)
        boards = await list_boards(trello)
        if boards:
            card = await create_card(trello, boards[0]["id"])
            await comment_and_archive(trello, card["id"])


if __name__ == "__main__":
    print("=" * 50)
    print("Trello Client - Basic Usage Examples")
    print("=" * 50)

    try:
        asyncio.run(main())
    except Exception as e:
        print(f"\nError: {type(e).__name__}: {e}")

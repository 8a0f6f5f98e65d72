#!/usr/bin/env python
"""Ways to consume a paginated listing.

Every list method returns an ItemStream. Pages are fetched lazily, one at
a time, as the items are consumed:
1. async for: process items as they arrive, stop whenever you like
2. collect(): load everything into a list
3. subscribe(): push items to callbacks, cancel part way through

Run: GITHUB_TOKEN=your_token python examples/pagination.py
"""

import asyncio

from octostream import ApiOptions, GitHubClient
from octostream.exceptions import GitHubError
from octostream.models import PullRequestRequest


async def demo_async_for(client: GitHubClient) -> None:
    """Stop early; later pages are never requested."""
    print("\n1️⃣  Lazy iteration")
    print("-" * 40)

    stream = client.pulls.get_all_for_repository(
        "python", "cpython", PullRequestRequest(state="all"), options=ApiOptions(page_size=10)
    )
    async for pull in stream:
        print(f"  #{pull.number} {pull.title[:50]}")
        if pull.number % 7 == 0:
            print("  ✓ Stopped early, no further pages fetched")
            break


async def demo_collect(client: GitHubClient) -> None:
    """Bound the listing with page_count, then collect it."""
    print("\n2️⃣  Collect with a page window")
    print("-" * 40)

    options = ApiOptions(start_page=2, page_size=5, page_count=2)
    users = await client.collaborators.get_all("octocat", "Hello-World", options=options).collect()
    print(f"  ✓ {len(users)} collaborator(s) from pages 2 and 3")


async def demo_subscribe(client: GitHubClient) -> None:
    """Cancel a subscription after a handful of items."""
    print("\n3️⃣  Subscribe and cancel")
    print("-" * 40)

    received = []

    def on_next(milestone) -> None:
        received.append(milestone)
        print(f"  → {milestone.title}")
        if len(received) == 3:
            subscription.cancel()

    subscription = client.milestones.get_all_for_repository("microsoft", "vscode").subscribe(
        on_next,
        on_error=lambda error: print(f"  ✗ {error}"),
        on_completed=lambda: print("  ✓ Completed"),
    )
    await subscription
    print(f"  ✓ Received {len(received)} item(s), cancelled: {subscription.cancelled}")


async def main() -> None:
    print("=" * 50)
    print("  Pagination Examples")
    print("=" * 50)

    async with GitHubClient() as client:
        try:
            await demo_async_for(client)
            await demo_collect(client)
            await demo_subscribe(client)
        except GitHubError as e:
            print(f"\n  ✗ {e.message}")

    print("\n" + "=" * 50)
    print("  Done!")
    print("=" * 50)


if __name__ == "__main__":
    asyncio.run(main())

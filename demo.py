"""
Dashboard Demo Script

Scripted walkthrough against the live API:
1. Load the users
2. Search for "bret"
3. Clear the search and sort by company
4. Select two users back to back and show the posts of the later one

Run this to see the rendered panels without the interactive loop.
"""

import asyncio
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / "src"))

from users_dashboard.api import FetchGateway
from users_dashboard.dashboard import Dashboard


async def demonstrate_dashboard() -> int:
    print("=" * 60)
    print("Users Dashboard Demo")
    print("=" * 60)

    async with FetchGateway() as gateway:
        dashboard = Dashboard(gateway)

        print("\n[1/4] Loading users...")
        if not await dashboard.start():
            print(dashboard.render())
            return 1
        print(f"      Loaded {len(dashboard.users.users)} users")

        print("\n[2/4] Searching for 'bret'...")
        dashboard.search("bret")
        for user in dashboard.users.visible_users:
            print(f"      {user.id}: {user.name} <{user.email}>")

        print("\n[3/4] Sorting all users by company...")
        dashboard.search("")
        dashboard.sort("company.name")
        for user in dashboard.users.visible_users:
            company = user.company.name if user.company else "-"
            print(f"      {company:<25} {user.name}")

        print("\n[4/4] Selecting user 1, then user 2 before 1 finishes...")
        first = dashboard.select(1)
        second = dashboard.select(2)
        await asyncio.gather(first, second)

        print()
        print(dashboard.render())

    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(demonstrate_dashboard()))

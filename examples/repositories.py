"""Example resource wrapper built on ApiRequester."""

import asyncio
import os

from gitea import ApiRequester, Client, RequestScope

GITEA_URL = os.getenv("GITEA_URL", "https://gitea.com")
GITEA_TOKEN = os.getenv("GITEA_TOKEN", "")


class Repositories(ApiRequester):
    """Wraps the /repos routes."""

    async def get_repo(self, owner: str, name: str):
        response = await self.get(f"repos/{owner}/{name}")
        return await response.json()

    async def search(self, query: str, limit: int = 10):
        response = await self.get("repos/search", {"q": query, "limit": limit})
        return (await response.json())["data"]

    async def update_description(self, owner: str, name: str, description: str):
        response = await self.put(f"repos/{owner}/{name}", {"description": description})
        return await response.json()


def use_sudo(requester: ApiRequester) -> None:
    """Configure hook: act as another user on every write."""
    for scope in (RequestScope.POST, RequestScope.PUT, RequestScope.DELETE):
        requester.extend_default_headers(scope, {"Sudo": "bot"})


async def main():
    async with Client(GITEA_URL) as client:
        repos = Repositories(client, GITEA_TOKEN)
        for repo in await repos.search("gitea", limit=5):
            print(repo["full_name"])

        admin_repos = Repositories(client, GITEA_TOKEN, configure=use_sudo)
        print(admin_repos.get_default_headers_for_type("put"))


if __name__ == "__main__":
    asyncio.run(main())

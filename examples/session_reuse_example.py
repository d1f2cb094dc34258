import asyncio

from aiohttp import ClientSession, TCPConnector

from gitea import ApiRequester, Client


class Users(ApiRequester):
    async def current(self):
        response = await self.get("user")
        return await response.json()


class Issues(ApiRequester):
    async def open_issue(self, owner, repo, title, body=""):
        response = await self.post(
            f"repos/{owner}/{repo}/issues", {"title": title, "body": body}
        )
        return await response.json()


async def main():
    # One connection pool shared by every resource wrapper
    shared_session = ClientSession(connector=TCPConnector(limit=20, ttl_dns_cache=300))

    async with shared_session:
        async with Client("https://git.example.com", session=shared_session) as client:
            token = "0123456789abcdef"
            users = Users(client, token)
            issues = Issues(client, token)

            me = await users.current()
            print(f"Logged in as {me['login']}")

            issue = await issues.open_issue(me["login"], "sandbox", "Hello")
            print(f"Opened issue #{issue['number']}")

        # The client leaves an injected session open
        assert not shared_session.closed


asyncio.run(main())

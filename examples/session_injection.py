"""Example showing session injection for Home Assistant integration."""

import asyncio

from aiohttp import ClientSession

from pyhiveomnia import HiveClient


async def main() -> None:
    """Demonstrate session injection pattern for HA integration."""
    async with ClientSession() as session:
        print("Using application-managed aiohttp session")

        client = HiveClient(
            username="your@email.com",
            password="your_password",
            session=session,
        )

        async with client:
            devices = await client.get_devices()
            print(f"Found {len(devices.all())} device(s) using injected session")

            for device in devices.all():
                print(f"  - {device.name} ({device.type}, {device.id})")

        # Session remains open after client exits
        print("\nClient closed, but session still available for other requests")


async def explicit_login() -> None:
    """Example logging in and out without the context manager."""
    app_session = ClientSession()  # In HA: async_get_clientsession(hass)

    try:
        client = HiveClient(session=app_session)
        await client.login("your@email.com", "your_password")
        try:
            events = await client.api.get_events(limit=10)
            print(f"Latest events: {len(events)}")
        finally:
            await client.logout()

    finally:
        await app_session.close()


if __name__ == "__main__":
    asyncio.run(main())
    asyncio.run(explicit_login())

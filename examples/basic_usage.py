"""Basic usage example for pyhiveomnia library."""

import asyncio

from pyhiveomnia import HiveClient


async def main() -> None:
    """Demonstrate basic usage of pyhiveomnia."""
    # Log in with credentials
    async with HiveClient(
        username="your@email.com",
        password="your_password",
        client_name="pyhiveomnia example",
    ) as client:
        print("Connected to Hive API")

        devices = await client.get_devices()
        print(f"Found {len(devices.all())} device(s)")

        for hub in devices.hubs:
            print(f"\nHub: {hub.name}")
            print(f"  Node ID: {hub.id}")
            print(f"  IP address: {hub.ethernet_info.ip_address}")
            print(f"  Server: {hub.status_info.server}")

        for display in devices.thermostat_uis:
            print(f"\nThermostat display: {display.name}")
            print(f"  Battery: {display.battery.battery_level}%")
            print(f"  Signal: {display.signal_strength}")

        for thermostat in devices.thermostats:
            print(f"\nThermostat: {thermostat.name}")
            print(f"  Current temperature: {thermostat.current_temperature}")
            print(f"  Target temperature: {thermostat.target_temperature}")
            print(f"  Mode: {thermostat.heating_status.mode}")
            print(f"  Heating: {thermostat.heating_status.is_on}")

            boost = thermostat.boost
            if boost:
                print(f"  Boosted to {boost.target_temperature} until {boost.end}")

            schedule = thermostat.heating_schedule.schedule or {}
            for day, setpoints in schedule.items():
                print(f"  {day}: " + ", ".join(f"{time} {value}" for time, value in setpoints))

            print("\nSetting target temperature to 20...")
            target = await thermostat.set_target_temperature(20)
            print(f"Target temperature now: {target}")

            history = await thermostat.get_history(unit="MINUTES", interval=30)
            print(f"Temperature samples in the last day: {len(history['data'])}")


if __name__ == "__main__":
    asyncio.run(main())

import asyncio
from datetime import datetime
from typing import Optional, Set

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt

from frontend.controller import InteractionController
from frontend.geolocation import IpGeolocator
from frontend.lookup_client import LookupClient
from frontend.models import Coordinate, LookupResult

console = Console()


def _clock(moment: Optional[datetime]) -> str:
    return moment.strftime("%H:%M:%S %Z") if moment else "--"


def render(controller: InteractionController) -> None:
    """Print the marker popup for the current coordinate."""
    times = controller.sun_times()
    text = (
        f"[#FFB487]sunrise: {_clock(times.sunrise)}[/]\n"
        f"[#415777]sunset: {_clock(times.sunset)}[/]\n\n"
        "your location has similar times to:\n"
        f"{controller.current_result.text}"
    )
    console.print(
        Panel(text, title=controller.current_coordinate.describe(), expand=False)
    )


def _parse_coordinate(raw: str) -> Optional[Coordinate]:
    try:
        lat, lon = (float(part) for part in raw.split(","))
    except ValueError:
        return None
    return Coordinate(lat, lon)


async def run(controller: InteractionController) -> None:
    """Read marker moves from the prompt while lookups complete in the background."""
    pending: Set[asyncio.Task] = set()

    def spawn(coro) -> None:
        task = asyncio.create_task(coro)
        pending.add(task)
        task.add_done_callback(pending.discard)

    def on_result(result: LookupResult) -> None:
        render(controller)

    controller.subscribe(on_result)
    spawn(controller.start())

    while True:
        raw = await asyncio.to_thread(
            Prompt.ask, "Move the marker to [bold cyan]lat, lon[/] (q to quit)"
        )
        if raw.strip().lower() in ("q", "quit", "exit"):
            break
        coordinate = _parse_coordinate(raw)
        if coordinate is None:
            console.print("Invalid input. Please try again.", style="bold red")
            continue
        spawn(controller.move_marker(coordinate.lat, coordinate.lon))

    for task in pending:
        task.cancel()
    await asyncio.gather(*pending, return_exceptions=True)


async def _main() -> None:
    client = LookupClient()
    try:
        await run(InteractionController(client, geolocator=IpGeolocator()))
    finally:
        await client.aclose()


def main() -> None:
    """Main function."""
    console.print(Panel("dawn2dusk", style="bold green", expand=False))
    try:
        asyncio.run(_main())
    except KeyboardInterrupt:
        console.print("\nStopped")


if __name__ == "__main__":
    main()

#!/usr/bin/env python3
"""
Home Assistant Lights Control

List every light with its current state and toggle one by number. The list
is fetched again after each toggle, so it always shows the hub's state.

Usage:
    ha-lights
    ha-lights on
    ha-lights off --no-color
    ha-lights --help
"""

import logging
import time

import click

from ha_control.cli import configure_logging, debug_option, run_guarded
from ha_control.client import HomeAssistantClient
from ha_control.config import SETTLE_DELAY, load_api_key
from ha_control.entities import LightRow, build_light_rows, domain_entities, format_light_table
from ha_control.errors import ExitCode

logger = logging.getLogger(__name__)


def parse_selection(text: str, count: int) -> int | None:
    """1-based row number from user input, or None if it isn't one"""
    text = text.strip()
    if not (text.isascii() and text.isdigit()):
        return None
    selection = int(text)
    if 0 < selection <= count:
        return selection
    return None


class LightsSession:
    """Interactive list/toggle loop over the hub's lights"""

    def __init__(
        self,
        client: HomeAssistantClient,
        state_filter: str | None = None,
        styled: bool = True,
        settle_delay: float = SETTLE_DELAY,
    ) -> None:
        self.client = client
        self.state_filter = state_filter.lower() if state_filter else None
        self.styled = styled
        self.settle_delay = settle_delay

    def fetch_light_ids(self) -> list[str]:
        return domain_entities(self.client.list_entities(), "light")

    def fetch_rows(self, light_ids: list[str]) -> list[LightRow]:
        states = [self.client.get_state(entity_id) for entity_id in light_ids]
        return build_light_rows(states, self.state_filter)

    def render(self, rows: list[LightRow]) -> None:
        click.clear()
        title = "💡 Home Assistant Lights Control"
        if self.state_filter:
            title += f" (lights that are {self.state_filter})"
        click.echo(title)
        click.echo("=" * 40)
        click.echo("")
        click.echo(format_light_table(rows, styled=self.styled))
        click.echo("")
        click.echo("Enter the number of the light to toggle or press Enter to exit:")

    def read_input(self) -> str:
        """One line from the user; end of input counts as a blank line"""
        try:
            return click.prompt("", default="", show_default=False, prompt_suffix="")
        except click.Abort:
            return ""

    def toggle(self, row: LightRow) -> None:
        logger.debug("Toggling %s", row.entity_id)
        self.client.call_service("light", "toggle", {"entity_id": row.entity_id})
        click.echo(f"🔄 Toggling {row.name}...")
        time.sleep(self.settle_delay)

    def run(self) -> ExitCode:
        while True:
            light_ids = self.fetch_light_ids()
            if not light_ids:
                click.echo("No light entities found in Home Assistant")
                return ExitCode.OK

            rows = self.fetch_rows(light_ids)
            if not rows:
                click.echo(f"No lights are currently {self.state_filter}")
                return ExitCode.OK

            self.render(rows)
            text = self.read_input()
            if not text.strip():
                click.echo("👋 Goodbye!")
                return ExitCode.OK

            selection = parse_selection(text, len(rows))
            if selection is None:
                click.echo(f"⚠️  Invalid selection: enter a number from 1 to {len(rows)}.")
                click.pause("Press any key to continue...")
                continue

            self.toggle(rows[selection - 1])


@click.command()
@click.argument(
    "state_filter",
    required=False,
    metavar="[on|off]",
    type=click.Choice(["on", "off"], case_sensitive=False),
)
@click.option(
    "--no-color",
    is_flag=True,
    help="Print ON/OFF without terminal colors",
)
@debug_option
def main(state_filter: str | None, no_color: bool, debug: bool) -> None:
    """
    List Home Assistant lights and toggle them by number.

    Pass 'on' or 'off' to only list lights in that state. Press Enter on an
    empty line to exit.

    Examples:

        ha-lights

        ha-lights on

        ha-lights off --no-color
    """
    configure_logging(debug)

    def body() -> ExitCode:
        api_key = load_api_key()
        with HomeAssistantClient(api_key) as client:
            session = LightsSession(client, state_filter, styled=not no_color, settle_delay=SETTLE_DELAY)
            return session.run()

    run_guarded(body)


if __name__ == "__main__":
    main()

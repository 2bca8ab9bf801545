#!/usr/bin/env python3
"""
Home Assistant Thermostat Status

Show mode, current/target temperature and humidity for every climate entity.

Usage:
    ha-thermostat
    ha-thermostat --fahrenheit-only
    ha-thermostat --json
    ha-thermostat --help
"""

import json

import click

from ha_control.cli import configure_logging, debug_option, run_guarded
from ha_control.client import HomeAssistantClient
from ha_control.config import load_api_key
from ha_control.entities import build_thermostat_report, domain_entities, format_thermostat_report
from ha_control.errors import ExitCode


@click.command()
@click.option(
    "--fahrenheit-only",
    is_flag=True,
    help="Show temperatures in °F only instead of °F / °C",
)
@click.option(
    "--json",
    "output_json",
    is_flag=True,
    help="Output as JSON instead of human-readable format",
)
@debug_option
def main(fahrenheit_only: bool, output_json: bool, debug: bool) -> None:
    """
    Show the status of every Home Assistant thermostat.

    Examples:

        ha-thermostat

        ha-thermostat --fahrenheit-only

        ha-thermostat --json
    """
    configure_logging(debug)

    def progress(message: str) -> None:
        if not output_json:
            click.echo(message)

    def body() -> ExitCode:
        api_key = load_api_key()

        progress("🔌 Connecting to Home Assistant...")
        with HomeAssistantClient(api_key) as client:
            progress("🔍 Searching for thermostat entities...")
            thermostat_ids = domain_entities(client.list_entities(), "climate")

            if not thermostat_ids:
                if output_json:
                    click.echo(json.dumps([], indent=2))
                else:
                    click.echo("No thermostat entities found in Home Assistant")
                return ExitCode.OK

            progress(f"Found {len(thermostat_ids)} thermostat(s)")
            progress("")

            reports = [build_thermostat_report(client.get_state(entity_id)) for entity_id in thermostat_ids]

        if output_json:
            click.echo(json.dumps([report.as_dict() for report in reports], indent=2, ensure_ascii=False))
        else:
            for report in reports:
                click.echo(format_thermostat_report(report, dual_units=not fahrenheit_only))
        return ExitCode.OK

    run_guarded(body)


if __name__ == "__main__":
    main()

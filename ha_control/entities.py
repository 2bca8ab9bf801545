"""
Entity state model and the text formatting shared by both commands.

Attribute values from the hub are loosely typed (strings, numbers, lists,
whatever an integration puts there). Reading them goes through
``attribute_text`` and ``attribute_number``, which return None instead of
raising when a value is absent or has the wrong shape. Callers fall back to
a derived name or a "Not available" / "Unknown" sentinel.
"""

import math
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import asdict, dataclass, field
from typing import Any

import click

NOT_AVAILABLE = "Not available"
UNKNOWN_MODE = "Unknown"

MODE_LABELS = {
    "heat": "Heating",
    "cool": "Cooling (AC)",
    "heat_cool": "Auto (Heat/Cool)",
    "auto": "Auto",
    "dry": "Dry",
    "fan_only": "Fan Only",
    "off": "Off",
}


@dataclass(frozen=True)
class EntityState:
    entity_id: str
    state: str
    attributes: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_api(cls, payload: Mapping[str, Any], entity_id: str) -> "EntityState":
        """Build from a /api/states/<id> response body"""
        state = payload.get("state")
        attributes = payload.get("attributes")
        return cls(
            entity_id=str(payload.get("entity_id") or entity_id),
            state="" if state is None else str(state),
            attributes=attributes if isinstance(attributes, Mapping) else {},
        )


def attribute_text(attributes: Mapping[str, Any], key: str) -> str | None:
    """Attribute as a non-empty string, or None"""
    value = attributes.get(key)
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        return None
    text = str(value).strip()
    return text or None


def attribute_number(attributes: Mapping[str, Any], key: str) -> float | None:
    """Attribute as a finite float, or None. Numeric strings are accepted."""
    value = attributes.get(key)
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def domain_entities(entity_ids: Iterable[str], domain: str) -> list[str]:
    """Keep ids in the given domain, preserving hub order"""
    prefix = f"{domain}."
    return [entity_id for entity_id in entity_ids if entity_id.startswith(prefix)]


def _title_case(text: str) -> str:
    return " ".join(word[:1].upper() + word[1:].lower() for word in text.split(" "))


def fallback_name(entity_id: str) -> str:
    """light.living_room -> Living Room"""
    _, _, object_id = entity_id.partition(".")
    return _title_case((object_id or entity_id).replace("_", " "))


def display_name(entity: EntityState) -> str:
    return attribute_text(entity.attributes, "friendly_name") or fallback_name(entity.entity_id)


def light_status(state: str) -> str:
    return "ON" if state.strip().lower() == "on" else "OFF"


def format_mode(mode: str | None) -> str:
    """Human label for an HVAC mode"""
    if not mode or not mode.strip() or mode.strip().lower() == "unknown":
        return UNKNOWN_MODE
    normalized = mode.strip().lower()
    if normalized in MODE_LABELS:
        return MODE_LABELS[normalized]
    return _title_case(normalized.replace("_", " "))


def fahrenheit_to_celsius(fahrenheit: float) -> float:
    return (fahrenheit - 32) * 5 / 9


def format_temperature(value: float | None, dual_units: bool = True) -> str:
    if value is None:
        return NOT_AVAILABLE
    if dual_units:
        return f"{value:.1f}°F / {fahrenheit_to_celsius(value):.1f}°C"
    return f"{value:.1f}°F"


def format_humidity(value: float | None) -> str:
    if value is None:
        return NOT_AVAILABLE
    return f"{value:.1f}%"


# Lights


@dataclass(frozen=True)
class LightRow:
    index: int
    entity_id: str
    name: str
    status: str


def build_light_rows(states: Iterable[EntityState], state_filter: str | None = None) -> list[LightRow]:
    """Number lights from 1, dropping those that don't match state_filter ("on"/"off")"""
    wanted = state_filter.upper() if state_filter else None
    rows: list[LightRow] = []
    for entity in states:
        status = light_status(entity.state)
        if wanted and status != wanted:
            continue
        rows.append(LightRow(len(rows) + 1, entity.entity_id, display_name(entity), status))
    return rows


def format_light_table(rows: Sequence[LightRow], styled: bool = False) -> str:
    """Aligned "N. Name  STATUS" lines; output depends only on rows and styled"""
    if not rows:
        return ""

    name_width = max(len(row.name) for row in rows)
    number_width = len(str(len(rows)))

    lines: list[str] = []
    for row in rows:
        status = row.status
        if styled:
            status = click.style(status, fg="green" if status == "ON" else "red", bold=True)
        lines.append(f"{row.index:>{number_width}}. {row.name:<{name_width}}  {status}")
    return "\n".join(lines)


# Thermostats


@dataclass(frozen=True)
class ThermostatReport:
    entity_id: str
    name: str
    mode: str
    status: str
    current_temperature: float | None
    target_temperature: float | None
    current_humidity: float | None

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


def build_thermostat_report(entity: EntityState) -> ThermostatReport:
    attributes = entity.attributes
    return ThermostatReport(
        entity_id=entity.entity_id,
        name=display_name(entity),
        mode=entity.state,
        status=format_mode(entity.state),
        current_temperature=attribute_number(attributes, "current_temperature"),
        target_temperature=attribute_number(attributes, "temperature"),
        current_humidity=attribute_number(attributes, "current_humidity"),
    )


def format_thermostat_report(report: ThermostatReport, dual_units: bool = True) -> str:
    """Format one thermostat for human-readable output"""
    lines: list[str] = []

    lines.append(f"🌡️  Thermostat: {report.name}")
    lines.append("-" * 40)
    lines.append(f"Status: {report.status}")
    lines.append(f"Current Temperature: {format_temperature(report.current_temperature, dual_units)}")
    lines.append(f"Target Temperature: {format_temperature(report.target_temperature, dual_units)}")
    lines.append(f"Current Humidity: {format_humidity(report.current_humidity)}")
    lines.append("")

    return "\n".join(lines)

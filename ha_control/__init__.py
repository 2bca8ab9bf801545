"""
Home Assistant lights and thermostat console tools.

Commands:
    ha-lights       List lights and toggle them interactively
    ha-thermostat   Show thermostat mode, temperatures and humidity
"""

__version__ = "1.0.0"

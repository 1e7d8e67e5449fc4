# arena/utils/units.py
"""Unit conversion and display helpers.

Internal units:
- Cell size: radius in world units
- Mass: size * size / 100
- Time: seconds (uptime), milliseconds (tick timing)
- Memory: bytes

Display units:
- Mass: plain number, no trailing ".0" for whole values
- Time: seconds, minutes, hours, days (coarsest two units)
- Memory: MiB
"""

import math

MIB = 1048576


# Mass conversions
def size_to_mass(size):
    """Convert a cell radius to mass."""
    return size * size / 100


def mass_to_size(mass):
    """Convert mass to a cell radius."""
    return math.sqrt(mass * 100)


def format_number(value):
    """Format a number the way the console prints it.

    Whole floats drop their fractional part so that ``300.0`` reads as
    ``300``; everything else goes through ``str``.
    """
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


# Time conversions
def pretty_print_time(seconds):
    """Format an uptime in the two coarsest units that apply.

    Each unit is truncated, not rounded. Once days are shown the minutes
    are dropped.

    Args:
        seconds (float): Duration in seconds

    Returns:
        str: e.g. "45 seconds", "2 minutes", "2 hours 3 minutes", "1 days 1 hours"
    """
    seconds = max(0, int(seconds))
    minutes = seconds // 60
    if minutes < 1:
        return f"{seconds} seconds"
    hours = minutes // 60
    if hours < 1:
        return f"{minutes} minutes"
    days = hours // 24
    if days < 1:
        return f"{hours} hours {minutes % 60} minutes"
    return f"{days} days {hours % 24} hours"


# Memory conversions
def bytes_to_mib(value):
    """Convert bytes to mebibytes."""
    return value / MIB


def format_mib(value, precision=1):
    """Format a byte count as MiB."""
    return f"{bytes_to_mib(value):.{precision}f} MiB"


def round_half_up(value):
    """Round to the nearest integer, halves rounding up."""
    return math.floor(value + 0.5)

"""
MAYDAY RELAY message composition.

Renders the Spanish and English broadcast texts from extracted fields. The
protocol wording is fixed radiotelephony phrasing and is reproduced verbatim;
``(x3)`` is a spoken-delivery cue, not text to repeat.
"""

from typing import Optional

from sosgen.models import ExtractedData, GeneratedMessages

# Blank line for the operator to fill in by hand
BLANK = "_" * 20

# Relay sequence numbering is not tracked; every message is information nº 1
INFO_NUMBER = "1"

SPANISH_TEMPLATE = """MAYDAY RELAY (x3)
AQUI {station} (x3)
MAYDAY
INFORMACION Nº {info_number} A {utc_time} UTC.

{description}

SE REQUIERE A TODOS LOS BARCOS EN LA ZONA, EXTREMAR LA VIGILANCIA, ASISTIR SI ES NECESARIO, E INFORMAR A SALVAMENTO MARITIMO {mrcc} O ESTACION RADIO COSTERA MAS PROXIMA.
AQUI {station} A {utc_time} UTC."""

ENGLISH_TEMPLATE = """MAYDAY RELAY (x3)
THIS IS {station} (x3)
MAYDAY
INFORMATION Nº {info_number} AT {utc_time} UTC.

{description}

ALL VESSELS IN THE AREA, ARE REQUESTED TO KEEP A SHARP LOOK OUT, ASSIST IF NECESSARY AND MAKE FURTHER REPORTS TO MRCC {mrcc} OR NEAREST COASTAL RADIO STATION.
THIS IS {station} AT {utc_time} UTC."""


def full_station_name(station_name: Optional[str]) -> str:
    """Station name with a " Radio" suffix unless it already has one."""
    name = (station_name or "").strip()
    if not name:
        return BLANK
    if "radio" in name.lower():
        return name
    return f"{name} Radio"


def compose(fields: ExtractedData) -> GeneratedMessages:
    """Render both broadcast texts. Missing optional fields become blanks."""
    values = {
        "station": full_station_name(fields.station_name),
        "mrcc": (fields.mrcc or "").strip() or BLANK,
        # Transmission time is always filled in by the operator
        "utc_time": BLANK,
        "info_number": INFO_NUMBER,
    }

    return GeneratedMessages(
        es=SPANISH_TEMPLATE.format(description=fields.spanish_description or "", **values),
        en=ENGLISH_TEMPLATE.format(description=fields.english_description or "", **values),
    )

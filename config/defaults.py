from config.schema import (
    EngineConfig,
    ShiftConfig,
    StoreConfig,
)
from models.group import Shift
from models.weekday import Weekday


def default_shifts() -> list[ShiftConfig]:
    """Standard-Schichten einer Schule mit Vor- und Nachmittagsbetrieb.

    Vormittag   08:00 - 13:00
    Nachmittag  13:00 - 18:00

    Die Fenster berühren sich nur am Rand (13:00) und überschneiden sich
    daher nicht.
    """
    return [
        ShiftConfig(shift=Shift.MORNING, display_name="Vormittag",
                    start_time="08:00", end_time="13:00"),
        ShiftConfig(shift=Shift.AFTERNOON, display_name="Nachmittag",
                    start_time="13:00", end_time="18:00"),
    ]


def default_engine_config() -> EngineConfig:
    """Vollständige Default-Konfiguration (Mo–Sa, JSON-Speicher unter output/)."""
    return EngineConfig(
        school_name="Colegio Modelo",
        shifts=default_shifts(),
        days=list(Weekday),
        store=StoreConfig(),
        log_level="INFO",
    )

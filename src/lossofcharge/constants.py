# src/lossofcharge/constants.py
import logging

logger = logging.getLogger(__name__)

# --- Default Bench Setup ---

#: Resistance under test. 5 MOhm is the "high" resistance of the classic bench.
DEFAULT_RESISTANCE_OHM: float = 5.0e6

#: Capacitor charged by the source and discharged through the resistor.
DEFAULT_CAPACITANCE_FARAD: float = 10.0e-6

#: Source voltage the capacitor is charged to.
DEFAULT_INITIAL_VOLTAGE_V: float = 10.0

# --- Data Logging ---

#: Cadence of the data logger, in simulated seconds, independent of tick rate.
SAMPLE_INTERVAL_S: float = 0.5

#: Voltages at or below this floor are left out of the ln(V) series and the
#: exported table.
LN_VOLTAGE_FLOOR_V: float = 0.01

#: Decimal places for every exported CSV field.
EXPORT_DECIMALS: int = 4

EXPORT_FILENAME: str = "experiment_data.csv"

logger.debug("Defined bench defaults and data logging constants.")

# src/lossofcharge/simulation/execution.py
"""
Public entry points for starting sessions from an experiment definition.

`start_session` prepares a session and a wall-clock `TickClock` for an
interactive driver (a render loop). `run_protocol` executes the scripted
steps of a definition headlessly with a fixed time step, which is how lab
handouts are checked and how the integrator is exercised without a display.

Errors raised while running a protocol are reported the same way as
configuration errors: any diagnosable exception is wrapped in a single
`ExperimentRunError` carrying the formatted report.
"""
import logging
import math
from typing import Tuple

from ..config.experiment import ExperimentConfig, ProtocolAction, ProtocolConfig
from ..errors import DiagnosableError, ExperimentRunError, format_diagnostic_report
from .clock import TickClock
from .results import ProtocolResult
from .session import ExperimentSession

logger = logging.getLogger(__name__)

# Remainders shorter than this are rounding noise from duration / time_step.
_REMAINDER_EPSILON_S = 1e-9


def start_session(config: ExperimentConfig) -> Tuple[ExperimentSession, TickClock]:
    """
    Creates a fresh session and a tick clock honouring the definition's
    `max_tick_dt` cap.
    """
    session = ExperimentSession(config.parameters, config.sampling_interval, config.method)
    clock = TickClock(max_dt=config.max_tick_dt)
    logger.info(f"Interactive session for '{config.name}' ready (max_tick_dt={config.max_tick_dt}).")
    return session, clock


def _run_for(session: ExperimentSession, duration: float, time_step: float) -> int:
    """Ticks `duration` seconds in steps of `time_step`; the last tick takes any remainder."""
    full_ticks = int(math.floor(duration / time_step))
    for _ in range(full_ticks):
        session.tick(time_step)
    remainder = duration - full_ticks * time_step
    if remainder > _REMAINDER_EPSILON_S:
        session.tick(remainder)
        return full_ticks + 1
    return full_ticks


def _execute(session: ExperimentSession, protocol: ProtocolConfig) -> int:
    tick_count = 0
    for step in protocol.steps:
        logger.debug(f"Protocol step '{step.action.value}' at t={session.state.time:.3f}s")
        if step.action is ProtocolAction.RUN:
            tick_count += _run_for(session, step.duration, protocol.time_step)
        elif step.action is ProtocolAction.TOGGLE_SWITCH:
            session.toggle_switch()
        elif step.action is ProtocolAction.START_RECORDING:
            session.start_recording()
        elif step.action is ProtocolAction.STOP_RECORDING:
            session.stop_recording()
        elif step.action is ProtocolAction.TOGGLE_RECORDING:
            session.toggle_recording()
        elif step.action is ProtocolAction.CLEAR_DATA:
            session.clear_data()
        elif step.action is ProtocolAction.RESET:
            session.reset()
    return tick_count


def run_protocol(config: ExperimentConfig) -> ProtocolResult:
    """
    Runs the scripted protocol of `config` on a new session.

    Raises:
        ExperimentRunError: if the definition has no protocol, or if the run
                            fails at any point. The original exception is
                            chained for debugging.
    """
    try:
        if config.protocol is None:
            raise ExperimentRunError(format_diagnostic_report(
                error_type="Missing Protocol",
                details=f"Experiment '{config.name}' does not define a 'protocol' section, so there is nothing to run headlessly.",
                suggestion="Add a 'protocol' section with a 'time_step' and a list of 'steps', or drive the session interactively with start_session().",
                context={'source_file': config.source_path}
            ))

        logger.info(f"--- Running protocol for '{config.name}' ({len(config.protocol.steps)} steps) ---")
        session = ExperimentSession(config.parameters, config.sampling_interval, config.method)
        tick_count = _execute(session, config.protocol)
        result = ProtocolResult(
            experiment_name=config.name,
            final_state=session.state,
            series=session.data,
            tick_count=tick_count,
        )
        logger.info(
            f"Protocol finished after {tick_count} ticks: t={result.final_state.time:.2f}s, "
            f"V={result.final_state.voltage:.4f}V, {len(result.series)} point(s) recorded."
        )
        return result

    except ExperimentRunError:
        raise

    except DiagnosableError as e:
        logger.error(f"A diagnosable error occurred during the protocol run: {e}")
        raise ExperimentRunError(e.get_diagnostic_report()) from e

    except Exception as e:
        logger.critical(f"An unexpected internal error occurred during the protocol run: {e}", exc_info=True)
        report = format_diagnostic_report(
            error_type=f"An Unexpected Simulation Error Occurred ({type(e).__name__})",
            details=f"The simulator encountered an unexpected internal error: {e}",
            suggestion="This may be a bug. Review the traceback and consider filing a bug report.",
            context={'source_file': config.source_path}
        )
        raise ExperimentRunError(report) from e

"""Error reports and robot feedback for the simulator's control channels."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Iterable, Optional, TextIO

__all__ = [
    "SimError",
    "SimErrorSource",
    "SimulatorError",
    "MoveCommand",
    "RobotCommand",
    "RadioResponse",
    "RobotFeedback",
    "log",
    "make_error",
    "warn_latency",
    "check_robot_commands",
    "robot_feedback",
]

_LATENCY_LIMIT_NS = 1e6


class SimError(Enum):
    """Kinds of error the simulator reports, with their wire code and message."""

    UNSUPPORTED_VELOCITY = (
        "VELOCITY_TYPE",
        "The received message had a velocity type unsupported by this simulator",
    )
    UNSUPPORTED_ANGLE = (
        "ANGLE_VALUE",
        "The received kick angle was not equal to either 0 or 45",
    )
    UNREADABLE = (
        "UNREADABLE",
        "The received message was unreadable",
    )
    MISSING_SPEC = (
        "INVALID_SPEC",
        "The received spec is missing one of the required fields for this simulator",
    )
    INVALID_REALISM = (
        "INVALID_REALISM",
        "The received realism is not conforming to the realism configuration for this simulator",
    )

    @property
    def code(self) -> str:
        return self.value[0]

    @property
    def description(self) -> str:
        return self.value[1]


class SimErrorSource(Enum):
    """Who sent the message that caused an error."""

    CONTROLLER = "CONTROLLER"
    BLUE_TEAM = "BLUE"
    YELLOW_TEAM = "YELLOW"


@dataclass(frozen=True)
class SimulatorError:
    """An error as sent back to a client."""

    code: str
    message: str


@dataclass(frozen=True)
class MoveCommand:
    """A robot move command; exactly one kind of velocity is expected to be set."""

    local_velocity: Optional[tuple[float, float, float]] = None
    wheel_velocity: Optional[tuple[float, ...]] = None
    global_velocity: Optional[tuple[float, float, float]] = None


@dataclass(frozen=True)
class RobotCommand:
    """A command for a single robot."""

    id: int
    move_command: Optional[MoveCommand] = None


@dataclass(frozen=True)
class RadioResponse:
    """A response received from a robot over the radio."""

    id: int
    is_blue: Optional[bool] = None
    ball_detected: Optional[bool] = None


@dataclass(frozen=True)
class RobotFeedback:
    """Feedback on one robot sent back to its team."""

    id: int
    dribbler_ball_contact: bool


def log(stream: Optional[TextIO], message: str) -> None:
    """Write ``message`` to ``stream`` prefixed by the current wall-clock time."""
    out = sys.stderr if stream is None else stream
    out.write(datetime.now().strftime("%H:%M:%S"))
    out.write(" ")
    out.write(message)


def make_error(code: SimError, source: SimErrorSource, appendix: str = "") -> SimulatorError:
    """Build the error for ``code`` and log it to standard error."""
    message = f"{code.description} {appendix}"
    log(sys.stderr, f"[{source.value:<10} - {code.code:<15}] {message}\n")
    return SimulatorError(code.code, message)


def warn_latency(delta: int, stream: Optional[TextIO] = None) -> bool:
    """Warn when handling a datagram took longer than 1 ms; return whether it did."""
    if delta > _LATENCY_LIMIT_NS:
        log(
            sys.stdout if stream is None else stream,
            f"Warning: Handled Datagram in {int(delta)}ns, should be lower than 1e6\n",
        )
        return True
    return False


def check_robot_commands(
    commands: Iterable[RobotCommand], source: SimErrorSource
) -> list[SimulatorError]:
    """Errors for move commands using a velocity type the simulator lacks."""
    errors = []
    for command in commands:
        move = command.move_command
        if move is None:
            continue
        if move.wheel_velocity is not None or move.global_velocity is not None:
            errors.append(
                make_error(SimError.UNSUPPORTED_VELOCITY, source, f"(Robot :{command.id})")
            )
    return errors


def robot_feedback(responses: Iterable[RadioResponse], is_blue: bool) -> list[RobotFeedback]:
    """Ball-contact feedback for the robots of one team."""
    return [
        RobotFeedback(r.id, r.ball_detected)
        for r in responses
        if r.is_blue is not None and r.is_blue == is_blue and r.ball_detected is not None
    ]
"""Conversion of simulator control messages into internal commands.

Commands are plain dictionaries keyed by message field names: a field
that is absent from the dictionary, or set to ``None``, is unset.
"""

from __future__ import annotations

import copy
import math
import sys
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Optional

from .simerrors import SimError, SimErrorSource, SimulatorError, log, make_error

__all__ = [
    "RobotLimits",
    "RobotSpecs",
    "StrategySpecs",
    "ErForceSpecs",
    "TeamCommandMerger",
    "scale_up",
    "scale_teleport_ball",
    "scale_teleport_robot",
    "convert_specs",
    "convert_all_specs",
]

_METRES_TO_MILLIMETRES = 1e3
_TELEPORT_BALL_FIELDS = ("x", "y", "z", "vx", "vy", "vz")
_TELEPORT_ROBOT_FIELDS = ("x", "y", "v_x", "v_y")

_DEFAULT_SHOT_MAX = 100
_DRIBBLER_HEIGHT = 0.04
_BLUE = "BLUE"

Command = dict[str, Any]
ChipDistance = Callable[[float], float]


@dataclass(frozen=True)
class RobotLimits:
    """Movement limits of a robot; accelerations in m/s^2 and rad/s^2, speeds in m/s and rad/s."""

    acc_speedup_absolute_max: Optional[float] = None
    acc_speedup_angular_max: Optional[float] = None
    acc_brake_absolute_max: Optional[float] = None
    acc_brake_angular_max: Optional[float] = None
    vel_absolute_max: Optional[float] = None
    vel_angular_max: Optional[float] = None


@dataclass(frozen=True)
class ErForceSpecs:
    """Simulator-specific extension of the robot specs."""

    shoot_radius: Optional[float] = None
    dribbler_height: Optional[float] = None
    dribbler_width: Optional[float] = None


@dataclass(frozen=True)
class RobotSpecs:
    """Robot specs as received from a simulation controller.

    ``custom`` holds extension messages; the first :class:`ErForceSpecs`
    among them is the one used.
    """

    id: Optional[int] = None
    team: Optional[str] = None
    radius: float = 0.0
    height: float = 0.0
    mass: Optional[float] = None
    max_linear_kick_speed: Optional[float] = None
    max_chip_kick_speed: Optional[float] = None
    center_to_dribbler: Optional[float] = None
    limits: Optional[RobotLimits] = None
    custom: tuple[Any, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class StrategySpecs:
    """Acceleration limits handed to the strategy."""

    a_speedup_f_max: float
    a_speedup_s_max: float
    a_speedup_phi_max: float
    a_brake_f_max: float
    a_brake_s_max: float
    a_brake_phi_max: float


def scale_up(values: dict[str, Any], fields: Iterable[str]) -> dict[str, Any]:
    """Copy of ``values`` with the given fields, where set, converted from metres to millimetres."""
    scaled = dict(values)
    for name in fields:
        if scaled.get(name) is not None:
            scaled[name] = scaled[name] * _METRES_TO_MILLIMETRES
    return scaled


def scale_teleport_ball(ball: dict[str, Any]) -> dict[str, Any]:
    """Scale the position and velocity of a ball teleport request."""
    return scale_up(ball, _TELEPORT_BALL_FIELDS)


def scale_teleport_robot(robot: dict[str, Any]) -> dict[str, Any]:
    """Scale the position and velocity of a robot teleport request."""
    return scale_up(robot, _TELEPORT_ROBOT_FIELDS)


def _erforce_extension(spec: RobotSpecs) -> Optional[ErForceSpecs]:
    return next((c for c in spec.custom if isinstance(c, ErForceSpecs)), None)


def _require(value: Any, name: str) -> Any:
    if value is None:
        raise ValueError(f"robot spec is missing {name}")
    return value


def _opening_angle(center_to_dribbler: float, radius: float) -> float:
    # cos(angle / 2) = center_to_dribbler / radius
    if radius == 0:
        return math.nan
    ratio = center_to_dribbler / radius
    if not -1.0 <= ratio <= 1.0:
        return math.nan
    return 2 * math.acos(ratio)


def convert_specs(spec: RobotSpecs, chip_distance: ChipDistance) -> tuple[bool, dict[str, Any]]:
    """Convert controller specs to internal robot specs.

    Returns whether the robot is on the blue team and the converted
    specs. ``chip_distance`` maps a chip kick speed to a chip distance.
    Raises ValueError when a field the simulator needs is missing.
    """
    mass = _require(spec.mass, "mass")
    limits = _require(spec.limits, "limits")
    center_to_dribbler = _require(spec.center_to_dribbler, "center_to_dribbler")
    ext = _require(_erforce_extension(spec), "the simulator extension")
    shoot_radius = _require(ext.shoot_radius, "shoot_radius")
    dribbler_width = _require(ext.dribbler_width, "dribbler_width")
    speedup_abs = _require(limits.acc_speedup_absolute_max, "acc_speedup_absolute_max")
    speedup_ang = _require(limits.acc_speedup_angular_max, "acc_speedup_angular_max")
    brake_abs = _require(limits.acc_brake_absolute_max, "acc_brake_absolute_max")
    brake_ang = _require(limits.acc_brake_angular_max, "acc_brake_angular_max")
    vel_abs = _require(limits.vel_absolute_max, "vel_absolute_max")
    vel_ang = _require(limits.vel_angular_max, "vel_angular_max")
    robot_id = _require(spec.id, "id")
    team = _require(spec.team, "team")

    if spec.max_linear_kick_speed is not None:
        shot_linear_max = spec.max_linear_kick_speed
    else:
        shot_linear_max = _DEFAULT_SHOT_MAX
    if spec.max_chip_kick_speed is not None:
        shot_chip_max = chip_distance(spec.max_chip_kick_speed)
    else:
        shot_chip_max = _DEFAULT_SHOT_MAX

    converted = {
        "year": 1970,
        "generation": 0,
        "id": robot_id,
        "type": "Regular",
        "radius": spec.radius,
        "height": spec.height,
        "mass": mass,
        "v_max": vel_abs,
        "omega_max": vel_ang,
        "shot_linear_max": shot_linear_max,
        "shot_chip_max": shot_chip_max,
        "dribbler_width": dribbler_width,
        "strategy": StrategySpecs(
            a_speedup_f_max=speedup_abs,
            a_speedup_s_max=speedup_abs,
            a_speedup_phi_max=speedup_ang,
            a_brake_f_max=brake_abs,
            a_brake_s_max=brake_abs,
            a_brake_phi_max=brake_ang,
        ),
        "shoot_radius": shoot_radius,
        # Only our own dribbler height is known to work with the simulation.
        "dribbler_height": _DRIBBLER_HEIGHT,
        "angle": _opening_angle(center_to_dribbler, spec.radius),
    }
    return team == _BLUE, converted


def convert_all_specs(
    specs: Iterable[RobotSpecs], chip_distance: ChipDistance
) -> tuple[Command, list[SimulatorError]]:
    """Build a team-setup command from a batch of specs.

    Specs that cannot be converted are left out and reported as
    ``MISSING_SPEC`` errors; a team key appears only if it gets a robot.
    """
    command: Command = {}
    errors: list[SimulatorError] = []
    total = 0
    for spec in specs:
        total += 1
        try:
            is_blue, converted = convert_specs(spec, chip_distance)
        except ValueError:
            errors.append(
                make_error(SimError.MISSING_SPEC, SimErrorSource.CONTROLLER, repr(spec))
            )
            continue
        key = "set_team_blue" if is_blue else "set_team_yellow"
        command.setdefault(key, []).append(converted)
    log(sys.stdout, f"Updated to {total - len(errors)} robots\n")
    return command, errors


class TeamCommandMerger:
    """Keeps the latest team and realism settings and replays them on a new simulator setup.

    A command that carries a simulator setup starts a fresh simulation,
    which first receives the remembered teams and realism, with the
    simulator enabled and the transceiver charging.
    """

    def __init__(self) -> None:
        self.team_command: Command = {}
        self.setup: Optional[Any] = None

    def handle(self, command: Command) -> list[Command]:
        """Commands to forward to the simulation, in order."""
        command = copy.deepcopy(command)
        simulator = command.get("simulator") or {}
        has_setup = simulator.get("simulator_setup") is not None

        for key in ("set_team_blue", "set_team_yellow"):
            if command.get(key) is not None:
                self.team_command[key] = copy.deepcopy(command[key])
                if has_setup:
                    del command[key]
        if simulator.get("realism_config") is not None:
            stored_sim = self.team_command.setdefault("simulator", {})
            stored_sim["realism_config"] = copy.deepcopy(simulator["realism_config"])
            if has_setup:
                del simulator["realism_config"]

        forwarded: list[Command] = []
        if has_setup:
            self.setup = copy.deepcopy(simulator["simulator_setup"])
            self.team_command.setdefault("simulator", {})["enable"] = True
            self.team_command.setdefault("transceiver", {})["charge"] = True
            forwarded.append(copy.deepcopy(self.team_command))
        forwarded.append(command)
        return forwarded
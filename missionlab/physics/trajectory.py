"""Analytical projectile-motion solver.

Ideal flat-ground ballistics: no drag, launch and landing at the same
height. Metrics are derived in closed form and the path is sampled at equal
time steps between launch and landing.
"""

import math
from dataclasses import dataclass
from typing import List, Tuple

import numpy as np
from loguru import logger
from pydantic import BaseModel, ConfigDict

from ..errors import InvalidParameter

ZERO_FLIGHT_TOLERANCE_S = 1e-9


class LaunchParameters(BaseModel):
    """Launch inputs. Not range-checked; see :func:`simulate`."""

    model_config = ConfigDict(frozen=True)

    angle_deg: float
    speed_m_s: float
    gravity_m_s2: float


class FlightMetrics(BaseModel):
    """Closed-form flight summary."""

    model_config = ConfigDict(frozen=True)

    time_of_flight_s: float
    range_m: float
    max_height_m: float

    def summary_lines(self) -> List[str]:
        return [
            f"Time of flight: {self.time_of_flight_s:.2f} s",
            f"Maximum height: {self.max_height_m:.2f} m",
            f"Horizontal range: {self.range_m:.2f} m",
        ]


@dataclass(frozen=True, eq=False)
class TrajectorySample:
    """Physical path points in metres, launch to landing."""

    x_m: np.ndarray
    y_m: np.ndarray

    @property
    def points(self) -> List[Tuple[float, float]]:
        return [(float(x), float(y)) for x, y in zip(self.x_m, self.y_m)]

    def __len__(self) -> int:
        return len(self.x_m)


def _check_params(params: LaunchParameters, sample_count: int) -> None:
    values = (params.angle_deg, params.speed_m_s, params.gravity_m_s2)
    if not all(math.isfinite(v) for v in values):
        raise InvalidParameter("Launch parameters must be finite numbers")
    if params.gravity_m_s2 <= 0:
        raise InvalidParameter(
            f"Gravity must be positive, got {params.gravity_m_s2} m/s²"
        )
    if sample_count < 1:
        raise InvalidParameter(f"sample_count must be at least 1, got {sample_count}")


def simulate(
    params: LaunchParameters, sample_count: int = 80
) -> Tuple[FlightMetrics, TrajectorySample]:
    """Compute flight metrics and a sampled path.

    Args:
        params: Launch angle (degrees), speed (m/s) and gravity (m/s²)
        sample_count: Number of equal time steps; the path has
            ``sample_count + 1`` points including both endpoints

    Returns:
        (metrics, sample)

    Raises:
        InvalidParameter: gravity is not positive, an input or a derived
            metric is not finite, or ``sample_count`` is below 1
    """
    _check_params(params, sample_count)

    theta = math.radians(params.angle_deg)
    u = params.speed_m_s
    g = params.gravity_m_s2

    vx = u * math.cos(theta)
    vy = u * math.sin(theta)

    time_of_flight = 2 * vy / g
    max_height = vy * vy / (2 * g)
    flight_range = vx * time_of_flight

    if not all(
        math.isfinite(v) for v in (time_of_flight, flight_range, max_height)
    ):
        raise InvalidParameter("Launch parameters produce a non-finite trajectory")

    # 0°, 180° and zero speed land immediately
    if abs(time_of_flight) < ZERO_FLIGHT_TOLERANCE_S:
        logger.debug("Zero time of flight; returning launch point only")
        metrics = FlightMetrics(
            time_of_flight_s=0.0, range_m=0.0, max_height_m=max_height
        )
        return metrics, TrajectorySample(x_m=np.zeros(1), y_m=np.zeros(1))

    metrics = FlightMetrics(
        time_of_flight_s=time_of_flight,
        range_m=flight_range,
        max_height_m=max_height,
    )

    t = np.linspace(0.0, time_of_flight, sample_count + 1)
    x = vx * t
    y = t * (vy - 0.5 * g * t)

    return metrics, TrajectorySample(x_m=x, y_m=y)


class TrajectorySimulator:
    """Stateless wrapper around :func:`simulate` with a fixed sample count."""

    def __init__(self, sample_count: int = 80):
        self.sample_count = sample_count

    def simulate(
        self, params: LaunchParameters
    ) -> Tuple[FlightMetrics, TrajectorySample]:
        return simulate(params, self.sample_count)

"""
Jitter reduction for tracked fingertip coordinates.

A one-dimensional recursive Bayesian (Kalman) estimator per axis. Lower
process noise gives a smoother but laggier signal; higher measurement noise
smooths more aggressively.
"""
import logging
from dataclasses import replace

logger = logging.getLogger(__name__)


class ScalarKalmanFilter:
    def __init__(self, process_noise: float = 0.01, measurement_noise: float = 0.15):
        """
        Initialize the filter.
        
        Args:
            process_noise: q, process noise covariance (>= 0)
            measurement_noise: r, measurement noise covariance (> 0)
        """
        if process_noise < 0:
            raise ValueError("Process noise must be >= 0")
        if measurement_noise <= 0:
            raise ValueError("Measurement noise must be > 0")
        self.q = float(process_noise)
        self.r = float(measurement_noise)
        self.reset()

    def reset(self) -> None:
        """Return to the uninitialized state."""
        self.p = 1.0   # Estimate error covariance
        self.x = 0.0   # Current estimate
        self.k = 0.0   # Gain
        self.initialized = False

    def __call__(self, measurement: float) -> float:
        return self.filter(measurement)

    def filter(self, measurement: float) -> float:
        """
        Filter one sample.
        
        The first sample after construction or reset is returned unchanged.
        """
        if not self.initialized:
            self.x = float(measurement)
            self.initialized = True
            return self.x
        
        # Predict
        self.p = self.p + self.q
        
        # Update
        self.k = self.p / (self.p + self.r)
        self.x = self.x + self.k * (measurement - self.x)
        self.p = (1 - self.k) * self.p
        
        return self.x


class CoordinateFilter:
    """Two independent scalar filters, one per axis."""

    def __init__(self, process_noise: float = 0.01, measurement_noise: float = 0.15):
        self._filter_x = ScalarKalmanFilter(process_noise, measurement_noise)
        self._filter_y = ScalarKalmanFilter(process_noise, measurement_noise)

    @classmethod
    def from_config(cls, config) -> 'CoordinateFilter':
        return cls(config.process_noise, config.measurement_noise)

    @property
    def initialized(self) -> bool:
        return self._filter_x.initialized and self._filter_y.initialized

    def filter(self, x: float, y: float):
        return self._filter_x.filter(x), self._filter_y.filter(y)

    def filter_point(self, point):
        """
        Filter a Point. Timestamp and pressure pass through unchanged; any
        cached width is dropped since it no longer matches the position.
        """
        x, y = self.filter(point.x, point.y)
        return replace(point, x=x, y=y, width=None)

    def reset(self) -> None:
        self._filter_x.reset()
        self._filter_y.reset()
        logger.debug("Coordinate filter reset")

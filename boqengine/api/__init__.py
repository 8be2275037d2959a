"""Public facade."""

from boqengine.api.facade import Estimator

__all__ = ["Estimator"]

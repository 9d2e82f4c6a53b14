"""
Result classes for pyCorrInt analyses.

One frozen dataclass per estimation mode. Each exposes the mode's own
named fields and the three positional slots y1, y2, y3 of the classic
corrint output, so callers never have to reinterpret a generic slot.
"""

from dataclasses import dataclass
from typing import ClassVar, Optional, Tuple

import numpy as np
from pandas import DataFrame

from ..Parameters import EstimationMode
from ..Utils import ComputeError


@dataclass(frozen=True)
class ScalingPair:
    """
    Two thresholds bounding a scaling region, r1 < r2, found by the
    scaling region search.

    :param r1: Lower threshold, std(x)/4 unless that captured no pairs
    :param r2: Upper threshold
    :param c1: C(r1)
    :param c2: C(r2)
    :param targetRatio: Requested C(r2)/C(r1)
    :param iterations: Bisection steps used
    :param converged: Whether C(r2)/C(r1) is within tolerance of targetRatio
    """
    r1: float
    r2: float
    c1: float
    c2: float
    targetRatio: float
    iterations: int
    converged: bool

    @property
    def ratio(self) -> float:
        """
        Achieved C(r2)/C(r1).
        """
        if self.c1 == 0:
            return np.nan
        return self.c2 / self.c1


@dataclass(frozen=True)
class CorrIntResult:
    """
    Fields shared by every mode.

    :param embedDimensions: Embedding dimension used
    :param timeLag: Temporal exclusion radius used, after any auto estimate
    :param timeStep: Intra-vector spacing used
    """
    mode: ClassVar[EstimationMode] = None

    embedDimensions: int
    timeLag: int
    timeStep: int

    @property
    def y1(self) -> np.ndarray:
        raise NotImplementedError

    @property
    def y2(self) -> np.ndarray:
        raise NotImplementedError

    @property
    def y3(self) -> Optional[float]:
        return None

    def AsTuple(self) -> Tuple:
        """
        The (y1, y2, y3) triple of the classic corrint interface.
        """
        return self.y1, self.y2, self.y3


@dataclass(frozen=True)
class RecurrenceResult(CorrIntResult):
    """
    Recurrence pairs.

    :param i: First state of each pair
    :param j: Second state of each pair, j > i
    :param distanceThreshold: Threshold used
    :param diagnostics: Messages emitted during the run
    """
    mode: ClassVar[EstimationMode] = EstimationMode.RECURRENCE

    i: np.ndarray
    j: np.ndarray
    distanceThreshold: float
    diagnostics: Tuple[str, ...] = ()

    @property
    def y1(self) -> np.ndarray:
        return self.i

    @property
    def y2(self) -> np.ndarray:
        return self.j

    @property
    def pairs(self) -> np.ndarray:
        """
        Pairs as an (L, 2) array.
        """
        return np.column_stack([self.i, self.j]).astype(int)

    @property
    def numPairs(self) -> int:
        return len(self.i)

    def ToDataFrame(self) -> DataFrame:
        return DataFrame({'i': self.i, 'j': self.j})


@dataclass(frozen=True)
class DimensionResult(CorrIntResult):
    """
    Correlation integral scaling data.

    :param thresholds: Distance thresholds r, ascending
    :param pairCounts: Eligible pairs closer than each r
    :param totalPairs: Total eligible pairs
    :param correlationIntegral: C(r) = pairCounts / totalPairs
    :param logDistance: log(r)
    :param logCorrelation: log(C(r)), nan where no pair is closer than r
    :param slope: Least squares slope of logCorrelation on logDistance,
        the correlation dimension estimate. None with fewer than two defined points.
    :param intercept: Intercept of the fit, None with the slope
    :param scaling: Scaling region found by findScaling, otherwise None
    :param diagnostics: Messages emitted during the run
    """
    mode: ClassVar[EstimationMode] = EstimationMode.DIMENSION

    thresholds: np.ndarray
    pairCounts: np.ndarray
    totalPairs: int
    correlationIntegral: np.ndarray
    logDistance: np.ndarray
    logCorrelation: np.ndarray
    slope: Optional[float] = None
    intercept: Optional[float] = None
    scaling: Optional[ScalingPair] = None
    diagnostics: Tuple[str, ...] = ()

    @property
    def y1(self) -> np.ndarray:
        return self.logDistance

    @property
    def y2(self) -> np.ndarray:
        return self.logCorrelation

    @property
    def y3(self) -> Optional[float]:
        return self.slope

    @property
    def defined(self) -> np.ndarray:
        """
        Mask of thresholds where log C(r) is defined.
        """
        return np.isfinite(self.logCorrelation)

    def ToDataFrame(self) -> DataFrame:
        return DataFrame({'r': self.thresholds,
                          'count': self.pairCounts,
                          'C': self.correlationIntegral,
                          'logR': self.logDistance,
                          'logC': self.logCorrelation})


@dataclass(frozen=True)
class PredictionResult(CorrIntResult):
    """
    Local model predictions of the second half of a series.

    :param neighborSize: Neighbors averaged per prediction
    :param indices: Series index of each predicted value
    :param predicted: Predicted values
    :param actual: True values at indices
    :param errorVariance: var(predicted - actual) / var(actual)
    :param skipped: Series indices skipped for lack of neighbors
    :param diagnostics: Messages emitted during the run
    """
    mode: ClassVar[EstimationMode] = EstimationMode.PREDICTION

    neighborSize: int
    indices: np.ndarray
    predicted: np.ndarray
    actual: np.ndarray
    errorVariance: float
    skipped: np.ndarray
    diagnostics: Tuple[str, ...] = ()

    @property
    def y1(self) -> np.ndarray:
        return self.predicted

    @property
    def y2(self) -> np.ndarray:
        return self.actual

    @property
    def y3(self) -> float:
        return self.errorVariance

    @property
    def numSkipped(self) -> int:
        return len(self.skipped)

    def compute_error(self, metric = None) -> float:
        """
        Compute prediction error statistics.

        :param metric: None for correlation, 'MAE', 'CAE', 'RMSE'
        """
        return ComputeError(self.actual, self.predicted, metric)

    def ToDataFrame(self) -> DataFrame:
        return DataFrame({'index': self.indices,
                          'actual': self.actual,
                          'predicted': self.predicted})


@dataclass(frozen=True)
class SmoothResult(PredictionResult):
    """
    Leave-neighbors-out reconstruction of a whole series.
    Fields as PredictionResult.
    """
    mode: ClassVar[EstimationMode] = EstimationMode.SMOOTH

"""Parameter configuration classes for pyCorrInt.

This module provides dataclasses for organizing and validating parameters
used by the estimation modes. The mode itself is a closed enum and each
mode owns a parameter class carrying only the fields it needs, so a
missing or misplaced option is caught before any computation begins.
"""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Optional, Sequence, Union

import numpy

from .Engine.Execution import ExecutionMode, CancellationToken
from .Errors import InvalidConfiguration
from .Utils import IsNonStringIterable

# timeLag values requesting an autocorrelation based estimate
AUTO_LAG = 'auto'
AUTO_LAG_SENTINEL = -1


def _IsInteger(value) -> bool:
    return isinstance(value, (int, numpy.integer)) and not isinstance(value, bool)


def _CheckThreshold(value, name = 'distanceThreshold'):
    if isinstance(value, bool) or not isinstance(value, (int, float, numpy.number)):
        raise InvalidConfiguration(f'{name} must be a real number, got {value!r}')
    if not numpy.isfinite(value) or value <= 0:
        raise InvalidConfiguration(f'{name} must be positive and finite, got {value}')


class EstimationMode(Enum):
    """The four correlation integral analyses."""
    RECURRENCE = "recurrence"
    DIMENSION = "dimension"
    PREDICTION = "prediction"
    SMOOTH = "smooth"

    @classmethod
    def Parse(cls, mode: Union[str, 'EstimationMode']) -> 'EstimationMode':
        """Map a mode name onto the enum.

        :raises InvalidConfiguration: for unknown mode names
        """
        if isinstance(mode, cls):
            return mode
        try:
            return cls(mode)
        except ValueError:
            raise InvalidConfiguration(
                f'Unknown estimation mode: {mode!r}. '
                f'Options are {[m.value for m in cls]}'
            ) from None


@dataclass
class EmbeddingParameters:
    """Delay embedding geometry.

    Parameters
    ----------
    embedDimensions : int, default=2
        Number of samples in each embedding vector (d)
    timeLag : int or 'auto', default=2
        Temporal exclusion radius in samples. Candidates j with
        |i - j| < timeLag are not neighbors of anchor i. 'auto' (or -1)
        estimates it from the first zero crossing of the autocorrelation.
    timeStep : int, default=1
        Spacing in samples between coordinates of an embedding vector (s)
    """
    embedDimensions: int = 2
    timeLag: Union[int, str] = 2
    timeStep: int = 1

    def __post_init__(self):
        """Validate parameters after initialization."""
        if not _IsInteger(self.embedDimensions) or self.embedDimensions < 1:
            raise InvalidConfiguration(
                f'embedDimensions must be a positive integer, got {self.embedDimensions!r}')
        if not _IsInteger(self.timeStep) or self.timeStep < 1:
            raise InvalidConfiguration(
                f'timeStep must be a positive integer, got {self.timeStep!r}')

        if isinstance(self.timeLag, str):
            if self.timeLag != AUTO_LAG:
                raise InvalidConfiguration(
                    f"timeLag must be a non-negative integer or '{AUTO_LAG}', got {self.timeLag!r}")
        elif not _IsInteger(self.timeLag):
            raise InvalidConfiguration(
                f'timeLag must be a non-negative integer, got {self.timeLag!r}')
        elif self.timeLag == AUTO_LAG_SENTINEL:
            self.timeLag = AUTO_LAG
        elif self.timeLag < 0:
            raise InvalidConfiguration(
                f'timeLag must be non-negative or {AUTO_LAG_SENTINEL} for auto, got {self.timeLag}')

    @property
    def autoLag(self) -> bool:
        return self.timeLag == AUTO_LAG

    @property
    def windowLength(self) -> int:
        """Samples spanned by one embedding vector, (d - 1) * s + 1."""
        return (self.embedDimensions - 1) * self.timeStep + 1


@dataclass
class RecurrenceParameters:
    """Recurrence mode parameters.

    Parameters
    ----------
    distanceThreshold : float
        Pairs closer than this are recurrences
    """
    mode: ClassVar[EstimationMode] = EstimationMode.RECURRENCE

    distanceThreshold: float = None

    def __post_init__(self):
        if self.distanceThreshold is None:
            raise InvalidConfiguration('recurrence mode requires distanceThreshold')
        _CheckThreshold(self.distanceThreshold)


@dataclass
class DimensionParameters:
    """Correlation dimension parameters.

    Exactly one source of thresholds is used, in this order of precedence:
    findScaling, distanceThreshold, thresholds, then an automatic
    log-spaced sweep of numThresholds values.

    Parameters
    ----------
    distanceThreshold : float, optional
        Single threshold r
    thresholds : sequence of float, optional
        Explicit thresholds
    numThresholds : int, default=20
        Size of the automatic sweep
    findScaling : bool, default=False
        Search for r1 = std(x)/4 and r2 with C(r2)/C(r1) ~ scalingRatio
    scalingRatio : float, default=5.0
        Target correlation integral ratio of the scaling region
    scalingTolerance : float, default=0.05
        Relative tolerance on the ratio for convergence
    maxIterations : int, default=50
        Bisection budget of the scaling search
    """
    mode: ClassVar[EstimationMode] = EstimationMode.DIMENSION

    distanceThreshold: Optional[float] = None
    thresholds: Optional[Sequence[float]] = None
    numThresholds: int = 20
    findScaling: bool = False
    scalingRatio: float = 5.0
    scalingTolerance: float = 0.05
    maxIterations: int = 50

    def __post_init__(self):
        if self.distanceThreshold is not None:
            _CheckThreshold(self.distanceThreshold)
        if self.thresholds is not None:
            if not IsNonStringIterable(self.thresholds):
                raise InvalidConfiguration(
                    f'thresholds must be a sequence of distances, got {self.thresholds!r}')
            if len(self.thresholds) == 0:
                raise InvalidConfiguration('thresholds must not be empty')
            for r in self.thresholds:
                _CheckThreshold(r, 'thresholds')
            self.thresholds = tuple(sorted(float(r) for r in self.thresholds))
        if not _IsInteger(self.numThresholds) or self.numThresholds < 2:
            raise InvalidConfiguration('numThresholds must be an integer >= 2')
        if self.scalingRatio <= 1:
            raise InvalidConfiguration('scalingRatio must be greater than 1')
        if self.scalingTolerance <= 0:
            raise InvalidConfiguration('scalingTolerance must be positive')
        if not _IsInteger(self.maxIterations) or self.maxIterations < 1:
            raise InvalidConfiguration('maxIterations must be a positive integer')


@dataclass
class PredictionParameters:
    """Prediction mode parameters.

    Parameters
    ----------
    neighborSize : int
        Number of nearest neighbors averaged for each prediction (K)
    """
    mode: ClassVar[EstimationMode] = EstimationMode.PREDICTION

    neighborSize: int = None

    def __post_init__(self):
        if self.neighborSize is None:
            raise InvalidConfiguration(f'{self.mode.value} mode requires neighborSize')
        if not _IsInteger(self.neighborSize) or self.neighborSize < 1:
            raise InvalidConfiguration(
                f'neighborSize must be a positive integer, got {self.neighborSize!r}')


@dataclass
class SmoothParameters(PredictionParameters):
    """Smoothing mode parameters, see PredictionParameters."""
    mode: ClassVar[EstimationMode] = EstimationMode.SMOOTH


ModeParameters = Union[RecurrenceParameters, DimensionParameters,
                       PredictionParameters, SmoothParameters]


@dataclass
class ExecutionParameters:
    """Execution parameters.

    Parameters
    ----------
    mode : ExecutionMode, default=ExecutionMode.SEQUENTIAL
        Sequential, threaded or multi-process block evaluation
    numWorkers : int, optional
        Degree of parallelism. None uses all cores.
    blockSize : int, default=256
        Anchors per block. Each block computes a blockSize x N slice of
        the distance matrix.
    chunksize : int, default=1
        Blocks handed to each worker per dispatch wave
    showProgress : bool, default=False
        Show a tqdm progress bar over blocks
    useKDTree : bool, default=False
        Use a scipy KDTree for threshold searches
    cancellation : CancellationToken, optional
        Checked between dispatch waves
    """
    mode: ExecutionMode = ExecutionMode.SEQUENTIAL
    numWorkers: Optional[int] = None
    blockSize: int = 256
    chunksize: int = 1
    showProgress: bool = False
    useKDTree: bool = False
    cancellation: Optional[CancellationToken] = None

    def __post_init__(self):
        """Validate execution parameters."""
        if not isinstance(self.mode, ExecutionMode):
            raise InvalidConfiguration('mode must be an ExecutionMode enum value')
        if self.numWorkers is not None and (not _IsInteger(self.numWorkers) or self.numWorkers < 1):
            raise InvalidConfiguration(f'numWorkers must be a positive integer, got {self.numWorkers!r}')
        if not _IsInteger(self.blockSize) or self.blockSize < 1:
            raise InvalidConfiguration(f'blockSize must be a positive integer, got {self.blockSize!r}')
        if not _IsInteger(self.chunksize) or self.chunksize < 1:
            raise InvalidConfiguration(f'chunksize must be a positive integer, got {self.chunksize!r}')


def MakeModeParameters(estimationMode = 'recurrence',
                       distanceThreshold = None,
                       neighborSize = None,
                       findScaling = False,
                       thresholds = None,
                       numThresholds = 20) -> ModeParameters:
    """Build the parameter object of a mode from flat options.

    :param estimationMode: 'recurrence', 'dimension', 'prediction', 'smooth' or EstimationMode
    :param distanceThreshold: required by recurrence, optional for dimension
    :param neighborSize: required by prediction and smooth
    :param findScaling: dimension mode only
    :param thresholds: dimension mode only
    :param numThresholds: dimension mode only
    :raises InvalidConfiguration: unknown mode or missing required parameter
    """
    mode = EstimationMode.Parse(estimationMode)

    if mode == EstimationMode.RECURRENCE:
        return RecurrenceParameters(distanceThreshold = distanceThreshold)
    if mode == EstimationMode.DIMENSION:
        return DimensionParameters(distanceThreshold = distanceThreshold,
                                   thresholds = thresholds,
                                   numThresholds = numThresholds,
                                   findScaling = bool(findScaling))
    if mode == EstimationMode.PREDICTION:
        return PredictionParameters(neighborSize = neighborSize)
    return SmoothParameters(neighborSize = neighborSize)

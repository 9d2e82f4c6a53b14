"""Python tools for correlation integral analysis of time series"""
# import correlation integral functions
from .Functions import CorrInt, Recurrence, Dimension, Prediction, Smooth
from .Utils import AutoCorrelation, EstimateTimeLag, NormalizedErrorVariance, ComputeError, ConfigureLogging
from .Examples import Examples
from .Embed import Embed
from .ExampleData import sampleData

# Import result objects
from .Engine.Results import (
    RecurrenceResult,
    DimensionResult,
    PredictionResult,
    SmoothResult,
    ScalingPair
)
# Import parameter objects
from .Parameters import (
    EstimationMode,
    EmbeddingParameters,
    RecurrenceParameters,
    DimensionParameters,
    PredictionParameters,
    SmoothParameters,
    ExecutionParameters
)
# Import errors
from .Errors import (
    CorrIntError,
    InvalidConfiguration,
    InsufficientLength,
    InsufficientNeighbors,
    NoZeroCrossing,
    AnalysisCancelled,
    ScalingSearchDidNotConverge
)
# Import execution configuration
from .Engine.Execution import ExecutionMode, CancellationToken

__version__     = "1.0.0"
__versionDate__ = "2026-10-18"

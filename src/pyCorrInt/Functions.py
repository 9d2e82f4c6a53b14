"""Functional programming interface to pyCorrInt.
Each function builds the parameter objects, runs the matching Engine class
and returns its result object. CorrInt() dispatches on an estimationMode
string, with the option names of the classic corrint interface."""

# local modules
from .Engine.Dimension import Dimension as DimensionClass
from .Engine.Execution import ExecutionMode
from .Engine.Prediction import Prediction as PredictionClass, Smooth as SmoothClass
from .Engine.Recurrence import Recurrence as RecurrenceClass
from .Errors import InvalidConfiguration
from .Parameters import (EmbeddingParameters, ExecutionParameters, EstimationMode,
						 RecurrenceParameters, DimensionParameters,
						 PredictionParameters, SmoothParameters, MakeModeParameters)


def _MakeExecution(executionMode, numWorkers, blockSize, useKDTree, showProgress, cancellation):
	return ExecutionParameters(mode = executionMode,
							   numWorkers = numWorkers,
							   blockSize = blockSize,
							   useKDTree = useKDTree,
							   showProgress = showProgress,
							   cancellation = cancellation)


def _ResolveAlias(value, alias, name, aliasName, default = None):
	if value is not None and alias is not None:
		raise InvalidConfiguration(f'CorrInt(): pass {name} or {aliasName}, not both')
	if value is not None:
		return value
	if alias is not None:
		return alias
	return default


def _RunClass(C, returnObject):
	result = C.Run()
	if returnObject:
		return C
	return result


def Recurrence(data = None,
			   embedDimensions = 2,
			   timeLag = 2,
			   timeStep = 1,
			   distanceThreshold = None,
			   executionMode = ExecutionMode.SEQUENTIAL,
			   numWorkers = None,
			   blockSize = 256,
			   useKDTree = False,
			   showProgress = False,
			   cancellation = None,
			   verbose = False,
			   returnObject = False):
	"""Recurrence pairs of a series.

	Parameters:
	data : 1D array-like
		The series
	distanceThreshold : float
		Pairs of embedded states closer than this are recurrences
	timeLag : int or 'auto'
		Temporal exclusion radius, 'auto' or -1 for the autocorrelation estimate

	Returns RecurrenceResult, or the Recurrence object if returnObject.
	"""
	embedding = EmbeddingParameters(embedDimensions = embedDimensions,
									timeLag = timeLag, timeStep = timeStep)
	params = RecurrenceParameters(distanceThreshold = distanceThreshold)
	execution = _MakeExecution(executionMode, numWorkers, blockSize,
							   useKDTree, showProgress, cancellation)

	R = RecurrenceClass(data, params, embedding, execution, verbose = verbose)
	return _RunClass(R, returnObject)


def Dimension(data = None,
			  embedDimensions = 2,
			  timeLag = 2,
			  timeStep = 1,
			  distanceThreshold = None,
			  thresholds = None,
			  numThresholds = 20,
			  findScaling = False,
			  scalingRatio = 5.0,
			  scalingTolerance = 0.05,
			  maxIterations = 50,
			  executionMode = ExecutionMode.SEQUENTIAL,
			  numWorkers = None,
			  blockSize = 256,
			  useKDTree = False,
			  showProgress = False,
			  cancellation = None,
			  verbose = False,
			  returnObject = False):
	"""Correlation integral scaling data and correlation dimension.

	Parameters:
	data : 1D array-like
		The series
	distanceThreshold : float, optional
		Single threshold r
	thresholds : list of float, optional
		Explicit thresholds
	numThresholds : int
		Size of the automatic log-spaced sweep used when no threshold is given
	findScaling : bool
		Search the scaling region r1 = std(x)/4, C(r2)/C(r1) ~ scalingRatio

	Returns DimensionResult, or the Dimension object if returnObject.
	"""
	embedding = EmbeddingParameters(embedDimensions = embedDimensions,
									timeLag = timeLag, timeStep = timeStep)
	params = DimensionParameters(distanceThreshold = distanceThreshold,
								 thresholds = thresholds,
								 numThresholds = numThresholds,
								 findScaling = findScaling,
								 scalingRatio = scalingRatio,
								 scalingTolerance = scalingTolerance,
								 maxIterations = maxIterations)
	execution = _MakeExecution(executionMode, numWorkers, blockSize,
							   useKDTree, showProgress, cancellation)

	D = DimensionClass(data, params, embedding, execution, verbose = verbose)
	return _RunClass(D, returnObject)


def Prediction(data = None,
			   embedDimensions = 2,
			   timeLag = 2,
			   timeStep = 1,
			   neighborSize = None,
			   executionMode = ExecutionMode.SEQUENTIAL,
			   numWorkers = None,
			   blockSize = 256,
			   showProgress = False,
			   cancellation = None,
			   verbose = False,
			   returnObject = False):
	"""Predict the second half of a series from the first half.

	Parameters:
	data : 1D array-like
		The series
	neighborSize : int
		Nearest neighbors averaged for each prediction

	Returns PredictionResult, or the Prediction object if returnObject.
	"""
	embedding = EmbeddingParameters(embedDimensions = embedDimensions,
									timeLag = timeLag, timeStep = timeStep)
	params = PredictionParameters(neighborSize = neighborSize)
	execution = _MakeExecution(executionMode, numWorkers, blockSize,
							   False, showProgress, cancellation)

	P = PredictionClass(data, params, embedding, execution, verbose = verbose)
	return _RunClass(P, returnObject)


def Smooth(data = None,
		   embedDimensions = 2,
		   timeLag = 2,
		   timeStep = 1,
		   neighborSize = None,
		   executionMode = ExecutionMode.SEQUENTIAL,
		   numWorkers = None,
		   blockSize = 256,
		   showProgress = False,
		   cancellation = None,
		   verbose = False,
		   returnObject = False):
	"""Predict every point of a series from all other points.

	Parameters:
	data : 1D array-like
		The series
	neighborSize : int
		Nearest neighbors averaged for each prediction

	Returns SmoothResult, or the Smooth object if returnObject.
	"""
	embedding = EmbeddingParameters(embedDimensions = embedDimensions,
									timeLag = timeLag, timeStep = timeStep)
	params = SmoothParameters(neighborSize = neighborSize)
	execution = _MakeExecution(executionMode, numWorkers, blockSize,
							   False, showProgress, cancellation)

	S = SmoothClass(data, params, embedding, execution, verbose = verbose)
	return _RunClass(S, returnObject)


def CorrInt(data = None,
			embedDimensions = None,
			timeLag = 2,
			timeStep = 1,
			distanceThreshold = None,
			neighborSize = None,
			estimationMode = 'recurrence',
			findScaling = False,
			thresholds = None,
			numThresholds = 20,
			executionMode = ExecutionMode.SEQUENTIAL,
			numWorkers = None,
			blockSize = 256,
			useKDTree = False,
			showProgress = False,
			cancellation = None,
			verbose = False,
			returnObject = False,
			embeddedDim = None,
			neighboorSize = None):
	"""Correlation integral analysis of a time series.

	Parameters:
	data : 1D array-like
		The series
	embedDimensions : int
		Embedding dimension, 2 if not given
	timeLag : int or 'auto'
		Minimum time separation of neighbors, 'auto' or -1 to estimate it
		from the first zero crossing of the autocorrelation
	timeStep : int
		Spacing of the samples within an embedding vector
	distanceThreshold : float
		Neighborhood radius for recurrence and dimension modes
	neighborSize : int
		Neighbors used by prediction and smooth modes
	estimationMode : str or EstimationMode
		'recurrence', 'dimension', 'prediction' or 'smooth'
	findScaling : bool
		Dimension mode only, search the scaling region automatically
	embeddedDim, neighboorSize :
		Classic corrint spellings of embedDimensions and neighborSize.
		Passing both spellings of one option is an error.

	Options a mode does not use are ignored.

	Returns the mode's result object. result.AsTuple() gives (y1, y2, y3).
	"""
	embedDimensions = _ResolveAlias(embedDimensions, embeddedDim,
								   'embedDimensions', 'embeddedDim', default = 2)
	neighborSize = _ResolveAlias(neighborSize, neighboorSize,
								'neighborSize', 'neighboorSize')

	embedding = EmbeddingParameters(embedDimensions = embedDimensions,
									timeLag = timeLag, timeStep = timeStep)
	params = MakeModeParameters(estimationMode = estimationMode,
								distanceThreshold = distanceThreshold,
								neighborSize = neighborSize,
								findScaling = findScaling,
								thresholds = thresholds,
								numThresholds = numThresholds)
	execution = _MakeExecution(executionMode, numWorkers, blockSize,
							   useKDTree, showProgress, cancellation)

	if params.mode == EstimationMode.RECURRENCE:
		C = RecurrenceClass(data, params, embedding, execution, verbose = verbose)
	elif params.mode == EstimationMode.DIMENSION:
		C = DimensionClass(data, params, embedding, execution, verbose = verbose)
	elif params.mode == EstimationMode.PREDICTION:
		C = PredictionClass(data, params, embedding, execution, verbose = verbose)
	else:
		C = SmoothClass(data, params, embedding, execution, verbose = verbose)

	return _RunClass(C, returnObject)

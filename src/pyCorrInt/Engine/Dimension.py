import numpy
from numpy import full, geomspace, log, nan, nextafter

from .CorrInt import CorrInt
from .Results import DimensionResult
from .ScalingRegion import ScalingRegion
from ..Errors import ScalingSearchDidNotConverge
from ..Parameters import DimensionParameters
from ..Utils import FitSlope


#-----------------------------------------------------------
class Dimension(CorrInt):
	"""
	Dimension class : child of CorrInt
	Correlation integral C(r) over a set of thresholds and the slope of
	log C(r) against log r, the correlation dimension estimate.
	Grassberger & Procaccia (1983) doi.org/10.1016/0167-2789(83)90298-1
	"""

	def __init__(self,
				 data,
				 params: DimensionParameters = None,
				 embedding = None,
				 execution = None,
				 verbose = False):
		"""
		:param data: 		1D series
		:param params: 		DimensionParameters, defaults to a threshold sweep
		:param embedding: 	EmbeddingParameters
		:param execution: 	ExecutionParameters
		:param verbose: 	Print diagnostic messages
		"""
		self.params = params if params is not None else DimensionParameters()
		self.scaling = None

		super(Dimension, self).__init__(data, embedding, execution, verbose = verbose,
										name = 'Dimension')

	#-------------------------------------------------------------------
	def Thresholds(self):
	#-------------------------------------------------------------------
		"""
		Thresholds to evaluate, by precedence: scaling region search,
		single distanceThreshold, explicit thresholds, log-spaced sweep
		spanning the eligible pair distances.
		"""
		if self.params.findScaling:
			finder = ScalingRegion(self.neighborFinder,
								   targetRatio = self.params.scalingRatio,
								   tolerance = self.params.scalingTolerance,
								   maxIterations = self.params.maxIterations,
								   verbose = self.verbose)
			self.scaling = finder.Find(self.Data)
			if not self.scaling.converged:
				self.Diagnose(f'scaling region search did not converge: {finder.reason}. '
							  f'Using r2 = {self.scaling.r2:.6g}',
							  ScalingSearchDidNotConverge)
			return numpy.array([self.scaling.r1, self.scaling.r2])

		if self.params.distanceThreshold is not None:
			return numpy.array([float(self.params.distanceThreshold)])

		if self.params.thresholds is not None:
			return numpy.array(self.params.thresholds, dtype = float)

		distances = self.neighborFinder.PairDistances()
		positive = distances[distances > 0]
		if len(positive) == 0:
			self.Diagnose('no positive pair distances, sweeping r over [1, 2]')
			return geomspace(1., 2., self.params.numThresholds)

		# just above the extremes so the smallest distance is counted
		# and the largest threshold holds every pair
		low  = nextafter(positive[0], numpy.inf)
		high = nextafter(positive[-1], numpy.inf)
		return numpy.unique(geomspace(low, high, self.params.numThresholds))

	#-------------------------------------------------------------------
	def Run(self):
	#-------------------------------------------------------------------
		"""
		Evaluate C(r) at each threshold and fit the slope.
		"""
		self.ResolveTimeLag()
		self.EmbedData()
		self.CreateNeighborFinder()

		thresholds = self.Thresholds()
		totalPairs = self.neighborFinder.NumEligiblePairs()

		if self.verbose:
			print(f'{self.name}: Run() {len(thresholds)} thresholds, {totalPairs} eligible pairs')

		if totalPairs == 0:
			self.Diagnose(f'no eligible pairs with timeLag {self.timeLag} '
						  f'among {self.numPoints} points, C(r) undefined')
			counts = numpy.zeros(len(thresholds), dtype = int)
			C = full(len(thresholds), nan)
		else:
			counts = numpy.atleast_1d(self.neighborFinder.CountPairs(thresholds))
			C = counts / totalPairs

		logDistance = log(thresholds)
		logCorrelation = full(len(thresholds), nan)
		nonZero = counts > 0
		logCorrelation[nonZero] = log(C[nonZero])

		numUndefined = len(thresholds) - int(nonZero.sum())
		if totalPairs and numUndefined:
			self.Diagnose(f'{numUndefined} of {len(thresholds)} thresholds have no pairs, '
						  'log C(r) undefined there')

		slope, intercept = None, None
		if len(thresholds) >= 2:
			fit = FitSlope(logDistance, logCorrelation)
			if fit is None:
				self.Diagnose('fewer than two defined points, slope undefined')
			else:
				slope, intercept = fit

		return DimensionResult(embedDimensions = self.embedDimensions,
							   timeLag = self.timeLag,
							   timeStep = self.timeStep,
							   thresholds = thresholds,
							   pairCounts = counts,
							   totalPairs = totalPairs,
							   correlationIntegral = C,
							   logDistance = logDistance,
							   logCorrelation = logCorrelation,
							   slope = slope,
							   intercept = intercept,
							   scaling = self.scaling,
							   diagnostics = tuple(self.diagnostics))

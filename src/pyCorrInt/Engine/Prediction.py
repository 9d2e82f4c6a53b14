import numpy

from .CorrInt import CorrInt
from .Results import PredictionResult, SmoothResult
from ..Errors import InsufficientLength, InsufficientNeighbors
from ..Parameters import PredictionParameters, SmoothParameters
from ..Utils import NormalizedErrorVariance


#-----------------------------------------------------------
class Prediction(CorrInt):
	"""
	Prediction class : child of CorrInt
	Local constant model: the value following each embedding window is
	predicted as the unweighted mean of the values following its K
	nearest neighbors. The first half of the series is the model, the
	second half is predicted.

	Target of base index b is x[b + w], w the embedding window length.
	"""

	resultClass = PredictionResult

	def __init__(self,
				 data,
				 params: PredictionParameters,
				 embedding = None,
				 execution = None,
				 verbose = False,
				 name = 'Prediction'):
		"""
		:param data: 		1D series
		:param params: 		PredictionParameters
		:param embedding: 	EmbeddingParameters
		:param execution: 	ExecutionParameters
		:param verbose: 	Print diagnostic messages
		"""
		self.params = params
		self.neighborSize = params.neighborSize

		self.knn_neighbors = None  # ndarray (N_query, K) base indices
		self.knn_distances = None  # ndarray (N_query, K)
		self.skipped = []  # InsufficientNeighbors of skipped queries

		super(Prediction, self).__init__(data, embedding, execution, verbose = verbose,
										 name = name)

	#-------------------------------------------------------------------
	def Validate(self):
	#-------------------------------------------------------------------
		super(Prediction, self).Validate()

		# at least one window needs a following value
		if self.Data.shape[0] <= self.windowLength:
			raise InsufficientLength(self.Data.shape[0], self.windowLength + 1)

	#-------------------------------------------------------------------
	def QueryIndices(self):
	#-------------------------------------------------------------------
		"""
		Base indices whose target lies in the second half
		"""
		N = self.Data.shape[0]
		firstTarget = max(N // 2, self.windowLength)
		return numpy.arange(firstTarget - self.windowLength, N - self.windowLength)

	#-------------------------------------------------------------------
	def CandidateIndices(self):
	#-------------------------------------------------------------------
		"""
		Base indices whose target lies in the first half
		"""
		half = self.Data.shape[0] // 2
		return numpy.arange(0, max(half - self.windowLength, 0))

	#-------------------------------------------------------------------
	def FindNeighbors(self, queries):
	#-------------------------------------------------------------------
		"""
		K nearest eligible candidates of each query. Queries short of
		K candidates are recorded in self.skipped.

		:return: boolean mask of queries with a full neighborhood
		"""
		if self.verbose:
			print(f'{self.name}: FindNeighbors()')

		neighbors, distances, available = self.neighborFinder.query(
			queries, self.neighborSize, self.CandidateIndices())

		self.knn_neighbors = neighbors
		self.knn_distances = distances

		valid = available >= self.neighborSize
		self.skipped = [InsufficientNeighbors(int(anchor), int(count), self.neighborSize)
						for anchor, count in zip(queries[~valid], available[~valid])]

		if self.skipped:
			self.Diagnose(f'{len(self.skipped)} of {len(queries)} query points have fewer '
						  f'than {self.neighborSize} eligible neighbors and were skipped. '
						  f'First: {self.skipped[0]}')
		return valid

	#-------------------------------------------------------------------
	def Project(self, valid):
	#-------------------------------------------------------------------
		"""
		Unweighted mean of the neighbors' following values
		"""
		if self.verbose:
			print(f'{self.name}: Project()')

		neighbors = self.knn_neighbors[valid]
		if len(neighbors) == 0:
			return numpy.empty(0)
		return self.Data[neighbors + self.windowLength].mean(axis = 1)

	#-------------------------------------------------------------------
	def Run(self):
	#-------------------------------------------------------------------
		self.ResolveTimeLag()
		self.EmbedData()
		self.CreateNeighborFinder(useKDTree = False)

		queries = self.QueryIndices()
		valid = self.FindNeighbors(queries)

		predicted = self.Project(valid)
		targets = queries[valid] + self.windowLength
		actual = self.Data[targets]

		errorVariance = NormalizedErrorVariance(actual, predicted)
		if len(actual) and not numpy.isfinite(errorVariance):
			self.Diagnose('variance of the actual values is zero, '
						  'normalized error variance undefined')

		skipped = numpy.array([s.anchor for s in self.skipped], dtype = int) + self.windowLength

		return self.resultClass(embedDimensions = self.embedDimensions,
								timeLag = self.timeLag,
								timeStep = self.timeStep,
								neighborSize = self.neighborSize,
								indices = targets,
								predicted = predicted,
								actual = actual,
								errorVariance = errorVariance,
								skipped = skipped,
								diagnostics = tuple(self.diagnostics))


#-----------------------------------------------------------
class Smooth(Prediction):
	"""
	Smooth class : child of Prediction
	Every window of the series is a query and every other window, outside
	the temporal exclusion radius, is a candidate neighbor.
	"""

	resultClass = SmoothResult

	def __init__(self,
				 data,
				 params: SmoothParameters,
				 embedding = None,
				 execution = None,
				 verbose = False):
		super(Smooth, self).__init__(data, params, embedding, execution, verbose = verbose,
									 name = 'Smooth')

	def QueryIndices(self):
		return numpy.arange(0, self.Data.shape[0] - self.windowLength)

	def CandidateIndices(self):
		return numpy.arange(0, self.Data.shape[0] - self.windowLength)

	# python modules
from typing import List, Optional
from warnings import warn

# package modules
import numpy

# local modules
from ..Embed import Embed
from ..Errors import InsufficientLength, InvalidConfiguration
from ..Parameters import EmbeddingParameters, ExecutionParameters
from ..Utils import EstimateTimeLag
from .Execution import create_executor
from .NeighborFinder import KDTreeNeighborFinder, PairwiseDistanceNeighborFinder


# --------------------------------------------------------------------
class CorrInt:
	# --------------------------------------------------------------------
	"""
	CorrInt class : data container
	Recurrence, Dimension, Prediction, Smooth inherited from CorrInt
	"""

	def __init__(self, data,
				 embedding: Optional[EmbeddingParameters] = None,
				 execution: Optional[ExecutionParameters] = None,
				 verbose = False,
				 name = 'CorrInt'):
		"""
		:param data: 		1D series (list, numpy array, pandas Series)
		:param embedding: 	EmbeddingParameters, defaults d=2, timeLag=2, s=1
		:param execution: 	ExecutionParameters, defaults to sequential
		:param verbose: 	Print diagnostic messages
		:param name: 		Name used in messages
		"""
		self.name = name
		self.verbose = verbose

		self.embedParams = embedding if embedding is not None else EmbeddingParameters()
		self.execution = execution if execution is not None else ExecutionParameters()

		self.Data = data  # ndarray 1D series after Validate()
		self.Embedding: numpy.ndarray = None  # ndarray (numPoints, embedDimensions)
		self.neighborFinder = None

		self.embedDimensions: int = self.embedParams.embedDimensions
		self.timeStep: int = self.embedParams.timeStep
		self.timeLag: int = None  # resolved by ResolveTimeLag()

		self.diagnostics: List[str] = []

		self.Validate()

	# --------------------------------------------------------------------
	@property
	def windowLength(self) -> int:
		return self.embedParams.windowLength

	@property
	def numPoints(self) -> int:
		"""Number of embedding vectors, N - (d-1)s"""
		return self.Data.shape[0] - self.windowLength + 1

	# --------------------------------------------------------------------
	def Validate(self):
		# --------------------------------------------------------------------
		"""
		Check the series and the embedding geometry before any
		computation. Mode classes extend this with their own checks.
		"""
		if self.verbose:
			print(f'{self.name}: Validate()')

		if self.Data is None:
			raise InvalidConfiguration(f'{self.name}: data is required.')

		try:
			series = numpy.asarray(self.Data, dtype = float)
		except (TypeError, ValueError) as err:
			raise InvalidConfiguration(f'{self.name}: data must be numeric. {err}') from err

		if series.ndim > 1:
			series = series.squeeze()
		if series.ndim != 1:
			raise InvalidConfiguration(
				f'{self.name}: data must be a one dimensional series, got shape {series.shape}.')
		if series.shape[0] == 0:
			raise InsufficientLength(0, self.windowLength)
		if not numpy.isfinite(series).all():
			raise InvalidConfiguration(f'{self.name}: data contains nan or inf.')

		self.Data = series

		if self.numPoints <= 0:
			raise InsufficientLength(series.shape[0], self.windowLength)

	# --------------------------------------------------------------------
	def ResolveTimeLag(self):
		# --------------------------------------------------------------------
		"""
		Set self.timeLag, estimating it from the autocorrelation first
		zero crossing if timeLag is 'auto'. NoZeroCrossing propagates.
		"""
		if self.embedParams.autoLag:
			self.timeLag = EstimateTimeLag(self.Data)
			if self.verbose:
				print(f'{self.name}: ResolveTimeLag() estimated timeLag {self.timeLag}')
		else:
			self.timeLag = int(self.embedParams.timeLag)

	# --------------------------------------------------------------------
	def EmbedData(self):
		# --------------------------------------------------------------------
		"""
		Delay embedding of self.Data into self.Embedding
		"""
		if self.verbose:
			print(f'{self.name}: EmbedData()')

		self.Embedding = Embed(self.Data, self.embedDimensions, self.timeStep)

	# --------------------------------------------------------------------
	def CreateNeighborFinder(self, useKDTree = None):
		# --------------------------------------------------------------------
		"""
		Create self.neighborFinder over self.Embedding.
		KDTree only if requested, the pairwise finder otherwise.
		"""
		if self.verbose:
			print(f'{self.name}: CreateNeighborFinder()')

		if useKDTree is None:
			useKDTree = self.execution.useKDTree

		executor = create_executor(self.execution.mode,
								   numWorkers = self.execution.numWorkers,
								   chunksize = self.execution.chunksize)

		finderArgs = dict(executor = executor,
						  blockSize = self.execution.blockSize,
						  showProgress = self.execution.showProgress,
						  cancellation = self.execution.cancellation)

		if useKDTree:
			self.neighborFinder = KDTreeNeighborFinder(self.Embedding, self.timeLag, **finderArgs)
		else:
			self.neighborFinder = PairwiseDistanceNeighborFinder(self.Embedding, self.timeLag, **finderArgs)

	# --------------------------------------------------------------------
	def Diagnose(self, msg, category = UserWarning):
		# --------------------------------------------------------------------
		"""
		Record a diagnostic on this run and emit it as a warning
		"""
		msg = f'{self.name}: {msg}'
		self.diagnostics.append(msg)
		warn(msg, category, stacklevel = 3)

	# --------------------------------------------------------------------
	def Run(self):
		# --------------------------------------------------------------------
		raise NotImplementedError

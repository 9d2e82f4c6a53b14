from abc import ABC as AbstractBaseClass, abstractmethod
from typing import Optional, Tuple

import numpy
from scipy.spatial import KDTree
from tqdm import tqdm as ProgressBar

from . import PoolFunc
from .Execution import ExecutionStrategy, SequentialExecution, CancellationToken


class NeighborFinderBase(AbstractBaseClass):
	"""
	Interface for the neighbor searches of the estimation modes.

	A pair (i, j) of embedding vectors is eligible when i != j and
	|i - j| >= timeLag. Distances are Euclidean over the embedding
	coordinates. Anchors are processed in disjoint blocks handed to an
	ExecutionStrategy; block results are combined in block order.
	"""
	def __init__(self, embedding: numpy.ndarray, timeLag: int,
				 executor: Optional[ExecutionStrategy] = None,
				 blockSize: int = 256,
				 showProgress: bool = False,
				 cancellation: Optional[CancellationToken] = None):
		"""
		Constructor
		:param embedding: 		embedded point set in the shape of [points, embedDimensions]
		:param timeLag: 		temporal exclusion radius
		:param executor: 		execution strategy for anchor blocks, sequential if None
		:param blockSize: 		anchors per block
		:param showProgress: 	show a progress bar over blocks
		:param cancellation: 	token checked between dispatch waves
		"""
		self.data = embedding
		self.timeLag = int(timeLag)
		self.executor = executor if executor is not None else SequentialExecution()
		self.blockSize = blockSize
		self.showProgress = showProgress
		self.cancellation = cancellation

	@property
	def numPoints(self) -> int:
		return self.data.shape[0]

	def _Blocks(self):
		return [(start, min(start + self.blockSize, self.numPoints))
				for start in range(0, self.numPoints, self.blockSize)]

	def _Map(self, func, arguments, description):
		"""Run func over argument tuples with the executor, in order."""
		arguments = ProgressBar(arguments, desc = description, leave = False,
								disable = not self.showProgress)
		return self.executor.map(func, arguments, self.cancellation)

	def NumEligiblePairs(self) -> int:
		"""Number of unordered eligible pairs i < j."""
		return PoolFunc.EligiblePairsBlock(0, self.numPoints, self.numPoints, self.timeLag)

	@abstractmethod
	def ThresholdPairs(self, threshold: float) -> Tuple[numpy.ndarray, numpy.ndarray]:
		"""
		All eligible pairs closer than threshold
		:param threshold: 	distance threshold r, strict comparison
		:return: (i, j) arrays with i < j, ordered by i then j
		"""
		raise NotImplementedError

	@abstractmethod
	def CountPairs(self, threshold: float) -> int:
		"""
		Number of eligible pairs i < j closer than threshold, the
		un-normalized correlation sum.
		"""
		raise NotImplementedError

	def CorrelationIntegral(self, threshold: float) -> float:
		"""C(r) = CountPairs(r) / NumEligiblePairs()"""
		total = self.NumEligiblePairs()
		if total == 0:
			return numpy.nan
		return self.CountPairs(threshold) / total

	def query(self, queryIndices: numpy.ndarray, k: int,
			  candidateIndices: numpy.ndarray) -> Tuple[numpy.ndarray, numpy.ndarray, numpy.ndarray]:
		"""
		k nearest eligible neighbors of each query point among the
		candidates. Ties at equal distance go to the smaller base index.

		:param queryIndices: 		base indices of the query points
		:param k: 					number of nearest neighbors to get
		:param candidateIndices: 	base indices allowed as neighbors
		:return: (neighbors, distances, available), see PoolFunc.KNNBlock
		"""
		queryIndices = numpy.asarray(queryIndices, dtype = int)
		candidateIndices = numpy.sort(numpy.asarray(candidateIndices, dtype = int))

		if len(queryIndices) == 0:
			return PoolFunc.KNNBlock(queryIndices, self.data, candidateIndices, self.timeLag, k)

		arguments = [(queryIndices[start:start + self.blockSize], self.data,
					  candidateIndices, self.timeLag, k)
					 for start in range(0, len(queryIndices), self.blockSize)]

		blocks = self._Map(PoolFunc.KNNBlock, arguments, 'Nearest neighbors')

		neighbors = numpy.concatenate([b[0] for b in blocks], axis = 0)
		distances = numpy.concatenate([b[1] for b in blocks], axis = 0)
		available = numpy.concatenate([b[2] for b in blocks])
		return neighbors, distances, available


class PairwiseDistanceNeighborFinder(NeighborFinderBase):
	"""
	Neighbor finder that evaluates pairwise euclidean distances one
	anchor block at a time. Memory per block is blockSize x N.

	The sorted eligible pair distances are computed on first use and
	cached, so repeated correlation sums (threshold sweeps, the scaling
	region bisection) cost one searchsorted each.
	"""
	def __init__(self, embedding: numpy.ndarray, timeLag: int, **kwargs):
		super().__init__(embedding, timeLag, **kwargs)
		self._pairDistances = None

	def ThresholdPairs(self, threshold):
		arguments = [(start, stop, self.data, self.timeLag, threshold)
					 for start, stop in self._Blocks()]

		blocks = self._Map(PoolFunc.ThresholdPairsBlock, arguments, 'Threshold pairs')

		if not blocks:
			return numpy.empty(0, dtype = int), numpy.empty(0, dtype = int)
		i = numpy.concatenate([b[0] for b in blocks]).astype(int)
		j = numpy.concatenate([b[1] for b in blocks]).astype(int)
		return i, j

	def PairDistances(self) -> numpy.ndarray:
		"""Sorted distances of every eligible pair i < j."""
		if self._pairDistances is None:
			arguments = [(start, stop, self.data, self.timeLag)
						 for start, stop in self._Blocks()]

			blocks = self._Map(PoolFunc.PairDistancesBlock, arguments, 'Pair distances')

			if blocks:
				distances = numpy.concatenate(blocks)
			else:
				distances = numpy.empty(0)
			distances.sort()
			self._pairDistances = distances
		return self._pairDistances

	def CountPairs(self, threshold):
		"""
		Number of eligible pairs closer than threshold.
		threshold may be a scalar or an array of thresholds.
		"""
		counts = numpy.searchsorted(self.PairDistances(), threshold, side = 'left')
		if numpy.ndim(counts) == 0:
			return int(counts)
		return counts.astype(int)


class KDTreeNeighborFinder(PairwiseDistanceNeighborFinder):
	"""
	Scipy KDTree neighbor finder for threshold searches.

	Threshold pairs come from KDTree.query_pairs and are then filtered by
	the temporal exclusion rule. k nearest neighbor queries and the full
	pair distance distribution use the pairwise block computation, which
	honors the tie break rule exactly.

	Note: If dimensionality is k, the number of points n in
	the data should be n >> 2^k, otherwise KDTree efficiency is low.
	"""

	def __init__(self, embedding: numpy.ndarray, timeLag: int,
				 leafsize = 20, compact_nodes = True, balanced_tree = True, **kwargs):
		super().__init__(embedding, timeLag, **kwargs)
		self.tree = KDTree(self.data, leafsize = leafsize, compact_nodes = compact_nodes,
						   copy_data = False, balanced_tree = balanced_tree)

	def ThresholdPairs(self, threshold):
		if self.cancellation is not None:
			self.cancellation.raise_if_cancelled()

		# query_pairs is inclusive, step just below r for a strict comparison
		radius = numpy.nextafter(threshold, 0)
		pairs = self.tree.query_pairs(radius, p = 2.0, output_type = 'ndarray')

		if len(pairs) == 0:
			return numpy.empty(0, dtype = int), numpy.empty(0, dtype = int)

		pairs = numpy.sort(pairs, axis = 1)
		pairs = pairs[(pairs[:, 1] - pairs[:, 0]) >= PoolFunc.MinimumSeparation(self.timeLag)]

		order = numpy.lexsort((pairs[:, 1], pairs[:, 0]))
		pairs = pairs[order]
		return pairs[:, 0].astype(int), pairs[:, 1].astype(int)

	def CountPairs(self, threshold):
		if numpy.ndim(threshold) == 0:
			return len(self.ThresholdPairs(threshold)[0])
		return numpy.array([len(self.ThresholdPairs(r)[0]) for r in threshold], dtype = int)

from .CorrInt import CorrInt
from .Results import RecurrenceResult
from ..Parameters import RecurrenceParameters


#-----------------------------------------------------------
class Recurrence(CorrInt):
	"""
	Recurrence class : child of CorrInt
	Pairs of states closer than distanceThreshold, for recurrence plots.
	"""

	def __init__(self,
				 data,
				 params: RecurrenceParameters,
				 embedding = None,
				 execution = None,
				 verbose = False):
		"""
		:param data: 		1D series
		:param params: 		RecurrenceParameters
		:param embedding: 	EmbeddingParameters
		:param execution: 	ExecutionParameters
		:param verbose: 	Print diagnostic messages
		"""
		self.params = params
		self.distanceThreshold = params.distanceThreshold

		super(Recurrence, self).__init__(data, embedding, execution, verbose = verbose,
										 name = 'Recurrence')

	#-------------------------------------------------------------------
	def Run(self):
	#-------------------------------------------------------------------
		"""
		Every eligible pair (i, j), i < j, |i - j| >= timeLag, with
		embedded distance < distanceThreshold, exactly once.
		"""
		self.ResolveTimeLag()
		self.EmbedData()
		self.CreateNeighborFinder()

		if self.verbose:
			print(f'{self.name}: ThresholdPairs() r = {self.distanceThreshold}')

		i, j = self.neighborFinder.ThresholdPairs(self.distanceThreshold)

		if self.verbose:
			print(f'{self.name}: {len(i)} recurrence pairs')

		return RecurrenceResult(embedDimensions = self.embedDimensions,
								timeLag = self.timeLag,
								timeStep = self.timeStep,
								i = i,
								j = j,
								distanceThreshold = self.distanceThreshold,
								diagnostics = tuple(self.diagnostics))

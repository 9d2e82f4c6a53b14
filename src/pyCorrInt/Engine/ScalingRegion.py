import numpy

from .Results import ScalingPair


#-----------------------------------------------------------
class ScalingRegion:
	"""
	Automatic scaling region for correlation dimension estimates.

	r1 = std(x) / 4, then r2 > r1 is bisected until C(r2) / C(r1) is
	within tolerance of targetRatio. C is non-decreasing in r so the
	search is a 1-D monotone bisection; each step costs one correlation
	sum from the neighbor finder.
	"""

	def __init__(self, neighborFinder,
				 targetRatio = 5.0,
				 tolerance = 0.05,
				 maxIterations = 50,
				 verbose = False):
		"""
		:param neighborFinder: 	PairwiseDistanceNeighborFinder or subclass
		:param targetRatio: 	Requested C(r2) / C(r1)
		:param tolerance: 		Relative tolerance on the ratio
		:param maxIterations: 	Bisection budget
		:param verbose: 		Print diagnostic messages
		"""
		self.neighborFinder = neighborFinder
		self.targetRatio = targetRatio
		self.tolerance = tolerance
		self.maxIterations = maxIterations
		self.verbose = verbose
		self.name = 'ScalingRegion'

		self.reason = None  # why the last Find() did not converge

	#-------------------------------------------------------------------
	def C(self, r):
	#-------------------------------------------------------------------
		return self.neighborFinder.CorrelationIntegral(r)

	#-------------------------------------------------------------------
	def Find(self, series) -> ScalingPair:
	#-------------------------------------------------------------------
		"""
		:param series: 	the 1D series, for std(x)
		:return: ScalingPair. converged is False when the budget ran out,
		         the ratio is out of reach, or there are no eligible
		         pairs; self.reason then says which.
		"""
		self.reason = None

		r1 = float(numpy.std(series)) / 4.
		if r1 <= 0:
			r1 = 1.

		distances = self.neighborFinder.PairDistances()
		if len(distances) == 0:
			self.reason = 'no eligible pairs'
			return ScalingPair(r1 = r1, r2 = 2 * r1, c1 = numpy.nan, c2 = numpy.nan,
							   targetRatio = self.targetRatio, iterations = 0, converged = False)

		# smallest threshold with every pair inside
		upper = float(numpy.nextafter(distances[-1], numpy.inf))

		c1 = self.C(r1)
		while c1 == 0 and r1 < upper:
			r1 = min(2 * r1, upper)
			c1 = self.C(r1)

		if upper <= r1:
			upper = 2 * r1

		if self.verbose:
			print(f'{self.name}: Find() r1 = {r1} C(r1) = {c1}')

		cUpper = self.C(upper)
		if cUpper / c1 < self.targetRatio * (1 - self.tolerance):
			self.reason = (f'C(r2)/C(r1) cannot exceed {cUpper / c1:.4g}, '
						   f'target {self.targetRatio}')
			return ScalingPair(r1 = r1, r2 = upper, c1 = c1, c2 = cUpper,
							   targetRatio = self.targetRatio, iterations = 0, converged = False)

		low, high = r1, upper
		bestR2, bestC2 = upper, cUpper
		bestError = abs(cUpper / c1 - self.targetRatio)

		for iteration in range(1, self.maxIterations + 1):
			r2 = 0.5 * (low + high)
			c2 = self.C(r2)
			ratio = c2 / c1
			error = abs(ratio - self.targetRatio)

			if error < bestError:
				bestR2, bestC2, bestError = r2, c2, error

			if error <= self.tolerance * self.targetRatio:
				if self.verbose:
					print(f'{self.name}: converged r2 = {r2} ratio = {ratio} '
						  f'after {iteration} iterations')
				return ScalingPair(r1 = r1, r2 = r2, c1 = c1, c2 = c2,
								   targetRatio = self.targetRatio,
								   iterations = iteration, converged = True)

			if ratio < self.targetRatio:
				low = r2
			else:
				high = r2

		self.reason = (f'no r2 within tolerance after {self.maxIterations} iterations, '
					   f'nearest ratio {bestC2 / c1:.4g}')
		return ScalingPair(r1 = r1, r2 = bestR2, c1 = c1, c2 = bestC2,
						   targetRatio = self.targetRatio,
						   iterations = self.maxIterations, converged = False)

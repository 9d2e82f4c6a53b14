# python modules

# package modules
import numpy
from scipy.spatial import distance

# local modules

#------------------------------------------------------
# Eligible pairs : i != j and |i - j| >= timeLag
#------------------------------------------------------
def MinimumSeparation( timeLag ) :
	"""
	Smallest |i - j| of an eligible pair. A point is never its own
	neighbor, so a timeLag of 0 still excludes i == j.
	"""
	return max( int( timeLag ), 1 )

#------------------------------------------------------
# Upper triangle distances of an anchor block
#------------------------------------------------------
def _UpperBlockDistances( start, stop, embedding, timeLag ) :
	"""
	Euclidean distances from anchors [start, stop) to every point j >= start,
	with ineligible entries (j <= i or j - i < timeLag) masked.

	:return: (distances, eligible) both (stop - start, N - start)
	"""
	distances = distance.cdist( embedding[start:stop], embedding[start:], 'euclidean' )

	rows = numpy.arange( start, stop )[:, numpy.newaxis]
	cols = numpy.arange( start, embedding.shape[0] )[numpy.newaxis, :]
	eligible = ( cols - rows ) >= MinimumSeparation( timeLag )

	return distances, eligible

#------------------------------------------------------
# Recurrence pairs of an anchor block
#------------------------------------------------------
def ThresholdPairsBlock( start, stop, embedding, timeLag, threshold ) :
	"""
	Pairs (i, j), i in [start, stop), j > i, eligible, distance < threshold.

	:return: (i, j) int arrays ordered by i then j
	"""
	distances, eligible = _UpperBlockDistances( start, stop, embedding, timeLag )

	rows, cols = numpy.nonzero( eligible & ( distances < threshold ) )

	return rows + start, cols + start

#------------------------------------------------------
# Eligible pair distances of an anchor block
#------------------------------------------------------
def PairDistancesBlock( start, stop, embedding, timeLag ) :
	"""
	Distances of all eligible pairs (i, j), i in [start, stop), j > i.

	:return: 1D float array
	"""
	distances, eligible = _UpperBlockDistances( start, stop, embedding, timeLag )

	return distances[eligible]

#------------------------------------------------------
# Eligible pair count of an anchor block
#------------------------------------------------------
def EligiblePairsBlock( start, stop, numPoints, timeLag ) :
	"""
	Number of eligible pairs (i, j), i in [start, stop), j > i.
	"""
	separation = MinimumSeparation( timeLag )
	anchors = numpy.arange( start, stop )
	return int( numpy.clip( numPoints - anchors - separation, 0, None ).sum() )

#------------------------------------------------------
# k nearest neighbors of a block of query points
#------------------------------------------------------
def KNNBlock( queryIndices, embedding, candidateIndices, timeLag, k ) :
	"""
	k nearest eligible candidates of each query point.

	candidateIndices must be ascending: the stable sort then breaks
	distance ties by smaller base index.

	:param queryIndices: base indices of the query points
	:param embedding: full embedded point set
	:param candidateIndices: base indices allowed as neighbors
	:param timeLag: temporal exclusion radius
	:param k: number of neighbors
	:return: (neighbors, distances, available)
	         neighbors (nQuery, k) base indices, -1 where missing
	         distances (nQuery, k), inf where missing
	         available (nQuery,) number of eligible candidates
	"""
	queryIndices = numpy.asarray( queryIndices, dtype = int )
	candidateIndices = numpy.asarray( candidateIndices, dtype = int )

	nQuery = len( queryIndices )
	neighbors = numpy.full( ( nQuery, k ), -1, dtype = int )
	neighborDistances = numpy.full( ( nQuery, k ), numpy.inf )

	if nQuery == 0 or len( candidateIndices ) == 0:
		return neighbors, neighborDistances, numpy.zeros( nQuery, dtype = int )

	distances = distance.cdist( embedding[queryIndices], embedding[candidateIndices], 'euclidean' )

	separation = numpy.abs( queryIndices[:, numpy.newaxis] - candidateIndices[numpy.newaxis, :] )
	distances[ separation < MinimumSeparation( timeLag ) ] = numpy.inf

	available = numpy.isfinite( distances ).sum( axis = 1 )

	k_ = min( k, len( candidateIndices ) )
	order = numpy.argsort( distances, axis = 1, kind = 'stable' )[:, :k_]

	neighbors[:, :k_] = candidateIndices[order]
	neighborDistances[:, :k_] = numpy.take_along_axis( distances, order, axis = 1 )

	return neighbors, neighborDistances, available

"""
Auxiliary functions.

AutoCorrelation          Lagged Pearson autocorrelation R(k)
EstimateTimeLag          First zero crossing of R(k)
FitSlope                 Least squares line through finite points
NormalizedErrorVariance  var(predicted - actual) / var(actual)
ComputeError             Pearson correlation, MAE, CAE, RMSE
IsNonStringIterable      Is an object iterable and not a string?
ConfigureLogging         Basic logging setup
"""

# python modules
import logging

# package modules
import numpy
from numpy import absolute, any, corrcoef, isfinite, mean, sqrt
from numpy.linalg import lstsq

# local modules
from .Errors import NoZeroCrossing

#------------------------------------------------------------------------
#------------------------------------------------------------------------
def _LaggedCorrelation(series, lag):
	"""
	Pearson correlation of series[:-lag] with series[lag:].
	nan if either segment is constant.
	"""
	leading  = series[:-lag]
	trailing = series[lag:]
	if leading.std() == 0 or trailing.std() == 0:
		return numpy.nan
	return corrcoef(leading, trailing)[0, 1]

#------------------------------------------------------------------------
#------------------------------------------------------------------------
def AutoCorrelation(data, maxLag = None):
	"""
	Sample autocorrelation R(k) for k = 0 .. maxLag.

	R(k) is the Pearson correlation between x[:-k] and x[k:]. At least two
	overlapping samples are needed, so maxLag is capped at N - 2.

	:param data: 1D series
	:param maxLag: largest lag to evaluate, defaults to N - 2
	:return: array of length maxLag + 1, R[0] = 1. Undefined lags are nan.
	"""
	series = numpy.asarray(data, dtype = float).ravel()
	N = series.shape[0]

	limit = max(N - 2, 0)
	maxLag = limit if maxLag is None else min(maxLag, limit)

	R = numpy.full(maxLag + 1, numpy.nan)
	R[0] = 1.
	for lag in range(1, maxLag + 1):
		R[lag] = _LaggedCorrelation(series, lag)
	return R

#------------------------------------------------------------------------
#------------------------------------------------------------------------
def EstimateTimeLag(data):
	"""
	Natural time lag of a series: the smallest integer k > 0 with
	R(k) <= 0. No interpolation between the bracketing lags.

	:param data: 1D series
	:return: the lag
	:raises NoZeroCrossing: constant series, or R(k) stays positive for
	                        every lag up to N - 2
	"""
	series = numpy.asarray(data, dtype = float).ravel()
	N = series.shape[0]

	if N < 3 or series.std() == 0:
		raise NoZeroCrossing(
			f'EstimateTimeLag(): autocorrelation undefined for a series of '
			f'length {N} with variance {series.var()}. Supply timeLag explicitly.')

	for lag in range(1, N - 1):
		R = _LaggedCorrelation(series, lag)
		if isfinite(R) and R <= 0:
			return lag

	raise NoZeroCrossing(
		f'EstimateTimeLag(): autocorrelation did not cross zero within '
		f'{N - 2} lags. Supply timeLag explicitly.')

#------------------------------------------------------------------------
#------------------------------------------------------------------------
def FitSlope(x, y):
	"""
	Least squares fit of y = slope * x + intercept over points where both
	coordinates are finite.

	:return: (slope, intercept), or None if fewer than two finite points
	         with distinct x remain
	"""
	x = numpy.asarray(x, dtype = float)
	y = numpy.asarray(y, dtype = float)

	finite = isfinite(x) & isfinite(y)
	x = x[finite]
	y = y[finite]

	if len(numpy.unique(x)) < 2:
		return None

	A = numpy.column_stack([x, numpy.ones_like(x)])
	coefficients, _, _, _ = lstsq(A, y, rcond = None)
	return float(coefficients[0]), float(coefficients[1])

#------------------------------------------------------------------------
#------------------------------------------------------------------------
def NormalizedErrorVariance(actual, predicted):
	"""
	var(predicted - actual) / var(actual), population variances.
	Lower is better, >= 1 means no predictive skill.

	:return: the ratio, nan if var(actual) is zero or there is no data
	"""
	actual    = numpy.asarray(actual, dtype = float)
	predicted = numpy.asarray(predicted, dtype = float)

	if actual.size == 0:
		return numpy.nan

	actualVariance = actual.var()
	if actualVariance == 0:
		return numpy.nan

	return float((predicted - actual).var() / actualVariance)

#------------------------------------------------------------------------
#------------------------------------------------------------------------
def ComputeError(actual, predicted, metric = None):
	"""
	Compute performance metrics.

	:param actual: Actual values
	:param predicted: Predicted values
	:param metric: None for Pearson correlation, 'MAE', 'CAE', 'RMSE'
	:return: Computed metric value, None if fewer than 2 finite pairs
	"""
	actual    = numpy.asarray(actual, dtype = float)
	predicted = numpy.asarray(predicted, dtype = float)

	notNan = isfinite(predicted) & isfinite(actual)
	if any( ~notNan ) :
		predicted = predicted[notNan]
		actual    = actual[notNan]

	if len(predicted) < 2 :
		return None

	if metric is None:
		return float(numpy.nan_to_num(corrcoef(actual, predicted)[0, 1]))

	err = actual - predicted
	if metric == 'MAE':
		return float(mean( absolute( err ) ))
	if metric == 'CAE':
		return float(absolute( err ).sum())
	if metric == 'RMSE':
		return float(sqrt( mean( err**2 ) ))

	raise ValueError('Unknown metric {}'.format(metric))

#------------------------------------------------------------------------
#------------------------------------------------------------------------
def IsNonStringIterable(obj):
	"""
	Is an object iterable and not a string?
	"""
	if isinstance( obj, str ) :
		return False
	try:
		iter( obj )
	except TypeError:
		return False
	return True

#------------------------------------------------------------------------
#------------------------------------------------------------------------
def ConfigureLogging(level = logging.INFO):
	"""
	Configure logging for the application.
	"""
	logging.basicConfig(level = level,
						format = '%(asctime)s - %(name)s - %(levelname)s - %(message)s')

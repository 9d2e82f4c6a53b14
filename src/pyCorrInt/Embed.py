import numpy

from .Errors import InsufficientLength, InvalidConfiguration


def Embed(data,
          embedDimensions = 2,
          timeStep        = 1):
    '''Takens time-delay embedding of a scalar series.

       Row i holds data[i], data[i + s], ..., data[i + (d-1)s], so the
       result has N - (d-1)s rows, one per valid base index, and no nan.'''

    if embedDimensions < 1 :
        raise InvalidConfiguration( 'Embed(): embedDimensions must be positive.' )
    if timeStep < 1 :
        raise InvalidConfiguration( 'Embed(): timeStep must be positive.' )

    series = numpy.asarray(data, dtype = float)
    if series.ndim != 1:
        series = series.squeeze()
    if series.ndim != 1:
        raise InvalidConfiguration( 'Embed(): data must be a one dimensional series.' )

    windowLength = (embedDimensions - 1) * timeStep + 1
    numPoints = series.shape[0] - windowLength + 1
    if numPoints <= 0:
        raise InsufficientLength(series.shape[0], windowLength)

    # base index down the rows, coordinate offset across the columns
    baseIndex = numpy.arange(numPoints)[:, numpy.newaxis]
    offsets = numpy.arange(0, embedDimensions * timeStep, timeStep)[numpy.newaxis, :]

    return series[baseIndex + offsets]

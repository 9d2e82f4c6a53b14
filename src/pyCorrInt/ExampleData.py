"""Generation of example data.

Two processes of the same length: a linear auto-regressive model with
measurement noise, and a nonlinear map of correlation dimension ~3.9
observed with a little noise. Generated from a fixed seed so the
examples are reproducible.
"""

from math import cos, sin

import numpy
from numpy.random import default_rng


def LinearModel(N = 500, seed = 0):
    """AR(1) x(n) = 4 + 0.95 x(n-1), observed with N(0, 2^2) noise."""
    rng = default_rng(seed)
    series = numpy.zeros(N)
    x = 77.
    series[0] = x
    for n in range(1, N):
        x = 4 + 0.95 * x
        series[n] = x + rng.standard_normal() * 2
    return series


def NonlinearModel(N = 500, seed = 0):
    """Four dimensional map of dimension ~3.9, observed as x + 0.3 z
    with N(0, 0.05^2) noise."""
    rng = default_rng(seed)
    series = numpy.zeros(N)
    x = y = z = v = 0.2
    series[0] = x + 0.3 * z
    for n in range(1, N):
        m = 0.4 - 6 / (1 + x**2 + y**2)
        xOld, yOld, zOld, vOld = x, y, z, v
        x = 1 + 0.7 * (xOld * cos(m) - yOld * sin(m)) + 0.2 * zOld
        y = 0.7 * (xOld * sin(m) + yOld * cos(m))
        z = 1.4 + 0.3 * vOld - zOld**2
        v = zOld
        series[n] = x + 0.3 * z + rng.standard_normal() * 0.05
    return series


def Sine(N = 400, period = 25):
    """Noise free sine wave, period in samples."""
    return numpy.sin(2 * numpy.pi * numpy.arange(N) / period)


# Dictionary of module numpy arrays so user can access sample data
sampleData = { "linearModel"    : LinearModel(),
               "nonlinearModel" : NonlinearModel(),
               "sine"           : Sine() }

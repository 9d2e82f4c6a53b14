import functools
import inspect
import numpy as np
from .ExampleData import sampleData
from . import Functions as CI


def print_call(func):
    """Decorator that prints function calls with their arguments."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        func_name = func.__name__

        arg_parts = []

        if args:
            sig = inspect.signature(func)
            param_names = list(sig.parameters.keys())
            for i, arg in enumerate(args):
                name = f"{param_names[i]} = " if i < len(param_names) else ""
                if isinstance(arg, np.ndarray):
                    arg_parts.append(f"{name}array(shape={arg.shape}, dtype={arg.dtype})")
                else:
                    arg_parts.append(f"{name}{repr(arg)}")

        for key, value in kwargs.items():
            if isinstance(value, np.ndarray):
                arg_parts.append(f"{key} = array(shape={value.shape}, dtype={value.dtype})")
            else:
                arg_parts.append(f"{key} = {repr(value)}")

        args_str = ", ".join(arg_parts)
        print(f"CI.{func_name}({args_str})")
        print()

        return func(*args, **kwargs)

    return wrapper


def Examples():
    '''Canonical pyCorrInt examples: one call per mode, then the
    prediction error against neighborhood size for both example models.'''

    Recurrence = print_call(CI.Recurrence)
    Dimension = print_call(CI.Dimension)
    Prediction = print_call(CI.Prediction)
    Smooth = print_call(CI.Smooth)

    linear = sampleData["linearModel"]
    nonlinear = sampleData["nonlinearModel"]

    R = Recurrence(data = nonlinear, embedDimensions = 3, timeLag = 1,
                   timeStep = 1, distanceThreshold = 0.1)
    print(f"{R.numPairs} recurrence pairs")
    print()

    D = Dimension(data = nonlinear, embedDimensions = 4, timeLag = 2,
                  timeStep = 1, findScaling = True)
    print(f"Scaling region r1 = {D.scaling.r1:.4f} r2 = {D.scaling.r2:.4f} slope = {D.slope}")
    print()

    D = Dimension(data = nonlinear, embedDimensions = 4, timeLag = 2,
                  timeStep = 1, numThresholds = 15)
    print(D.ToDataFrame())
    print()

    P = Prediction(data = nonlinear, embedDimensions = 4, timeLag = 1,
                   timeStep = 1, neighborSize = 5)
    print(f"Prediction error variance ratio {P.errorVariance:.4f}")
    print()

    # Error of the smoothed series as the neighborhood grows. The
    # nonlinear model stays well below 1 for small neighborhoods, the
    # linear model with measurement noise does not.
    neighborSizes = list(range(1, 21)) + [25, 30, 50, 70, 100]
    for modelName, series in (("linearModel", linear), ("nonlinearModel", nonlinear)):
        errors = []
        for K in neighborSizes:
            S = Smooth(data = series, embedDimensions = 4, timeLag = 1,
                       timeStep = 1, neighborSize = K)
            errors.append(S.errorVariance)
        print(modelName)
        for K, err in zip(neighborSizes, errors):
            print(f"  K = {K:3d}  err/var = {err:.4f}")
        print()

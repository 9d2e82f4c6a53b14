#! /usr/bin/env python3

import numpy

import pyCorrInt as CI

#------------------------------------------------------------
#------------------------------------------------------------
def main():
    '''pyCorrInt examples.'''

    CI.ConfigureLogging()

    series = CI.sampleData[ "nonlinearModel" ]

    # Each mode through the single entry point
    y1, y2, y3 = CI.CorrInt( series, 3, 1, 1, 0.1 ).AsTuple()
    print( f"recurrence : {len( y1 )} pairs" )

    y1, y2, y3 = CI.CorrInt( series, 4, 2, 1, estimationMode = 'dimension',
                             findScaling = True ).AsTuple()
    print( f"dimension  : slope {y3}" )

    y1, y2, y3 = CI.CorrInt( series, 4, 1, 1, None, 5, 'prediction' ).AsTuple()
    print( f"prediction : err/var {y3:.4f}" )

    y1, y2, y3 = CI.CorrInt( series, 4, 1, 1, None, 5, 'smooth' ).AsTuple()
    print( f"smooth     : err/var {y3:.4f}" )

    # Dimension against embedding dimension, estimated time lag
    for E in range( 1, 7 ):
        D = CI.Dimension( data = series, embedDimensions = E, timeLag = 'auto',
                          thresholds = numpy.geomspace( 0.05, 0.5, 10 ) )
        print( f"E = {E} timeLag = {D.timeLag} slope = {D.slope}" )

    CI.Examples()

#------------------------------------------------------------
#------------------------------------------------------------
if __name__ == "__main__":
    main()

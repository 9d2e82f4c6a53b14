import unittest
from contextlib import redirect_stdout
from io import StringIO
from warnings import catch_warnings, simplefilter

import numpy
from numpy import array, array_equal
from pandas import DataFrame

import pyCorrInt as CI
from pyCorrInt.Engine.Execution import (ExecutionMode, CancellationToken,
                                        SequentialExecution, create_executor)
from pyCorrInt.Engine.NeighborFinder import PairwiseDistanceNeighborFinder
from pyCorrInt.Engine.Prediction import Prediction as PredictionClass
from pyCorrInt.Parameters import (EmbeddingParameters, DimensionParameters,
                                  PredictionParameters, MakeModeParameters)
from pyCorrInt.Utils import FitSlope


#----------------------------------------------------------------
# Brute force references
#----------------------------------------------------------------
def BruteForcePairs( series, E, tau, step, r ):
    '''All (i, j), i < j, j - i >= tau, |v_i - v_j| < r by double loop'''
    V = CI.Embed( series, E, step )
    pairs = []
    for i in range( len( V ) ):
        for j in range( i + 1, len( V ) ):
            if j - i >= max( tau, 1 ) and numpy.linalg.norm( V[i] - V[j] ) < r:
                pairs.append( ( i, j ) )
    return pairs

def PeriodicSeries( periods = 5 ):
    '''Period 8 pattern whose consecutive pairs are all distinct'''
    return numpy.tile( [0., 1., 3., 2., 5., 4., 7., 6.], periods )


#----------------------------------------------------------------
# Suite of tests
#----------------------------------------------------------------
class test_CorrInt( unittest.TestCase ):
    '''Examples.py must also run, see examples.py'''

    #------------------------------------------------------------
    #
    #------------------------------------------------------------
    @classmethod
    def setUpClass( self ):
        self.verbose = False
        self.random = numpy.random.default_rng( 1 ).random( 60 )
        self.nonlinear = CI.sampleData[ "nonlinearModel" ]

    #------------------------------------------------------------
    # Embed
    #------------------------------------------------------------
    def test_embed( self ):
        '''Embed rows and spacing'''
        if self.verbose : print ( "--- Embed ---" )
        V = CI.Embed( numpy.arange( 10 ), 3, 2 )

        self.assertEqual( V.shape, ( 6, 3 ) )
        self.assertTrue( array_equal( V[0], [0, 2, 4] ) )
        self.assertTrue( array_equal( V[5], [5, 7, 9] ) )

    def test_embed_size( self ):
        '''Embed size N - (d-1)s or InsufficientLength'''
        if self.verbose : print ( "--- Embed size ---" )
        for N in range( 1, 13 ):
            for E in range( 1, 5 ):
                for step in range( 1, 4 ):
                    expected = N - ( E - 1 ) * step
                    if expected > 0:
                        V = CI.Embed( numpy.ones( N ), E, step )
                        self.assertEqual( V.shape, ( expected, E ) )
                    else:
                        with self.assertRaises( CI.InsufficientLength ):
                            CI.Embed( numpy.ones( N ), E, step )

    def test_embed_too_short( self ):
        '''Series shorter than the window fails before any output'''
        if self.verbose : print ( "--- Embed too short ---" )
        with self.assertRaises( CI.InsufficientLength ):
            CI.Recurrence( data = [1., 2., 3., 4.], embedDimensions = 3,
                           timeLag = 1, timeStep = 2, distanceThreshold = 1. )
        with self.assertRaises( CI.InsufficientLength ):
            CI.Dimension( data = [1.], embedDimensions = 2, timeLag = 1 )

    #------------------------------------------------------------
    # Parameters
    #------------------------------------------------------------
    def test_parameters( self ):
        '''Invalid configuration'''
        if self.verbose : print ( "--- Parameters ---" )
        with self.assertRaises( CI.InvalidConfiguration ):
            EmbeddingParameters( embedDimensions = 0 )
        with self.assertRaises( CI.InvalidConfiguration ):
            EmbeddingParameters( timeStep = 0 )
        with self.assertRaises( CI.InvalidConfiguration ):
            EmbeddingParameters( timeLag = -2 )
        with self.assertRaises( CI.InvalidConfiguration ):
            EmbeddingParameters( timeLag = 'sometimes' )
        with self.assertRaises( CI.InvalidConfiguration ):
            MakeModeParameters( 'recurrence' )
        with self.assertRaises( CI.InvalidConfiguration ):
            MakeModeParameters( 'recurrence', distanceThreshold = -1. )
        with self.assertRaises( CI.InvalidConfiguration ):
            MakeModeParameters( 'prediction' )
        with self.assertRaises( CI.InvalidConfiguration ):
            MakeModeParameters( 'smooth', neighborSize = 0 )
        with self.assertRaises( CI.InvalidConfiguration ):
            MakeModeParameters( 'surrogate' )
        with self.assertRaises( CI.InvalidConfiguration ):
            DimensionParameters( thresholds = [] )
        with self.assertRaises( CI.InvalidConfiguration ):
            DimensionParameters( thresholds = 0.5 )

        # configuration errors are ValueErrors
        with self.assertRaises( ValueError ):
            EmbeddingParameters( embedDimensions = -1 )

    def test_parameters_auto_lag( self ):
        '''timeLag -1 and auto request an estimate'''
        if self.verbose : print ( "--- Parameters auto lag ---" )
        self.assertTrue( EmbeddingParameters( timeLag = -1 ).autoLag )
        self.assertTrue( EmbeddingParameters( timeLag = 'auto' ).autoLag )
        self.assertFalse( EmbeddingParameters( timeLag = 0 ).autoLag )
        self.assertEqual( EmbeddingParameters( 3, 1, 2 ).windowLength, 5 )

    def test_mode_parameters( self ):
        '''Mode string to parameter object'''
        if self.verbose : print ( "--- Mode parameters ---" )
        self.assertEqual( MakeModeParameters( 'dimension' ).mode, CI.EstimationMode.DIMENSION )
        self.assertEqual( MakeModeParameters( 'smooth', neighborSize = 2 ).mode,
                          CI.EstimationMode.SMOOTH )
        self.assertEqual( MakeModeParameters( CI.EstimationMode.RECURRENCE,
                                              distanceThreshold = 1. ).mode,
                          CI.EstimationMode.RECURRENCE )
        P = MakeModeParameters( 'dimension', findScaling = True )
        self.assertTrue( P.findScaling )

    def test_invalid_data( self ):
        '''Non finite or multi column data'''
        if self.verbose : print ( "--- Invalid data ---" )
        with self.assertRaises( CI.InvalidConfiguration ):
            CI.Recurrence( data = [1., numpy.nan, 3., 4.], distanceThreshold = 1. )
        with self.assertRaises( CI.InvalidConfiguration ):
            CI.Recurrence( data = numpy.ones( ( 10, 2 ) ), distanceThreshold = 1. )

    #------------------------------------------------------------
    # Recurrence
    #------------------------------------------------------------
    def test_recurrence( self ):
        '''Scenario: ramp 1..10, E=2, timeLag=1, r=1.5'''
        if self.verbose : print ( "--- Recurrence ---" )
        R = CI.Recurrence( data = numpy.arange( 1, 11, dtype = float ),
                           embedDimensions = 2, timeLag = 1, timeStep = 1,
                           distanceThreshold = 1.5 )

        # adjacent states are sqrt(2) apart, every other pair >= 2 sqrt(2)
        expected = array( [ ( i, i + 1 ) for i in range( 8 ) ] )
        self.assertTrue( array_equal( R.pairs, expected ) )
        self.assertIsNone( R.y3 )

    def test_recurrence_exclusion( self ):
        '''Ramp with timeLag 2 excludes the adjacent pairs'''
        if self.verbose : print ( "--- Recurrence exclusion ---" )
        R = CI.Recurrence( data = numpy.arange( 1, 11, dtype = float ),
                           embedDimensions = 2, timeLag = 2, timeStep = 1,
                           distanceThreshold = 1.5 )
        self.assertEqual( R.numPairs, 0 )

    def test_recurrence_brute_force( self ):
        '''Every qualifying pair exactly once, nothing else'''
        if self.verbose : print ( "--- Recurrence brute force ---" )
        R = CI.Recurrence( data = self.random, embedDimensions = 3, timeLag = 3,
                           timeStep = 2, distanceThreshold = 0.5, blockSize = 7 )

        expected = BruteForcePairs( self.random, 3, 3, 2, 0.5 )
        found = [ tuple( p ) for p in R.pairs ]

        self.assertGreater( len( expected ), 0 )
        self.assertEqual( found, expected )
        self.assertEqual( len( set( found ) ), len( found ) )

    def test_recurrence_kdtree( self ):
        '''KDTree threshold search equals pairwise search'''
        if self.verbose : print ( "--- Recurrence KDTree ---" )
        R1 = CI.Recurrence( data = self.random, embedDimensions = 2, timeLag = 2,
                            distanceThreshold = 0.3 )
        R2 = CI.Recurrence( data = self.random, embedDimensions = 2, timeLag = 2,
                            distanceThreshold = 0.3, useKDTree = True )
        self.assertTrue( array_equal( R1.pairs, R2.pairs ) )

    def test_recurrence_timelag_zero( self ):
        '''timeLag 0 still excludes a point from its own neighborhood'''
        if self.verbose : print ( "--- Recurrence timeLag 0 ---" )
        R = CI.Recurrence( data = numpy.full( 6, 5. ), embedDimensions = 2,
                           timeLag = 0, distanceThreshold = 1. )
        # 5 points, all 10 unordered pairs at distance 0
        self.assertEqual( R.numPairs, 10 )
        self.assertTrue( ( R.i < R.j ).all() )

    def test_recurrence_dataframe( self ):
        '''Recurrence ToDataFrame'''
        if self.verbose : print ( "--- Recurrence DataFrame ---" )
        R = CI.Recurrence( data = numpy.arange( 1, 11, dtype = float ),
                           embedDimensions = 2, timeLag = 1, distanceThreshold = 1.5 )
        df = R.ToDataFrame()
        self.assertIsInstance( df, DataFrame )
        self.assertEqual( list( df.columns ), ['i', 'j'] )
        self.assertEqual( len( df ), 8 )

    #------------------------------------------------------------
    # Dimension
    #------------------------------------------------------------
    def test_dimension_monotone( self ):
        '''C(r) non-decreasing in r'''
        if self.verbose : print ( "--- Dimension monotone ---" )
        D = CI.Dimension( data = self.nonlinear, embedDimensions = 3, timeLag = 2,
                          thresholds = numpy.linspace( 0.01, 3., 25 ) )
        self.assertTrue( ( numpy.diff( D.correlationIntegral ) >= 0 ).all() )
        self.assertTrue( ( numpy.diff( D.pairCounts ) >= 0 ).all() )

    def test_dimension_brute_force( self ):
        '''C(r) = pairs closer than r / eligible pairs'''
        if self.verbose : print ( "--- Dimension brute force ---" )
        D = CI.Dimension( data = self.random, embedDimensions = 3, timeLag = 3,
                          timeStep = 2, distanceThreshold = 0.5 )

        V = CI.Embed( self.random, 3, 2 )
        N = len( V )
        total = sum( 1 for i in range( N ) for j in range( i + 3, N ) )
        count = len( BruteForcePairs( self.random, 3, 3, 2, 0.5 ) )

        self.assertEqual( D.totalPairs, total )
        self.assertEqual( D.pairCounts[0], count )
        self.assertAlmostEqual( D.correlationIntegral[0], count / total )
        self.assertAlmostEqual( D.logDistance[0], numpy.log( 0.5 ) )
        self.assertAlmostEqual( D.logCorrelation[0], numpy.log( count / total ) )
        # a single threshold has no slope
        self.assertIsNone( D.slope )

    def test_dimension_constant( self ):
        '''Scenario: constant series, C(r) = 1, flat slope'''
        if self.verbose : print ( "--- Dimension constant ---" )
        for E in ( 1, 2, 4 ):
            D = CI.Dimension( data = numpy.full( 40, 5. ), embedDimensions = E,
                              timeLag = 1, distanceThreshold = 0.1 )
            self.assertEqual( D.correlationIntegral[0], 1. )

        with catch_warnings():
            simplefilter( 'ignore' )
            D = CI.Dimension( data = numpy.full( 40, 5. ), embedDimensions = 2, timeLag = 1 )
        self.assertTrue( ( D.correlationIntegral == 1. ).all() )
        self.assertAlmostEqual( D.slope, 0. )

    def test_dimension_constant_scaling( self ):
        '''Scaling search on a constant series does not converge, does not crash'''
        if self.verbose : print ( "--- Dimension constant scaling ---" )
        with self.assertWarns( CI.ScalingSearchDidNotConverge ):
            D = CI.Dimension( data = numpy.full( 40, 5. ), embedDimensions = 2,
                              timeLag = 1, findScaling = True )
        self.assertFalse( D.scaling.converged )
        self.assertLess( D.scaling.r1, D.scaling.r2 )
        self.assertAlmostEqual( D.slope, 0. )
        self.assertEqual( len( D.diagnostics ), 1 )

    def test_dimension_undefined( self ):
        '''Threshold with no pairs gives nan, excluded from the slope'''
        if self.verbose : print ( "--- Dimension undefined ---" )
        with self.assertWarns( UserWarning ):
            D = CI.Dimension( data = numpy.arange( 20, dtype = float ),
                              embedDimensions = 2, timeLag = 1,
                              thresholds = [0.5, 2., 3., 5.] )
        # states k sqrt(2) apart for k = |i - j|
        self.assertTrue( array_equal( D.pairCounts, [0, 18, 35, 51] ) )
        self.assertTrue( numpy.isnan( D.logCorrelation[0] ) )
        self.assertTrue( numpy.isfinite( D.logCorrelation[1:] ).all() )
        self.assertTrue( array_equal( D.defined, [False, True, True, True] ) )
        self.assertIsNotNone( D.slope )
        self.assertTrue( numpy.isfinite( D.slope ) )

    def test_dimension_sweep( self ):
        '''Automatic sweep spans the pair distances'''
        if self.verbose : print ( "--- Dimension sweep ---" )
        D = CI.Dimension( data = self.nonlinear, embedDimensions = 3, timeLag = 2,
                          numThresholds = 12 )
        self.assertEqual( len( D.thresholds ), 12 )
        self.assertGreater( D.pairCounts[0], 0 )
        self.assertEqual( D.pairCounts[-1], D.totalPairs )
        self.assertEqual( D.correlationIntegral[-1], 1. )
        self.assertTrue( numpy.isfinite( D.logCorrelation ).all() )
        self.assertGreater( D.slope, 0. )

    def test_dimension_slope( self ):
        '''Quasi-periodic sine fills a closed curve, dimension near 1'''
        if self.verbose : print ( "--- Dimension slope ---" )
        series = numpy.sin( 2 * numpy.pi * numpy.arange( 400 ) / 25.3 )
        D = CI.Dimension( data = series, embedDimensions = 2, timeLag = 1,
                          thresholds = numpy.geomspace( 0.01, 0.15, 8 ) )
        self.assertGreater( D.slope, 0.7 )
        self.assertLess( D.slope, 1.3 )

    def test_dimension_scaling( self ):
        '''Scaling region search r1 = std/4, C(r2)/C(r1) ~ 5'''
        if self.verbose : print ( "--- Dimension scaling ---" )
        with catch_warnings():
            simplefilter( 'ignore' )
            D = CI.Dimension( data = self.nonlinear, embedDimensions = 4,
                              timeLag = 2, findScaling = True )
        S = D.scaling
        self.assertIsInstance( S, CI.ScalingPair )
        self.assertLess( S.r1, S.r2 )
        self.assertEqual( len( D.thresholds ), 2 )
        self.assertIsNotNone( D.slope )
        # r1 starts at std / 4 and only doubles
        doublings = numpy.log2( S.r1 / ( numpy.std( self.nonlinear ) / 4 ) )
        self.assertAlmostEqual( doublings, round( doublings ) )
        self.assertGreater( S.c1, 0. )
        if S.converged:
            self.assertLessEqual( abs( S.ratio - 5. ), 0.05 * 5. )
        else:
            self.assertGreater( len( D.diagnostics ), 0 )

    def test_dimension_kdtree( self ):
        '''KDTree correlation sums equal pairwise sums'''
        if self.verbose : print ( "--- Dimension KDTree ---" )
        thresholds = [0.05, 0.1, 0.3]
        D1 = CI.Dimension( data = self.random, embedDimensions = 2, timeLag = 2,
                           thresholds = thresholds )
        D2 = CI.Dimension( data = self.random, embedDimensions = 2, timeLag = 2,
                           thresholds = thresholds, useKDTree = True )
        self.assertTrue( array_equal( D1.pairCounts, D2.pairCounts ) )

    def test_dimension_dataframe( self ):
        '''Dimension ToDataFrame and tuple'''
        if self.verbose : print ( "--- Dimension DataFrame ---" )
        D = CI.Dimension( data = self.nonlinear, embedDimensions = 2, timeLag = 1,
                          thresholds = [0.1, 0.2, 0.4] )
        df = D.ToDataFrame()
        self.assertEqual( list( df.columns ), ['r', 'count', 'C', 'logR', 'logC'] )
        y1, y2, y3 = D.AsTuple()
        self.assertTrue( array_equal( y1, D.logDistance ) )
        self.assertEqual( y3, D.slope )

    #------------------------------------------------------------
    # Prediction
    #------------------------------------------------------------
    def test_prediction_periodic( self ):
        '''Scenario: periodic series, K=1, timeLag = period, exact prediction'''
        if self.verbose : print ( "--- Prediction periodic ---" )
        series = PeriodicSeries( 5 )
        P = CI.Prediction( data = series, embedDimensions = 2, timeLag = 8,
                           timeStep = 1, neighborSize = 1 )

        self.assertEqual( P.numSkipped, 0 )
        self.assertTrue( array_equal( P.indices, numpy.arange( 20, 40 ) ) )
        self.assertTrue( array_equal( P.predicted, P.actual ) )
        self.assertEqual( P.errorVariance, 0. )

    def test_prediction_indices( self ):
        '''Second half queries, first half candidates'''
        if self.verbose : print ( "--- Prediction indices ---" )
        P = CI.Prediction( data = self.random[:20], embedDimensions = 2, timeLag = 1,
                           neighborSize = 1, returnObject = True )
        self.assertTrue( array_equal( P.QueryIndices(), numpy.arange( 8, 18 ) ) )
        self.assertTrue( array_equal( P.CandidateIndices(), numpy.arange( 0, 8 ) ) )
        # every neighbor's following value lies in the first half
        self.assertTrue( ( P.knn_neighbors + P.windowLength < 10 ).all() )

    def test_prediction_skill( self ):
        '''Nonlinear model is predictable, error variance in [0, 1)'''
        if self.verbose : print ( "--- Prediction skill ---" )
        P = CI.Prediction( data = self.nonlinear, embedDimensions = 4, timeLag = 1,
                           neighborSize = 5 )
        self.assertGreaterEqual( P.errorVariance, 0. )
        self.assertLess( P.errorVariance, 1. )
        self.assertEqual( len( P.predicted ), len( P.actual ) )
        self.assertGreater( P.compute_error(), 0. )

    def test_prediction_insufficient( self ):
        '''More neighbors than candidates: every query skipped'''
        if self.verbose : print ( "--- Prediction insufficient ---" )
        with self.assertWarns( UserWarning ):
            P = CI.Prediction( data = self.random[:20], embedDimensions = 2,
                               timeLag = 1, neighborSize = 50 )
        self.assertEqual( P.numSkipped, 10 )
        self.assertEqual( len( P.predicted ), 0 )
        self.assertTrue( numpy.isnan( P.errorVariance ) )
        self.assertEqual( len( P.diagnostics ), 1 )

    def test_prediction_tie_break( self ):
        '''Equal distances go to the smaller base index'''
        if self.verbose : print ( "--- Prediction tie break ---" )
        embedding = array( [[0.], [1.], [0.], [1.], [0.]] )
        finder = PairwiseDistanceNeighborFinder( embedding, 1, blockSize = 2 )

        neighbors, distances, available = finder.query( [4], 1, [0, 1, 2, 3] )
        self.assertEqual( neighbors[0, 0], 0 )

        neighbors, distances, available = finder.query( [4], 2, [3, 2, 1, 0] )
        self.assertTrue( array_equal( neighbors[0], [0, 2] ) )
        self.assertTrue( array_equal( distances[0], [0., 0.] ) )
        self.assertEqual( available[0], 4 )

        neighbors, distances, available = finder.query( [2, 4], 3, [0, 1, 2, 3] )
        # 2 excludes itself
        self.assertTrue( array_equal( neighbors[0], [0, 1, 3] ) )
        self.assertEqual( available[0], 3 )

    #------------------------------------------------------------
    # Smooth
    #------------------------------------------------------------
    def test_smooth( self ):
        '''Whole series reconstruction'''
        if self.verbose : print ( "--- Smooth ---" )
        S = CI.Smooth( data = self.nonlinear, embedDimensions = 4, timeLag = 1,
                       neighborSize = 5 )
        self.assertIsInstance( S, CI.SmoothResult )
        self.assertTrue( array_equal( S.indices, numpy.arange( 4, 500 ) ) )
        self.assertGreaterEqual( S.errorVariance, 0. )
        self.assertLess( S.errorVariance, 1. )

    def test_smooth_periodic( self ):
        '''Periodic series is smoothed exactly'''
        if self.verbose : print ( "--- Smooth periodic ---" )
        S = CI.Smooth( data = PeriodicSeries( 4 ), embedDimensions = 2, timeLag = 8,
                       neighborSize = 1 )
        self.assertEqual( S.numSkipped, 0 )
        self.assertEqual( S.errorVariance, 0. )

    def test_smooth_skip( self ):
        '''Queries without enough candidates outside the exclusion radius are skipped'''
        if self.verbose : print ( "--- Smooth skip ---" )
        with self.assertWarns( UserWarning ):
            S = CI.Smooth( data = self.random[:30], embedDimensions = 1, timeLag = 20,
                           neighborSize = 3 )
        # base indices 7 .. 21 have fewer than 3 candidates 20 samples away
        self.assertTrue( array_equal( S.skipped, numpy.arange( 8, 23 ) ) )
        self.assertEqual( len( S.predicted ), 14 )
        expected = numpy.concatenate( [numpy.arange( 1, 8 ), numpy.arange( 23, 30 )] )
        self.assertTrue( array_equal( S.indices, expected ) )

    def test_smooth_dataframe( self ):
        '''Smooth ToDataFrame and tuple'''
        if self.verbose : print ( "--- Smooth DataFrame ---" )
        S = CI.Smooth( data = self.nonlinear[:100], embedDimensions = 2, timeLag = 1,
                       neighborSize = 3 )
        self.assertEqual( list( S.ToDataFrame().columns ), ['index', 'actual', 'predicted'] )
        y1, y2, y3 = S.AsTuple()
        self.assertTrue( array_equal( y1, S.predicted ) )
        self.assertTrue( array_equal( y2, S.actual ) )
        self.assertEqual( y3, S.errorVariance )

    #------------------------------------------------------------
    # Autocorrelation
    #------------------------------------------------------------
    def test_autocorrelation( self ):
        '''R(0) = 1, length maxLag + 1'''
        if self.verbose : print ( "--- AutoCorrelation ---" )
        series = numpy.sin( 2 * numpy.pi * numpy.arange( 220 ) / 22 )
        R = CI.AutoCorrelation( series, 30 )
        self.assertEqual( len( R ), 31 )
        self.assertEqual( R[0], 1. )
        self.assertGreater( R[5], 0. )
        self.assertLess( R[6], 0. )

    def test_time_lag( self ):
        '''First zero crossing of a sine, period 22'''
        if self.verbose : print ( "--- EstimateTimeLag ---" )
        series = numpy.sin( 2 * numpy.pi * numpy.arange( 220 ) / 22 )
        self.assertEqual( CI.EstimateTimeLag( series ), 6 )

    def test_time_lag_no_crossing( self ):
        '''Constant and linear series never cross'''
        if self.verbose : print ( "--- EstimateTimeLag no crossing ---" )
        with self.assertRaises( CI.NoZeroCrossing ):
            CI.EstimateTimeLag( numpy.full( 50, 3. ) )
        with self.assertRaises( CI.NoZeroCrossing ):
            CI.EstimateTimeLag( numpy.arange( 50, dtype = float ) )

    def test_time_lag_auto( self ):
        '''timeLag auto and -1 resolve through the estimator'''
        if self.verbose : print ( "--- timeLag auto ---" )
        series = numpy.sin( 2 * numpy.pi * numpy.arange( 220 ) / 22 )
        for timeLag in ( 'auto', -1 ):
            R = CI.Recurrence( data = series, embedDimensions = 2, timeLag = timeLag,
                               distanceThreshold = 0.1 )
            self.assertEqual( R.timeLag, 6 )
            self.assertTrue( ( R.j - R.i >= 6 ).all() )

        with self.assertRaises( CI.NoZeroCrossing ):
            CI.Recurrence( data = numpy.arange( 50, dtype = float ), timeLag = 'auto',
                           distanceThreshold = 0.1 )

    #------------------------------------------------------------
    # Utils
    #------------------------------------------------------------
    def test_fit_slope( self ):
        '''Least squares slope ignores nan'''
        if self.verbose : print ( "--- FitSlope ---" )
        x = numpy.array( [0., 1., 2., 3., 4.] )
        y = 2 * x + 1
        y[2] = numpy.nan
        slope, intercept = FitSlope( x, y )
        self.assertAlmostEqual( slope, 2. )
        self.assertAlmostEqual( intercept, 1. )
        self.assertIsNone( FitSlope( [1., 1.], [2., 3.] ) )
        self.assertIsNone( FitSlope( [1., 2.], [numpy.nan, 3.] ) )

    def test_normalized_error_variance( self ):
        '''var(predicted - actual) / var(actual)'''
        if self.verbose : print ( "--- NormalizedErrorVariance ---" )
        actual = numpy.array( [1., 2., 3., 4.] )
        self.assertEqual( CI.NormalizedErrorVariance( actual, actual ), 0. )
        self.assertAlmostEqual( CI.NormalizedErrorVariance( actual, numpy.full( 4, 2.5 ) ), 1. )
        self.assertTrue( numpy.isnan( CI.NormalizedErrorVariance( numpy.ones( 3 ), numpy.ones( 3 ) ) ) )

        rng = numpy.random.default_rng( 3 )
        for _ in range( 5 ):
            a, p = rng.random( 20 ), rng.random( 20 )
            self.assertGreaterEqual( CI.NormalizedErrorVariance( a, p ), 0. )

    def test_compute_error( self ):
        '''Error metrics'''
        if self.verbose : print ( "--- ComputeError ---" )
        actual = numpy.array( [1., 2., 3., 4.] )
        predicted = numpy.array( [1., 2., 3., 6.] )
        self.assertAlmostEqual( CI.ComputeError( actual, predicted, 'MAE' ), 0.5 )
        self.assertAlmostEqual( CI.ComputeError( actual, predicted, 'CAE' ), 2. )
        self.assertAlmostEqual( CI.ComputeError( actual, predicted, 'RMSE' ), 1. )
        with self.assertRaises( ValueError ):
            CI.ComputeError( actual, predicted, 'R2' )

    #------------------------------------------------------------
    # Execution
    #------------------------------------------------------------
    def test_threads( self ):
        '''Threaded blocks give the sequential result'''
        if self.verbose : print ( "--- Threads ---" )
        R1 = CI.Recurrence( data = self.nonlinear, embedDimensions = 3, timeLag = 2,
                            distanceThreshold = 0.2 )
        R2 = CI.Recurrence( data = self.nonlinear, embedDimensions = 3, timeLag = 2,
                            distanceThreshold = 0.2, executionMode = ExecutionMode.THREADS,
                            numWorkers = 3, blockSize = 40 )
        self.assertTrue( array_equal( R1.pairs, R2.pairs ) )

        S1 = CI.Smooth( data = self.nonlinear, embedDimensions = 3, timeLag = 1,
                        neighborSize = 4 )
        S2 = CI.Smooth( data = self.nonlinear, embedDimensions = 3, timeLag = 1,
                        neighborSize = 4, executionMode = ExecutionMode.THREADS,
                        numWorkers = 2, blockSize = 64 )
        self.assertTrue( array_equal( S1.predicted, S2.predicted ) )

    def test_processes( self ):
        '''Process pool blocks give the sequential result'''
        if self.verbose : print ( "--- Processes ---" )
        series = self.nonlinear[:200]
        D1 = CI.Dimension( data = series, embedDimensions = 2, timeLag = 1,
                           thresholds = [0.1, 0.3, 1.] )
        D2 = CI.Dimension( data = series, embedDimensions = 2, timeLag = 1,
                           thresholds = [0.1, 0.3, 1.],
                           executionMode = ExecutionMode.PROCESSES,
                           numWorkers = 2, blockSize = 50 )
        self.assertTrue( array_equal( D1.pairCounts, D2.pairCounts ) )
        self.assertEqual( D1.totalPairs, D2.totalPairs )

    def test_cancellation( self ):
        '''Cancelled token stops the run'''
        if self.verbose : print ( "--- Cancellation ---" )
        token = CancellationToken()
        token.cancel()
        with self.assertRaises( CI.AnalysisCancelled ):
            CI.Recurrence( data = self.nonlinear, distanceThreshold = 0.2,
                           cancellation = token )
        with self.assertRaises( CI.AnalysisCancelled ):
            CI.Recurrence( data = self.nonlinear, distanceThreshold = 0.2,
                           cancellation = token, useKDTree = True )
        with self.assertRaises( CI.AnalysisCancelled ):
            CI.Smooth( data = self.nonlinear, neighborSize = 2, cancellation = token,
                       executionMode = ExecutionMode.THREADS, numWorkers = 2 )

    def test_executor( self ):
        '''Executor factory'''
        if self.verbose : print ( "--- Executor ---" )
        self.assertIsInstance( create_executor( ExecutionMode.SEQUENTIAL ), SequentialExecution )
        executor = create_executor( ExecutionMode.THREADS, numWorkers = 2 )
        self.assertEqual( executor.map( pow, [ ( 2, k ) for k in range( 6 ) ] ),
                          [1, 2, 4, 8, 16, 32] )
        with self.assertRaises( ValueError ):
            create_executor( 'gpu' )

    #------------------------------------------------------------
    # CorrInt dispatch
    #------------------------------------------------------------
    def test_corrint( self ):
        '''Single entry point dispatches on estimationMode'''
        if self.verbose : print ( "--- CorrInt ---" )
        series = self.nonlinear[:150]

        R = CI.CorrInt( series, 2, 1, 1, 0.2 )
        self.assertIsInstance( R, CI.RecurrenceResult )

        D = CI.CorrInt( series, 2, 1, 1, estimationMode = 'dimension' )
        self.assertIsInstance( D, CI.DimensionResult )
        self.assertEqual( len( D.thresholds ), 20 )

        P = CI.CorrInt( series, 3, 1, 1, None, 4, 'prediction' )
        self.assertIsInstance( P, CI.PredictionResult )
        self.assertNotIsInstance( P, CI.SmoothResult )

        S = CI.CorrInt( series, 3, 1, 1, None, 4, 'smooth' )
        self.assertIsInstance( S, CI.SmoothResult )
        self.assertEqual( S.mode, CI.EstimationMode.SMOOTH )

        O = CI.CorrInt( series, 3, 1, 1, None, 4, 'smooth', returnObject = True )
        self.assertIsInstance( O, PredictionClass )

    def test_corrint_invalid( self ):
        '''Unknown mode and missing parameters fail before computing'''
        if self.verbose : print ( "--- CorrInt invalid ---" )
        with self.assertRaises( CI.InvalidConfiguration ):
            CI.CorrInt( self.nonlinear, estimationMode = 'surrogate' )
        with self.assertRaises( CI.InvalidConfiguration ):
            CI.CorrInt( self.nonlinear, estimationMode = 'smooth' )
        with self.assertRaises( CI.InvalidConfiguration ):
            CI.CorrInt( self.nonlinear, estimationMode = 'recurrence' )

    def test_corrint_classic_names( self ):
        '''embeddedDim and neighboorSize spellings'''
        if self.verbose : print ( "--- CorrInt classic names ---" )
        series = self.nonlinear[:150]

        S1 = CI.CorrInt( series, embeddedDim = 3, neighboorSize = 2,
                         estimationMode = 'smooth', timeLag = 1 )
        S2 = CI.CorrInt( series, embedDimensions = 3, neighborSize = 2,
                         estimationMode = 'smooth', timeLag = 1 )
        self.assertEqual( S1.embedDimensions, 3 )
        self.assertEqual( S1.neighborSize, 2 )
        self.assertTrue( array_equal( S1.predicted, S2.predicted ) )

        # default embedding dimension when neither spelling is given
        R = CI.CorrInt( series, distanceThreshold = 0.2 )
        self.assertEqual( R.embedDimensions, 2 )

        with self.assertRaises( CI.InvalidConfiguration ):
            CI.CorrInt( series, embedDimensions = 2, embeddedDim = 3,
                        distanceThreshold = 0.2 )
        with self.assertRaises( CI.InvalidConfiguration ):
            CI.CorrInt( series, neighborSize = 2, neighboorSize = 3,
                        estimationMode = 'prediction' )

    def test_execution_parameters( self ):
        '''Non integer block and worker sizes'''
        if self.verbose : print ( "--- Execution parameters ---" )
        with self.assertRaises( CI.InvalidConfiguration ):
            CI.ExecutionParameters( blockSize = 2.5 )
        with self.assertRaises( CI.InvalidConfiguration ):
            CI.ExecutionParameters( numWorkers = 1.5 )
        with self.assertRaises( CI.InvalidConfiguration ):
            CI.ExecutionParameters( chunksize = 0 )
        with self.assertRaises( CI.InvalidConfiguration ):
            CI.Recurrence( data = self.random, distanceThreshold = 0.3, blockSize = 2.5 )
        self.assertEqual( CI.ExecutionParameters( blockSize = numpy.int64( 8 ) ).blockSize, 8 )

    #------------------------------------------------------------
    # Example data
    #------------------------------------------------------------
    def test_sample_data( self ):
        '''Example series are reproducible'''
        if self.verbose : print ( "--- Sample data ---" )
        from pyCorrInt.ExampleData import LinearModel, NonlinearModel
        self.assertEqual( len( CI.sampleData["linearModel"] ), 500 )
        self.assertTrue( array_equal( NonlinearModel( 100, seed = 4 ),
                                      NonlinearModel( 100, seed = 4 ) ) )
        self.assertTrue( numpy.isfinite( LinearModel() ).all() )
        self.assertTrue( numpy.isfinite( self.nonlinear ).all() )

    def test_examples( self ):
        '''Examples prints every call it runs'''
        if self.verbose : print ( "--- Examples ---" )
        output = StringIO()
        with catch_warnings():
            simplefilter( 'ignore' )
            with redirect_stdout( output ):
                CI.Examples()
        log = output.getvalue()

        # 25 neighborhood sizes for each of the two models
        self.assertEqual( log.count( "CI.Smooth(" ), 50 )
        self.assertIn( "neighborSize = 100", log )
        self.assertEqual( log.count( "CI.Recurrence(" ), 1 )
        self.assertEqual( log.count( "CI.Dimension(" ), 2 )
        self.assertEqual( log.count( "CI.Prediction(" ), 1 )

#------------------------------------------------------------
#
#------------------------------------------------------------
if __name__ == '__main__':
    unittest.main()

"""
Contains the objects that actually implement the correlation integral math.
Shouldn't really be directly used. Instead, use the functional interface
in Functions.py, which builds the parameter objects and runs the class.
"""

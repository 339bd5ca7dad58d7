"""
Generators subpackage

Builds the inputs of an Ornstein-Zernike solve: species descriptions,
the physical state and the pair potential tables.
"""

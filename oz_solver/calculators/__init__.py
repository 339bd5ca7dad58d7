"""
Calculators subpackage

Ornstein-Zernike solver and the interpolation service used to resample
its native-grid output.
"""

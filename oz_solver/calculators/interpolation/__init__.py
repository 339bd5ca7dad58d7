from .steffen import steffen_slopes, steffen_spline, resample

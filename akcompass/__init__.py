"""Electronic compass algorithms for the AK8963 magnetometer: decoding, offset estimation, normalisation and orientation."""

__version__ = "0.1.0"
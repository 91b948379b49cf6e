"""Job application tracker with an insight engine"""

__version__ = "1.0.0"

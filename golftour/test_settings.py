"""
Test settings - disables debug mode and keeps engine logging quiet for tests
"""
from .settings import *

# Disable debug mode for tests
DEBUG = False

# Only warnings and errors from the engine while tests run
LOGGING["loggers"]["golftour"]["level"] = "WARNING"

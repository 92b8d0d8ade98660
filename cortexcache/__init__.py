"""
Cortex Cache: a snippet sharing web application.
"""

__version__ = "0.1.0"

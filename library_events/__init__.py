"""
Library events producer: publishes library-catalog changes to Kafka.
"""

__version__ = "0.1.0"

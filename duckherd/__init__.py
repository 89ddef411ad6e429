"""
Duck herding: steer a dog to sort colored ducks into separate clusters.
"""

__version__ = "0.1.0"

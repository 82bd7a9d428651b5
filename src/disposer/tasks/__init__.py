"""
Task producers that feed plain teardown callables into a Registry.
"""

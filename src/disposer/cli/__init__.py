"""
Demo command-line entrypoint.
"""

"""
todoctl - command-line client for a remote todo list API.
"""
__version__ = "0.1.0"

"""
PocketTasks AI

A to-do list service that turns free-form text into tasks and list commands
with a hosted language model.
"""

__version__ = "0.1.0"

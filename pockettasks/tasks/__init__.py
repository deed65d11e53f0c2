"""
PocketTasks AI - Tasks Module

The single owned task list, its persisted mirror and its event history.
"""

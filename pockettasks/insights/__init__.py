"""
PocketTasks AI - Insights Module

AI-generated detail (time estimate, dependencies, sub-tasks) for one task.
"""

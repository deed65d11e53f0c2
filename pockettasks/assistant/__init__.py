"""
PocketTasks AI - Assistant Module

Turns a free-form prompt into a change to the task list.
"""

"""
PocketTasks AI - Intent Classifier

Turns free-form user text into a structured action and task list.
"""

from pockettasks.classifier.schemas import Action, ClassificationResult
from pockettasks.classifier.service import ClassifierService

__all__ = ["Action", "ClassificationResult", "ClassifierService"]

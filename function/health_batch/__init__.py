"""Health batch module for syncing Apple Health workouts sent by iOS Shortcuts."""

from .health_batch import health_batch_webhook

__all__ = ['health_batch_webhook']

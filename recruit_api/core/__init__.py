"""Core rating logic for the athlete recruiting backend.

This package contains pure, storage-agnostic building blocks:

- ``rating_config``  : category weights, star thresholds, tier labels
- ``rating_engine``  : clamp, composite score, star rating, breakdown
- ``athlete_store``  : ABC for the athlete persistence collaborator

Nothing in this package imports from ``recruit_api.services`` or
``recruit_api.models``.  The engine is side-effect-free and safe to call
from any number of threads.
"""

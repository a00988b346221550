"""
Adaptive Training Periodization Engine.

Turns a training profile and workout history into a phased training
prescription: 1RM and fatigue metrics, per-muscle-group volume landmarks,
a Macrocycle -> Mesocycle -> Microcycle -> Session plan, Push/Pull/Legs
day templates, and performance analysis that feeds back into the profile.
"""

__version__ = "0.1.0"

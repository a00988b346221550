"""
Core computation for the periodization engine.

Pure functions and services with no storage or network access:
- metrics: 1RM, volume load and fatigue
- volume_landmarks: MEV/MAV/MRV per muscle group
- periodization_manager: plan hierarchy and validation
- template_generator: Push/Pull/Legs session population
- performance_analyzer: trend and fatigue reporting
"""

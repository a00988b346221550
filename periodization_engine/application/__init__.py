"""
Application layer for the periodization engine.

This package contains:
- exceptions: Engine error hierarchy
- ports/: Abstract repository interfaces (what the engine needs from storage)
- use_cases/: Orchestration of the core components
"""

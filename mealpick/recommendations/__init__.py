"""
Menu recommendation engine.

Responsibilities:
- Load the immutable menu catalog.
- Score every catalog menu against recent meals, preferences and feedback.
- Explain each pick with a single human-readable reason.
- Sample per-cuisine candidates for taste onboarding.
"""

"""
Utility modules for RatingViews.

Cross-cutting concerns:
- Errors: Exception hierarchy shared by aggregators and stores
"""

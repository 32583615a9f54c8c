"""
Aggregators for RatingViews.

Each aggregator turns an immutable ratings snapshot into one derived view:
- Popularity (ratings per movie)
- Temporal popularity (ratings per movie per month)
- Average rating per movie
- Category top-K ranking (built on the averages)
"""

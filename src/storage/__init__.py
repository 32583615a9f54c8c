"""
Record stores for RatingViews.

Each store is both the record source (ratings, movies) and the result
sink (derived views, fully overwritten per run):
- MongoRecordStore: MongoDB collections
- FileRecordStore: CSV inputs, JSON outputs on local disk
"""

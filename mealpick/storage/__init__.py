"""
Storage package.

Responsibilities:
- Hold meal records, the global preference record and the feedback log in memory.
- Hand out snapshots to the recommendation and matching code.
- Seed and reset demo data.
"""

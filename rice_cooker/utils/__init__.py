"""
Utility functions module.

Time Semantics:
- Remaining cooking time is derived from the cook start anchor, never counted down
- Elapsed minutes are floored to whole minutes
- All timestamps are timezone-aware UTC datetimes
"""

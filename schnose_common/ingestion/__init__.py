"""
Aggregation of upstream API data into `schnose_common.models` records.
"""

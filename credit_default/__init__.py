"""
Credit Default Monitoring Export

Logistic-regression credit default pipeline that exports its datasets and
scored splits as line-delimited JSON for a model monitoring platform.
"""

__version__ = "1.0.0"
__author__ = "Credit Scoring Team"

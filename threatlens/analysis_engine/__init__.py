"""
Analysis engine package — local, explainable threat scoring.

Extracts features from URLs, transactions and network flows, applies the
weighted rules of a scoring profile and classifies the result into a
safe / warning / threat verdict with a confidence percentage.
"""

from threatlens.analysis_engine.models import (
    AnalysisDomain,
    NetworkFlow,
    Protocol,
    TransactionRecord,
    TransactionType,
    Verdict,
    VerdictStatus,
)
from threatlens.analysis_engine.policy import (
    FULL_PROFILE,
    QUICK_PROFILE,
    ConfidenceBand,
    DigitRule,
    NetworkPolicy,
    ScoringProfile,
    TransactionPolicy,
    UrlPolicy,
    get_profile,
)
from threatlens.analysis_engine.features import (
    URLFeatures,
    extract_network_signals,
    extract_transaction_signals,
    extract_url_features,
    parse_ipv4,
)
from threatlens.analysis_engine.scorer import (
    compute_url_score,
    score_network,
    score_transaction,
    score_url,
)
from threatlens.analysis_engine.quick_scan import (
    quick_check_ip,
    quick_check_transaction,
    quick_scan_url,
)
from threatlens.analysis_engine.samples import (
    generate_random_flow,
    generate_random_transaction,
)

__all__ = [
    "AnalysisDomain",
    "NetworkFlow",
    "Protocol",
    "TransactionRecord",
    "TransactionType",
    "Verdict",
    "VerdictStatus",
    "FULL_PROFILE",
    "QUICK_PROFILE",
    "ConfidenceBand",
    "DigitRule",
    "NetworkPolicy",
    "ScoringProfile",
    "TransactionPolicy",
    "UrlPolicy",
    "get_profile",
    "URLFeatures",
    "extract_network_signals",
    "extract_transaction_signals",
    "extract_url_features",
    "parse_ipv4",
    "compute_url_score",
    "score_network",
    "score_transaction",
    "score_url",
    "quick_check_ip",
    "quick_check_transaction",
    "quick_scan_url",
    "generate_random_flow",
    "generate_random_transaction",
]

"""
Error classes for SplitLedger.

Configuration problems are reported when the ledger is loaded, data problems
name the offending record, and invariant failures indicate a bug in the
balance or settlement computations rather than bad input.
"""


class LedgerError(Exception):
    """Base class for all SplitLedger errors."""

    pass


class ConfigError(LedgerError):
    """
    Invalid ledger configuration.

    Raised for an empty or duplicated participant list, or a settlement
    period config whose cutoff day is outside 1..28.
    """

    pass


class DataError(LedgerError, ValueError):
    """
    A single expense record cannot be used.

    Typically an unparseable date or a malformed CSV row. The message names
    the record id when one is known.
    """

    def __init__(self, message: str, record_id: str = ""):
        super().__init__(f"{message} (record {record_id})" if record_id else message)
        self.record_id = record_id


class InvariantError(LedgerError):
    """Balances or settlements failed to net to zero within tolerance."""

    pass

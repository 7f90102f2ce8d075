"""Builds the consolidated IFSC dataset from the NEFT, RTGS and IMPS branch lists."""

__version__ = "0.1.0"

"""tongate - HTTP gateway to a single TON smart contract."""

__version__ = "0.1.0"

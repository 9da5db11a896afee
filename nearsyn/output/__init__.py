"""JSON output"""

from .json_formatter import ContractJSONFormatter

__all__ = ["ContractJSONFormatter"]

"""Utility functions for bizledger."""

from bizledger.utils.date_parser import parse_date
from bizledger.utils.amount_parser import parse_amount
from bizledger.utils.money import format_currency, percent_change

__all__ = ["parse_date", "parse_amount", "format_currency", "percent_change"]

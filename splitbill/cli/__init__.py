"""Unified command-line interface for splitbill.

Usage:
    splitbill parse <image>
    splitbill split <bill.json> [--currency] [--json]
    splitbill serve [--host] [--port]
"""

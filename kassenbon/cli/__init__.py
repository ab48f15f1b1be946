"""Unified command-line interface for kassenbon.

Usage:
    kassenbon parse <file|->
    kassenbon parse <file> --json --vendor Lidl
    kassenbon categorize <name>...
    kassenbon vendors
    kassenbon serve [--host] [--port]
"""

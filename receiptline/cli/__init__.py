"""Unified command-line interface for receiptline.

Usage:
    receiptline scan <image>
    receiptline import <ocr.json>
    receiptline add <lines.txt>
    receiptline list
    receiptline show <id> --all-lines
    receiptline edit <id> --total 9.99
    receiptline serve [--port]
"""

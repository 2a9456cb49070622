"""
Command-line interface for peptidescope.

Usage patterns:
    peptidescope profile sequences... -f peptides.fasta --scores predictions.json
    peptidescope consensus --xgboost 80 --neural-network 90
    peptidescope tables
"""

from .main import cli, main

__all__ = ["cli", "main"]

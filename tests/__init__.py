"""
peptidescope test suite.

Tests are organized by module:
- test_models: Pydantic records and the absent-vs-zero score distinction
- test_sequence: FASTA parsing, validation, composition
- test_properties: Residue tables, charge model, pI solver, profiler
- test_consensus: Consensus scorer and prediction payload mapping
- test_analysis: Filtering and group summaries
- test_cli: Command-line interface
"""

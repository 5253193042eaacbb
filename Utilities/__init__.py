"""
Utilities package for SymCurve.

Contains utility modules for:
- Configuration (config/)
- Core functionality (core/)
- FASTA reading (sequence_io.py)
- N-free segment splitting (sequence_splitter.py)
- bedGraph track output (track_writer.py)
- Record/worker orchestration (curvature_runner.py)
- Command line interface (cli.py)
"""

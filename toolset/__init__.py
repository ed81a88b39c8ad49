"""
Output and reporting layer for the FrameworkBenchmarks toolset.

This package contains the pieces that talk to the operator during a run and
record what happened. It includes modules for:
- Dual-sink logging (colored console output plus a plain-text transcript).
- Verification summaries grouped by framework.
- Resolving the FrameworkBenchmarks directory and per-run results directory.
- Listing frameworks and tests from benchmark configuration files.
"""

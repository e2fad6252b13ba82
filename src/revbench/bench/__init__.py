"""Benchmarking pipeline for revbench.

Builds (or reuses) one artifact per revision, runs every workload
against every artifact, and summarizes the timing samples each run
prints on standard output.
"""

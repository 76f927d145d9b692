"""Runnable verification suites against a live agent platform."""

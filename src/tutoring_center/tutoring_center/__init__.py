"""Tutoring Center backend package.

This package is organized by feature modules (students, presence, leaderboard,
payments, ...) with a thin Flask controller layer over service/repository layers.
"""

"""
Shared constants, type aliases, and helper utilities.

Centralizes the joint-limit table, kinematic link lengths, preset arm
configurations, status vocabulary, and small stateless helpers used across
the arm_sim package.
"""

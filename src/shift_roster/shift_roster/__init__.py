"""Shift Roster package.

Retail shift scheduling and payroll. Organized by feature modules (shifts,
schedules, conflicts, payroll, swaps, ...) with a thin Flask controller layer
over service/repository layers. The scheduling and payroll math is pure and
lives in `common.intervals`, `conflicts` and `payroll`.
"""

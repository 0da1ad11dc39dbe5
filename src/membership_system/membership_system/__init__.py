"""Membership System package.

This package is organized by feature modules (identity, members, attendance,
dues, expenses) with a thin Flask controller layer on top of service and
repository layers.
"""

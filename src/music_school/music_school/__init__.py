"""Music School Manager package.

This package is organized by feature modules (roster, lessons, payroll, ...)
with a thin Flask controller layer and service/repository layers on top of a
generic collection store.
"""
